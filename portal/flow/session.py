"""Corporate session context.

The stored session token is never read through module globals: pages build a
``CorporateSession`` over a ``TokenStore``, call ``initialize()`` once, and
pass the resulting ``SessionContext`` (or its ``FlowContext``) down.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from portal.client.base import ApiError
from portal.client.corporate import CorporateApi
from portal.config import Settings, get_settings
from portal.models.corporate import AuthResult, Company, CorporateUser, PaymentTerms

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Where the corporate session token lives between page loads."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryTokenStore:
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


@dataclass(frozen=True)
class FlowContext:
    """Capabilities of the booking flow instance.

    Public and corporate pages share one flow; corporate-only behaviour keys
    off ``is_corporate`` and the optional account fields.
    """

    is_corporate: bool
    account_id: str | None
    payment_terms: PaymentTerms = PaymentTerms.immediate
    user: CorporateUser | None = None
    company_name: str | None = None

    @classmethod
    def public(cls, settings: Settings | None = None) -> "FlowContext":
        settings = settings or get_settings()
        return cls(is_corporate=False, account_id=settings.tenant_id)


@dataclass
class SessionContext:
    """Authenticated corporate state for one page session."""

    token: str | None = None
    user: CorporateUser | None = None
    company: Company | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    @property
    def payment_terms(self) -> PaymentTerms:
        return self.company.payment_terms if self.company else PaymentTerms.immediate

    def flow_context(self) -> FlowContext:
        if not self.is_authenticated or self.user is None:
            raise ValueError("no authenticated corporate session")
        return FlowContext(
            is_corporate=True,
            account_id=self.user.corp_account_id,
            payment_terms=self.payment_terms,
            user=self.user,
            company_name=self.company.company_name if self.company else self.user.company_name,
        )


class CorporateSession:
    """Init/teardown rules for the corporate session.

    Init: load stored token, verify it, fetch the company, populate the context.
    Teardown: best-effort server logout, then clear the token everywhere.
    """

    def __init__(self, api: CorporateApi, store: TokenStore) -> None:
        self.api = api
        self.store = store
        self.context = SessionContext()
        self.error: str | None = None

    def initialize(self) -> SessionContext:
        token = self.store.get()
        if not token:
            self.context = SessionContext()
            return self.context

        self.api.client.set_auth_token(token)
        try:
            status = self.api.verify_session()
        except ApiError as e:
            # Keep the token: the session service may be briefly unreachable
            self.error = e.message
            self.context = SessionContext()
            return self.context

        if not status.valid or status.user is None:
            logger.info("Stored corporate session is no longer valid")
            self._clear()
            return self.context

        self.context = SessionContext(token=token, user=status.user)
        self._load_company()
        return self.context

    def _load_company(self) -> None:
        try:
            self.context.company = self.api.get_company()
        except ApiError as e:
            logger.warning(f"Failed to load company for session: {e.message}")
            self.error = e.message

    def _adopt(self, result: AuthResult) -> bool:
        if not result.success or not result.token or result.user is None:
            self.error = result.error or result.message or "Authentication failed"
            return False

        self.store.set(result.token)
        self.api.client.set_auth_token(result.token)
        self.context = SessionContext(token=result.token, user=result.user)
        self.error = None
        self._load_company()
        return True

    def login(self, email: str, password: str) -> bool:
        try:
            return self._adopt(self.api.password_login(email, password))
        except ApiError as e:
            self.error = e.message
            return False

    def verify_magic_link(self, token: str) -> bool:
        try:
            return self._adopt(self.api.verify_magic_link(token))
        except ApiError as e:
            self.error = e.message
            return False

    def set_password(self, token: str, password: str, confirm_password: str) -> bool:
        if password != confirm_password:
            self.error = "Passwords do not match"
            return False
        try:
            return self._adopt(self.api.set_password(token, password, confirm_password))
        except ApiError as e:
            self.error = e.message
            return False

    def request_magic_link(self, email: str) -> bool:
        try:
            result = self.api.request_magic_link(email)
        except ApiError as e:
            self.error = e.message
            return False
        self.error = None if result.success else (result.error or "Failed to send login link")
        return result.success

    def forgot_password(self, email: str) -> bool:
        try:
            result = self.api.forgot_password(email)
        except ApiError as e:
            self.error = e.message
            return False
        self.error = None if result.success else (result.error or "Failed to send reset link")
        return result.success

    def logout(self) -> None:
        if self.store.get():
            try:
                self.api.logout()
            except ApiError as e:
                logger.warning(f"Server logout failed: {e.message}")
        self._clear()

    def _clear(self) -> None:
        self.store.clear()
        self.api.client.clear_auth_token()
        self.context = SessionContext()
