"""Tests for corporate session init and teardown."""

from typing import Any

import httpx
import pytest

from portal.client.base import PortalApiClient
from portal.client.corporate import CorporateApi
from portal.flow.session import CorporateSession, FlowContext, InMemoryTokenStore, SessionContext
from portal.models.corporate import PaymentTerms

COMPANY = {"company": {"companyName": "ACME Corp", "paymentTerms": "net30"}}


def _session(api_client: PortalApiClient, token: str | None = None) -> CorporateSession:
    return CorporateSession(CorporateApi(api_client), InMemoryTokenStore(token))


def test_no_stored_token_is_anonymous(api_stub: Any, api_client: PortalApiClient) -> None:
    session = _session(api_client)

    context = session.initialize()

    assert not context.is_authenticated
    assert api_stub.calls == []


def test_valid_stored_token(
    api_stub: Any, api_client: PortalApiClient, corporate_user_payload: dict[str, Any]
) -> None:
    api_stub.json("GET", "/v2/corporate/auth/session", {"valid": True, "user": corporate_user_payload})
    api_stub.json("GET", "/v2/corporate/company", COMPANY)
    session = _session(api_client, "sess-1")

    context = session.initialize()

    assert context.is_authenticated
    assert context.payment_terms == PaymentTerms.net30
    request = api_stub.calls_to("GET", "/v2/corporate/auth/session")[0]
    assert request.headers["Authorization"] == "Bearer sess-1"

    flow_context = context.flow_context()
    assert flow_context.is_corporate
    assert flow_context.account_id == "corp-42"
    assert flow_context.company_name == "ACME Corp"


def test_rejected_token_is_cleared(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("GET", "/v2/corporate/auth/session", {"error": "Session expired"}, status=401)
    session = _session(api_client, "sess-old")

    context = session.initialize()

    assert not context.is_authenticated
    assert session.store.get() is None
    assert api_client.auth_token is None


def test_unreachable_session_service_keeps_token(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.add("GET", "/v2/corporate/auth/session", httpx.Response(503))
    session = _session(api_client, "sess-1")

    context = session.initialize()

    assert not context.is_authenticated
    assert session.store.get() == "sess-1"
    assert session.error == "Session check failed"


def test_password_login(
    api_stub: Any, api_client: PortalApiClient, corporate_user_payload: dict[str, Any]
) -> None:
    api_stub.json(
        "POST",
        "/v2/corporate/auth/login",
        {"success": True, "token": "sess-new", "user": corporate_user_payload},
    )
    api_stub.json("GET", "/v2/corporate/company", COMPANY)
    session = _session(api_client)

    assert session.login("booker@acme.example", "s3cret")

    assert session.store.get() == "sess-new"
    assert session.context.is_authenticated
    assert api_stub.calls_to("GET", "/v2/corporate/company")[0].headers["Authorization"] == "Bearer sess-new"


def test_failed_login_reports_server_message(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/corporate/auth/login", {"error": "Invalid email or password"}, status=401)
    session = _session(api_client)

    assert not session.login("booker@acme.example", "wrong")

    assert session.error == "Invalid email or password"
    assert session.store.get() is None


def test_set_password_mismatch_sends_nothing(api_stub: Any, api_client: PortalApiClient) -> None:
    session = _session(api_client)

    assert not session.set_password("link-tok", "abc12345", "abc12346")

    assert session.error == "Passwords do not match"
    assert api_stub.calls == []


def test_logout_clears_even_when_server_fails(
    api_stub: Any, api_client: PortalApiClient, corporate_user_payload: dict[str, Any]
) -> None:
    api_stub.json("GET", "/v2/corporate/auth/session", {"valid": True, "user": corporate_user_payload})
    api_stub.json("GET", "/v2/corporate/company", COMPANY)
    api_stub.add("POST", "/v2/corporate/auth/logout", httpx.Response(500))
    session = _session(api_client, "sess-1")
    session.initialize()

    session.logout()

    assert session.store.get() is None
    assert api_client.auth_token is None
    assert not session.context.is_authenticated
    assert len(api_stub.calls_to("POST", "/v2/corporate/auth/logout")) == 1


def test_flow_context_requires_session() -> None:
    with pytest.raises(ValueError):
        SessionContext().flow_context()


def test_public_context_uses_tenant(settings: Any) -> None:
    context = FlowContext.public(settings)

    assert not context.is_corporate
    assert context.account_id == "TENANT#001"
    assert context.payment_terms == PaymentTerms.immediate
