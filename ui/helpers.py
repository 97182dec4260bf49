"""Helpers shared by the Streamlit pages.

Nothing here imports streamlit: state is any mutable mapping (in the app,
``st.session_state``), which keeps these functions testable.
"""

from collections.abc import MutableMapping
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo

from portal.chat.widget import ChatWidget
from portal.client.base import ApiError, PortalApiClient
from portal.client.bookings import BookingApi
from portal.client.chat import ChatApi
from portal.client.corporate import CorporateApi
from portal.client.driver import DriverApi
from portal.client.quotes import QuoteApi
from portal.config import get_settings
from portal.flow.booking_flow import BookingFlow
from portal.flow.driver_session import DriverSession
from portal.flow.manage import BookingManager
from portal.flow.session import CorporateSession, FlowContext
from portal.locations import Prediction, consolidate_airport_results
from portal.models.chat import VehicleOption
from portal.models.common import Location
from portal.views.formatting import format_price

UK_TZ = ZoneInfo("Europe/London")

CLIENT_KEY = "api_client"
CORPORATE_TOKEN_KEY = "corporate_token"
CHAT_SESSION_KEY = "chat_session_id"
DRIVER_CLIENT_KEY = "driver_api_client"
DRIVER_TOKEN_KEY = "driver_token"


class SessionStateTokenStore:
    """TokenStore over one key of a mutable mapping."""

    def __init__(self, state: MutableMapping[str, Any], key: str) -> None:
        self.state = state
        self.key = key

    def get(self) -> str | None:
        value = self.state.get(self.key)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        self.state[self.key] = token

    def clear(self) -> None:
        self.state.pop(self.key, None)


def get_client(state: MutableMapping[str, Any]) -> PortalApiClient:
    """One API client per browser session."""
    if CLIENT_KEY not in state:
        state[CLIENT_KEY] = PortalApiClient(get_settings())
    client: PortalApiClient = state[CLIENT_KEY]
    return client


def get_corporate_session(state: MutableMapping[str, Any]) -> CorporateSession:
    """Corporate session, initialized once per browser session."""
    if "corporate_session" not in state:
        client = get_client(state)
        session = CorporateSession(
            CorporateApi(client), SessionStateTokenStore(state, CORPORATE_TOKEN_KEY)
        )
        session.initialize()
        state["corporate_session"] = session
    corporate: CorporateSession = state["corporate_session"]
    return corporate


def get_driver_session(state: MutableMapping[str, Any]) -> DriverSession:
    """Driver session on its own client, so its token never mixes with a corporate one."""
    if "driver_session" not in state:
        if DRIVER_CLIENT_KEY not in state:
            state[DRIVER_CLIENT_KEY] = PortalApiClient(get_settings())
        session = DriverSession(
            DriverApi(state[DRIVER_CLIENT_KEY]), SessionStateTokenStore(state, DRIVER_TOKEN_KEY)
        )
        session.initialize()
        state["driver_session"] = session
    driver: DriverSession = state["driver_session"]
    return driver


def get_flow(state: MutableMapping[str, Any], key: str, context: FlowContext) -> BookingFlow:
    """Booking flow stored under ``key``; rebuilt when the context changes."""
    flow = state.get(key)
    if not isinstance(flow, BookingFlow) or flow.context != context:
        client = get_client(state)
        flow = BookingFlow(
            context,
            QuoteApi(client),
            BookingApi(client),
            corporate=CorporateApi(client) if context.is_corporate else None,
        )
        state[key] = flow
    return flow


def get_manager(state: MutableMapping[str, Any]) -> BookingManager:
    if "booking_manager" not in state:
        state["booking_manager"] = BookingManager(BookingApi(get_client(state)))
    manager: BookingManager = state["booking_manager"]
    return manager


def get_chat_widget(state: MutableMapping[str, Any]) -> ChatWidget:
    if "chat_widget" not in state:
        state["chat_widget"] = ChatWidget(
            ChatApi(get_client(state)), SessionStateTokenStore(state, CHAT_SESSION_KEY)
        )
    widget: ChatWidget = state["chat_widget"]
    return widget


def search_locations(quotes: QuoteApi, query: str, is_dropoff: bool) -> list[Prediction]:
    """Autocomplete with airport terminals grouped; failures read as no results."""
    try:
        predictions = quotes.search_locations(query)
    except ApiError:
        return []
    return consolidate_airport_results(predictions, is_dropoff)


def resolve_location(quotes: QuoteApi, prediction: Prediction) -> Location:
    """Full location for a chosen prediction, falling back to its description."""
    try:
        location = quotes.get_place_details(prediction.place_id)
    except ApiError:
        location = Location(address=prediction.description, place_id=prediction.place_id)
    if not location.has_address:
        location = location.model_copy(update={"address": prediction.description})
    return location.model_copy(
        update={
            "place_id": location.place_id or prediction.place_id,
            "location_type": location.location_type or prediction.location_type,
        }
    )


def combine_date_time(day: date | None, at: time | None) -> datetime | None:
    """UK-local pickup timestamp from the date and time inputs."""
    if day is None or at is None:
        return None
    return datetime.combine(day, at, tzinfo=UK_TZ)


def vehicle_option_label(option: VehicleOption) -> str:
    return f"{option.label} - {format_price(option.price)} (up to {option.capacity})"


def format_passenger_answer(passengers: int, luggage: int) -> str:
    return f"{passengers} passengers, {luggage} bags"


def format_contact_answer(name: str, email: str, phone: str) -> str:
    return f"Name: {name}, Email: {email}, Phone: {phone}"


def parse_clock_time(value: str | None, default: time) -> time:
    """``HH:MM`` from the driver profile; anything unparseable falls back to ``default``."""
    if not value:
        return default
    try:
        return time.fromisoformat(value)
    except ValueError:
        return default
