"""Chat-assisted booking widget state.

Structured controls are chosen from the reply's slot signal and option lists,
never from the wording of the reply.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from portal.client.base import ApiError
from portal.client.chat import ChatApi
from portal.config import get_settings
from portal.flow.session import TokenStore
from portal.models.chat import ActionButton, ChatMessage, ChatReply, ChatRole, ChatSlot, VehicleOption

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hi! I can help you book a transfer. Where would you like to be picked up?"
)


class ControlKind(str, Enum):
    """Input control rendered under the latest assistant message."""

    vehicle_picker = "vehicle_picker"
    address_picker = "address_picker"
    date_picker = "date_picker"
    time_picker = "time_picker"
    passenger_stepper = "passenger_stepper"
    extras_picker = "extras_picker"
    contact_form = "contact_form"
    confirmation = "confirmation"


_SLOT_CONTROLS = {
    ChatSlot.vehicle: ControlKind.vehicle_picker,
    ChatSlot.address: ControlKind.address_picker,
    ChatSlot.pickup_date: ControlKind.date_picker,
    ChatSlot.pickup_time: ControlKind.time_picker,
    ChatSlot.passengers: ControlKind.passenger_stepper,
    ChatSlot.extras: ControlKind.extras_picker,
    ChatSlot.contact: ControlKind.contact_form,
    ChatSlot.confirmation: ControlKind.confirmation,
}


@dataclass
class ChatControl:
    kind: ControlKind
    vehicle_options: list[VehicleOption] = field(default_factory=list)
    address_options: list[str] = field(default_factory=list)
    actions: list[ActionButton] = field(default_factory=list)


def control_for_reply(reply: ChatReply) -> ChatControl | None:
    """Pick the control for a reply.

    Option lists win over the slot signal; a reply with neither gets plain
    text input only.
    """
    if reply.vehicle_options:
        return ChatControl(ControlKind.vehicle_picker, vehicle_options=reply.vehicle_options)
    if reply.address_options:
        return ChatControl(ControlKind.address_picker, address_options=reply.address_options)
    if reply.intent is None:
        return None
    return ChatControl(_SLOT_CONTROLS[reply.intent.slot], actions=reply.intent.actions)


class ChatWidget:
    """Transcript plus the active structured control for one chat session."""

    def __init__(self, api: ChatApi, store: TokenStore) -> None:
        self.api = api
        self.store = store
        self.session_id: str | None = None
        self.messages: list[ChatMessage] = []
        self.control: ChatControl | None = None
        self.error: str | None = None

    @property
    def is_open(self) -> bool:
        return self.session_id is not None

    def open(self) -> bool:
        """Restore the stored session or start a new one."""
        self.error = None
        stored = self.store.get()
        if stored:
            try:
                session = self.api.get_session(stored)
            except ApiError as e:
                logger.info(f"Stored chat session {stored} unavailable: {e.message}")
                self.store.clear()
            else:
                self.session_id = session.session_id
                self.messages = list(session.messages)
                return True

        try:
            session_id = self.api.create_session()
        except ApiError as e:
            self.error = e.message
            return False

        self.store.set(session_id)
        self.session_id = session_id
        self.messages = [ChatMessage(role=ChatRole.assistant, content=WELCOME_MESSAGE)]
        self.control = None
        return True

    def send(self, text: str) -> bool:
        """Send a message; on failure the transcript is untouched."""
        text = text.strip()
        if not text or self.session_id is None:
            return False

        self.error = None
        try:
            reply = self.api.send_message(self.session_id, text)
        except ApiError as e:
            logger.warning(f"Chat message failed: {e.message}")
            self.error = get_settings().chat_retry_message
            return False

        now = datetime.now(timezone.utc)
        self.messages.append(ChatMessage(role=ChatRole.user, content=text, timestamp=now))
        self.messages.append(ChatMessage(role=ChatRole.assistant, content=reply.response, timestamp=now))
        self.control = control_for_reply(reply)
        return True

    def submit_control(self, value: str) -> bool:
        """Answer the active control with its formatted value."""
        if self.control is None:
            return False
        return self.send(value)

    def reset(self) -> None:
        """Forget the session; the next open starts a new conversation."""
        self.store.clear()
        self.session_id = None
        self.messages = []
        self.control = None
        self.error = None
