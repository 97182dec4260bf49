"""Chat assistant models."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import Field

from portal.models.common import ApiModel


class ChatRole(str, Enum):
    user = "user"
    assistant = "assistant"


class VehicleOption(ApiModel):
    id: str
    label: str
    price: int = Field(..., description="Price in pence")
    capacity: int


class ActionButton(ApiModel):
    id: str
    label: str
    variant: Literal["primary", "secondary"] = "primary"


class InteractiveElement(ApiModel):
    """Rich control attached to an assistant message."""

    type: Literal["vehicle_options", "checkbox_list", "contact_form", "action_buttons"]
    options: list[dict[str, object]] = Field(default_factory=list)
    actions: list[ActionButton] = Field(default_factory=list)


class ChatMessage(ApiModel):
    role: ChatRole
    content: str
    timestamp: datetime | None = None
    interactive_element: InteractiveElement | None = None


class ChatSession(ApiModel):
    session_id: str
    channel: str = "web"
    status: str = "active"
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChatSlot(str, Enum):
    """Booking slot the assistant is asking the customer to fill."""

    vehicle = "vehicle"
    pickup_date = "pickup_date"
    pickup_time = "pickup_time"
    passengers = "passengers"
    extras = "extras"
    contact = "contact"
    address = "address"
    confirmation = "confirmation"


class ChatIntent(ApiModel):
    """Structured slot-filling signal emitted alongside the reply text."""

    slot: ChatSlot
    actions: list[ActionButton] = Field(default_factory=list)


class ChatReply(ApiModel):
    """Response of the message endpoint."""

    success: bool = True
    response: str = ""
    session_id: str
    error: str | None = None
    intent: ChatIntent | None = None
    vehicle_options: list[VehicleOption] = Field(default_factory=list)
    address_options: list[str] = Field(default_factory=list)
