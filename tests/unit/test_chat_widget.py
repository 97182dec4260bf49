"""Tests for the chat widget: session lifecycle and control selection."""

from typing import Any

import httpx

from portal.chat.widget import WELCOME_MESSAGE, ChatWidget, ControlKind, control_for_reply
from portal.client.base import PortalApiClient
from portal.client.chat import ChatApi
from portal.flow.session import InMemoryTokenStore
from portal.models.chat import ChatReply, ChatRole


def _widget(api_client: PortalApiClient, session_id: str | None = None) -> ChatWidget:
    return ChatWidget(ChatApi(api_client), InMemoryTokenStore(session_id))


def test_open_creates_session_with_welcome(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/chat/session", {"success": True, "sessionId": "chat-1"})
    widget = _widget(api_client)

    assert widget.open()

    assert widget.session_id == "chat-1"
    assert widget.store.get() == "chat-1"
    assert [m.content for m in widget.messages] == [WELCOME_MESSAGE]
    assert api_stub.body("POST", "/v2/chat/session") == {"channel": "web"}


def test_open_restores_stored_session(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json(
        "GET",
        "/v2/chat/session/chat-1",
        {
            "success": True,
            "session": {
                "sessionId": "chat-1",
                "messages": [
                    {"role": "assistant", "content": "Where from?"},
                    {"role": "user", "content": "Heathrow"},
                ],
            },
        },
    )
    widget = _widget(api_client, "chat-1")

    assert widget.open()

    assert len(widget.messages) == 2
    assert api_stub.calls_to("POST", "/v2/chat/session") == []


def test_open_replaces_missing_session(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("GET", "/v2/chat/session/chat-old", {"success": False, "error": "Session not found"})
    api_stub.json("POST", "/v2/chat/session", {"success": True, "sessionId": "chat-2"})
    widget = _widget(api_client, "chat-old")

    assert widget.open()

    assert widget.session_id == "chat-2"
    assert widget.store.get() == "chat-2"


def test_send_appends_both_messages(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/chat/session", {"success": True, "sessionId": "chat-1"})
    api_stub.json(
        "POST",
        "/v2/chat/message",
        {
            "success": True,
            "sessionId": "chat-1",
            "response": "Which vehicle would you like?",
            "vehicleOptions": [
                {"id": "standard", "label": "Standard Saloon", "price": 18500, "capacity": 3},
            ],
        },
    )
    widget = _widget(api_client)
    widget.open()

    assert widget.send("Heathrow T5 to Bournemouth on Wednesday")

    assert [m.role for m in widget.messages[-2:]] == [ChatRole.user, ChatRole.assistant]
    assert widget.control is not None
    assert widget.control.kind == ControlKind.vehicle_picker
    assert widget.control.vehicle_options[0].id == "standard"


def test_failed_send_leaves_transcript(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/chat/session", {"success": True, "sessionId": "chat-1"})
    api_stub.add("POST", "/v2/chat/message", httpx.Response(502))
    widget = _widget(api_client)
    widget.open()

    assert not widget.send("hello")

    assert len(widget.messages) == 1
    assert widget.error == "Sorry, I couldn't process that. Please try again."


def test_blank_message_is_not_sent(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/chat/session", {"success": True, "sessionId": "chat-1"})
    widget = _widget(api_client)
    widget.open()

    assert not widget.send("   ")
    assert api_stub.calls_to("POST", "/v2/chat/message") == []


def test_control_follows_intent_slot() -> None:
    reply = ChatReply.model_validate(
        {"sessionId": "chat-1", "response": "How many passengers?", "intent": {"slot": "passengers"}}
    )

    control = control_for_reply(reply)

    assert control is not None
    assert control.kind == ControlKind.passenger_stepper


def test_option_lists_win_over_slot() -> None:
    reply = ChatReply.model_validate(
        {
            "sessionId": "chat-1",
            "response": "Which terminal?",
            "intent": {"slot": "pickup_date"},
            "addressOptions": ["Heathrow Terminal 2", "Heathrow Terminal 5"],
        }
    )

    control = control_for_reply(reply)

    assert control is not None
    assert control.kind == ControlKind.address_picker
    assert control.address_options == ["Heathrow Terminal 2", "Heathrow Terminal 5"]


def test_reply_text_alone_never_selects_a_control() -> None:
    reply = ChatReply(session_id="chat-1", response="What date would you like to travel?")

    assert control_for_reply(reply) is None


def test_reset_forgets_session(api_stub: Any, api_client: PortalApiClient) -> None:
    api_stub.json("POST", "/v2/chat/session", {"success": True, "sessionId": "chat-1"})
    widget = _widget(api_client)
    widget.open()

    widget.reset()

    assert not widget.is_open
    assert widget.store.get() is None
    assert widget.messages == []
