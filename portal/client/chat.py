"""Chat assistant endpoints."""

from portal.client import endpoints
from portal.client.base import ApiError, PortalApiClient, parse_response
from portal.models.chat import ChatReply, ChatSession


class ChatApi:
    """Conversational booking assistant consumer."""

    def __init__(self, client: PortalApiClient) -> None:
        self.client = client

    def create_session(self) -> str:
        """Create a chat session and return its id."""
        data = self.client.request(
            "POST",
            endpoints.CHAT_SESSION,
            name="chat.session.create",
            fallback_error="Failed to create chat session",
            json={"channel": self.client.settings.chat_channel},
        )
        session_id = data.get("sessionId")
        if not data.get("success") or not isinstance(session_id, str) or not session_id:
            raise ApiError("Failed to create chat session")
        return session_id

    def get_session(self, session_id: str) -> ChatSession:
        data = self.client.request(
            "GET",
            f"{endpoints.CHAT_SESSION}/{session_id}",
            name="chat.session.get",
            fallback_error="Failed to load chat session",
        )
        if not data.get("success") or not isinstance(data.get("session"), dict):
            raise ApiError(data.get("error") or "Failed to load chat session")
        return parse_response(ChatSession, data["session"], "Failed to load chat session")

    def send_message(self, session_id: str, message: str) -> ChatReply:
        data = self.client.request(
            "POST",
            endpoints.CHAT_MESSAGE,
            name="chat.message",
            fallback_error="Failed to send message",
            json={"sessionId": session_id, "message": message},
        )
        reply = parse_response(ChatReply, data, "Failed to send message")
        if not reply.success:
            raise ApiError(reply.error or "Failed to send message")
        return reply
