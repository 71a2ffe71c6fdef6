from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from backend.config import settings
from backend.models.chat import Message


class ChatRequestError(RuntimeError):
    """The bridge answered with a non-2xx status or an unreadable body."""


def render_message(message: Message) -> str:
    """Plain-text rendering of a transcript entry for terminal output."""
    if message.query:
        return f"{message.explanation or ''}\n\n```sql\n{message.query}\n```".lstrip()
    return message.content


class ChatClient:
    """Python counterpart of the browser chat page.

    Holds the transcript in memory and re-sends it as history on every turn.
    Only one request may be in flight; sends made while awaiting a response
    are ignored.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._http = http_client or httpx.Client(
            base_url=base_url or settings.chat_api_url, timeout=None
        )
        self.messages: List[Message] = []
        self.awaiting_response = False

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def serialize_history(self) -> List[Dict[str, Any]]:
        return [m.to_history_entry().model_dump() for m in self.messages]

    def send(self, text: str) -> Optional[Message]:
        """Send one user turn and append the assistant reply to the transcript.

        Returns the appended assistant entry, or None when the send was a no-op.
        """
        if not text.strip() or self.awaiting_response:
            return None

        history = self.serialize_history()
        self.messages.append(Message(role="user", content=text))
        self.awaiting_response = True
        try:
            reply = self._request(text, history)
        except (httpx.HTTPError, ChatRequestError) as exc:
            reply = Message(role="assistant", content=f"Error: {exc}")
        finally:
            self.awaiting_response = False

        self.messages.append(reply)
        return reply

    def _request(self, text: str, history: List[Dict[str, Any]]) -> Message:
        response = self._http.post("/api/chat", json={"message": text, "history": history})
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        if response.is_error:
            raise ChatRequestError(data.get("error") or "Failed to get response")
        try:
            return Message(
                role="assistant",
                content=data["message"],
                query=data.get("query"),
                explanation=data.get("explanation"),
            )
        except (KeyError, ValidationError) as exc:
            raise ChatRequestError("Invalid response from server") from exc
