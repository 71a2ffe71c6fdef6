from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class HistoryPart(BaseModel):
    text: str


class HistoryEntry(BaseModel):
    role: Literal["user", "model"]
    parts: List[HistoryPart] = Field(default_factory=list)

    def text(self) -> str:
        return "".join(part.text for part in self.parts)


class ChatRequest(BaseModel):
    message: str = Field(..., description="Latest user message in natural language")
    history: List[HistoryEntry] = Field(
        default_factory=list, description="Prior turns, oldest first, excluding `message`"
    )


class TextResponse(BaseModel):
    type: Literal["text"] = "text"
    message: str


class SqlGeneratedResponse(BaseModel):
    type: Literal["sql_generated"] = "sql_generated"
    query: str
    explanation: str
    message: str


ChatResponse = Union[TextResponse, SqlGeneratedResponse]


class ErrorResponse(BaseModel):
    error: str


class Message(BaseModel):
    """One transcript entry as held by a chat client."""

    role: Literal["user", "assistant"]
    content: str
    query: Optional[str] = None
    explanation: Optional[str] = None

    def to_history_entry(self) -> HistoryEntry:
        return HistoryEntry(
            role="user" if self.role == "user" else "model",
            parts=[HistoryPart(text=self.content)],
        )
