from __future__ import annotations

from typing import List, Optional

from backend.models.chat import ChatResponse, HistoryEntry, SqlGeneratedResponse, TextResponse
from backend.services.llm_client import LLMClient, TextReply, ToolReply, llm_client
from backend.utils.logger import logger


def format_sql_message(query: str, explanation: str) -> str:
    return f"Here's the SQL query:\n\n```sql\n{query}\n```\n\n**Explanation:** {explanation}"


class ChatBridge:
    """Turns one chat turn into a normalized bridge response."""

    def __init__(self, llm: Optional[LLMClient] = None) -> None:
        self._llm = llm or llm_client

    def answer(self, message: str, history: List[HistoryEntry]) -> ChatResponse:
        reply = self._llm.send(message, history)

        if isinstance(reply, ToolReply):
            logger.info("Generated SQL: %s", reply.query)
            return SqlGeneratedResponse(
                query=reply.query,
                explanation=reply.explanation,
                message=format_sql_message(reply.query, reply.explanation),
            )
        if isinstance(reply, TextReply):
            return TextResponse(message=reply.text)
        raise TypeError(f"Unexpected model reply: {reply!r}")


chat_bridge = ChatBridge()
