from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union

import orjson

from backend.config import settings
from backend.models.chat import HistoryEntry
from backend.services.tools import SQL_GENERATOR_TOOL, SQL_TOOL_NAME
from backend.utils.logger import logger


class LLMUnavailableError(RuntimeError):
    """Raised when no provider credential is configured."""


class ToolArgumentsError(ValueError):
    """Raised when a tool call carries arguments we cannot use."""


@dataclass(frozen=True)
class TextReply:
    text: str


@dataclass(frozen=True)
class ToolReply:
    query: str
    explanation: str


ModelReply = Union[TextReply, ToolReply]

# History roles on the wire -> chat completion roles
_ROLE_MAP = {"user": "user", "model": "assistant"}


class LLMClient:
    """OpenAI chat wrapper that exposes the single SQL-generation tool.

    The underlying client is created once and reused for every request.
    Retries are disabled; a failed call surfaces to the caller as-is.
    """

    def __init__(self, client: Any = None) -> None:
        if client is not None:
            self._client = client
        elif not settings.openai_api_key:
            self._client = None
            logger.warning("OPENAI_API_KEY not set. Chat requests will fail.")
        else:
            try:
                from openai import OpenAI

                self._client = OpenAI(
                    api_key=settings.openai_api_key,
                    timeout=settings.openai_timeout,
                    max_retries=0,
                )
            except Exception as exc:  # noqa: BLE001
                logger.error("Failed to initialize OpenAI client: %s", exc)
                self._client = None

    def is_available(self) -> bool:
        return self._client is not None

    def _build_messages(self, message: str, history: List[HistoryEntry]) -> List[Dict[str, str]]:
        messages = [
            {"role": _ROLE_MAP[entry.role], "content": entry.text()} for entry in history
        ]
        messages.append({"role": "user", "content": message})
        return messages

    def _parse_tool_arguments(self, raw: str | None) -> ToolReply:
        try:
            args = orjson.loads(raw or "{}")
        except orjson.JSONDecodeError as exc:
            raise ToolArgumentsError(f"Malformed {SQL_TOOL_NAME} arguments: {exc}") from exc

        if not isinstance(args, dict):
            raise ToolArgumentsError(f"{SQL_TOOL_NAME} arguments must be a JSON object")

        query = args.get("query")
        explanation = args.get("explanation")
        if not isinstance(query, str) or not isinstance(explanation, str):
            raise ToolArgumentsError(
                f"{SQL_TOOL_NAME} requires string 'query' and 'explanation' arguments"
            )
        return ToolReply(query=query, explanation=explanation)

    def send(self, message: str, history: List[HistoryEntry]) -> ModelReply:
        """Replay `history`, submit `message` and classify the model's reply."""
        if not self._client:
            raise LLMUnavailableError("LLM is not available. Set OPENAI_API_KEY in environment.")

        completion = self._client.chat.completions.create(
            model=settings.openai_model,
            messages=self._build_messages(message, history),
            tools=[SQL_GENERATOR_TOOL],
            tool_choice="auto",
        )
        reply = completion.choices[0].message

        tool_calls = getattr(reply, "tool_calls", None) or []
        if tool_calls and tool_calls[0].function.name == SQL_TOOL_NAME:
            return self._parse_tool_arguments(tool_calls[0].function.arguments)

        return TextReply(text=reply.content or "")


llm_client = LLMClient()
