from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from backend.app import app
from backend.services import chat_bridge as bridge_module
from backend.services.chat_bridge import ChatBridge
from backend.services.llm_client import LLMClient


def text_completion(text: Optional[str]) -> SimpleNamespace:
    message = SimpleNamespace(content=text, tool_calls=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def tool_completion(name: str, arguments: str) -> SimpleNamespace:
    call = SimpleNamespace(id="call_1", type="function", function=SimpleNamespace(name=name, arguments=arguments))
    message = SimpleNamespace(content=None, tool_calls=[call])
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeCompletions:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.result: Any = text_completion("")
        self.error: Optional[Exception] = None

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


class FakeOpenAI:
    """Stands in for openai.OpenAI; only chat.completions.create is used."""

    def __init__(self) -> None:
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def llm(fake_openai: FakeOpenAI) -> LLMClient:
    return LLMClient(client=fake_openai)


@pytest.fixture
def api(llm: LLMClient, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(bridge_module, "chat_bridge", ChatBridge(llm))
    return TestClient(app)
