import json
import os
from typing import Any, Callable, Dict, List, Sequence

import pytest
from dotenv import find_dotenv, load_dotenv
from openai import AsyncOpenAI

from minicc.core import (
    ConversationOrchestrator,
    Message,
    ModelClient,
    ModelResponse,
    SessionStore,
    ToolCall,
    ToolCallFunction,
    ToolRegistry,
)

env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)


class ScriptedModelClient(ModelClient):
    """ModelClient replaying prepared responses (or raising prepared exceptions) in order."""

    def __init__(self, responses: Sequence[Any]) -> None:
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def complete(
        self, system_prompt: str, history: Sequence[Message], tools: Sequence[Dict[str, Any]]
    ) -> ModelResponse:
        self.calls.append({"system_prompt": system_prompt, "history": list(history), "tools": list(tools)})
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def make_tool_call(call_id: str, name: str, arguments: Any = None) -> ToolCall:
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments or {})
    return ToolCall(id=call_id, function=ToolCallFunction(name=name, arguments=arguments))


@pytest.fixture
def scripted_client() -> Callable[..., ScriptedModelClient]:
    def factory(*responses: Any) -> ScriptedModelClient:
        return ScriptedModelClient(responses)

    return factory


@pytest.fixture
def tool_call() -> Callable[..., ToolCall]:
    return make_tool_call


@pytest.fixture
def session_store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "history")


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry()


@pytest.fixture
def build_orchestrator(session_store: SessionStore, registry: ToolRegistry) -> Callable[..., ConversationOrchestrator]:
    def factory(model_client: ModelClient, **kwargs: Any) -> ConversationOrchestrator:
        return ConversationOrchestrator(
            model_client=model_client, registry=registry, session_store=session_store, **kwargs
        )

    return factory


@pytest.fixture
def openai_client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        api_key = "dummy_key"
    return AsyncOpenAI(api_key=api_key, base_url=os.getenv("OPENAI_BASE_URL"))


@pytest.fixture(scope="session")
def vcr_config() -> dict[str, Any]:
    return {
        "cassette_library_dir": "tests/cassettes",
        "record_mode": os.getenv("VCR_RECORD_MODE", "none"),
        "match_on": ["method", "path", "query"],
        "filter_headers": [
            "authorization",
            "openai-organization",
            "x-api-key",
            "api-key",
        ],
        "filter_query_parameters": ["key", "api_key", "access_token"],
        "decode_compressed_response": True,
    }
