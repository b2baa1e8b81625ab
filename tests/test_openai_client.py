import json
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import AsyncOpenAI, OpenAIError
from openai.types.chat import ChatCompletion

from minicc.core import (
    AssistantMessage,
    ModelUnavailableError,
    SystemMessage,
    ToolCall,
    ToolCallFunction,
    ToolMessage,
    UserMessage,
)
from minicc.llm_impl import OpenAIModelClient


def make_completion(content: Optional[str] = None, tool_calls: Optional[List[Dict[str, Any]]] = None) -> ChatCompletion:
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "tool_calls" if tool_calls else "stop",
                    "message": message,
                }
            ],
        }
    )


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


def test_initialization(mock_openai_client: Any) -> None:
    model = OpenAIModelClient(client=mock_openai_client, model_name="gpt-4", temp=0.2, max_tokens=100)

    assert model.client is mock_openai_client
    assert model.model == "gpt-4"
    assert model.temperature == 0.2
    assert model.max_tokens == 100


@pytest.mark.asyncio
async def test_complete_plain_text(mock_openai_client: Any) -> None:
    mock_openai_client.chat.completions.create.return_value = make_completion("Hello")
    model = OpenAIModelClient(client=mock_openai_client, model_name="gpt-4")

    response = await model.complete("You are a helper.", [UserMessage(content="Hi")], [])

    assert response.content == "Hello"
    assert response.tool_calls == []
    assert response.is_terminal
    assert isinstance(response.raw, ChatCompletion)

    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4"
    assert kwargs["temperature"] == 0.7
    assert kwargs["max_tokens"] == 2000
    assert kwargs["messages"] == [
        {"role": "system", "content": "You are a helper."},
        {"role": "user", "content": "Hi"},
    ]
    assert "tools" not in kwargs
    assert "tool_choice" not in kwargs


@pytest.mark.asyncio
async def test_complete_sends_tools(mock_openai_client: Any) -> None:
    mock_openai_client.chat.completions.create.return_value = make_completion("ok")
    tools = [{"type": "function", "function": {"name": "ping", "description": "Ping.", "parameters": {}}}]
    model = OpenAIModelClient(client=mock_openai_client, model_name="gpt-4")

    await model.complete("sys", [UserMessage(content="Hi")], tools)

    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["tools"] == tools
    assert kwargs["tool_choice"] == "auto"


@pytest.mark.asyncio
async def test_complete_parses_tool_calls(mock_openai_client: Any) -> None:
    mock_openai_client.chat.completions.create.return_value = make_completion(
        tool_calls=[
            {"id": "call_1", "type": "function", "function": {"name": "frobnicate", "arguments": '{"x": 1}'}},
            {"id": "call_2", "type": "function", "function": {"name": "ping", "arguments": ""}},
        ]
    )
    model = OpenAIModelClient(client=mock_openai_client, model_name="gpt-4")

    response = await model.complete("sys", [UserMessage(content="go")], [])

    assert response.content is None
    assert not response.is_terminal
    assert [call.id for call in response.tool_calls] == ["call_1", "call_2"]
    assert response.tool_calls[0].function == ToolCallFunction(name="frobnicate", arguments='{"x": 1}')
    assert response.tool_calls[1].function.arguments == ""


@pytest.mark.asyncio
async def test_sdk_errors_become_model_unavailable(mock_openai_client: Any) -> None:
    mock_openai_client.chat.completions.create.side_effect = OpenAIError("connection refused")
    model = OpenAIModelClient(client=mock_openai_client, model_name="gpt-4")

    with pytest.raises(ModelUnavailableError, match="connection refused"):
        await model.complete("sys", [UserMessage(content="Hi")], [])

    assert mock_openai_client.chat.completions.create.await_count == 1


@pytest.mark.asyncio
async def test_response_without_choices(mock_openai_client: Any) -> None:
    completion = make_completion("unused")
    completion.choices = []
    mock_openai_client.chat.completions.create.return_value = completion
    model = OpenAIModelClient(client=mock_openai_client, model_name="gpt-4")

    with pytest.raises(ModelUnavailableError):
        await model.complete("sys", [UserMessage(content="Hi")], [])


def test_convert_history() -> None:
    call = ToolCall(id="call_1", function=ToolCallFunction(name="frobnicate", arguments='{"x": 1}'))
    history = [
        SystemMessage(content="extra instruction"),
        UserMessage(content="Please frobnicate"),
        AssistantMessage(tool_calls=[call]),
        ToolMessage(content='{"success": true}', tool_call_id="call_1", name="frobnicate"),
        AssistantMessage(content="Done"),
    ]

    converted = OpenAIModelClient._convert_history(history)

    assert converted == [
        {"role": "system", "content": "extra instruction"},
        {"role": "user", "content": "Please frobnicate"},
        {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {"id": "call_1", "type": "function", "function": {"name": "frobnicate", "arguments": '{"x": 1}'}}
            ],
        },
        {"role": "tool", "tool_call_id": "call_1", "content": '{"success": true}'},
        {"role": "assistant", "content": "Done"},
    ]
    assert "timestamp" not in json.dumps(converted)
