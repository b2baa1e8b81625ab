"""Provider-agnostic message models for the conversation log.

Each role is its own model and ``Message`` is a union discriminated on
``role``, so a tool result without a correlation id or an empty assistant
turn cannot be constructed.
"""

from abc import ABC
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class ToolCallFunction(BaseModel):
    """Function name and JSON-encoded argument string of a tool call."""

    name: str
    arguments: str = ""


class ToolCall(BaseModel):
    """A tool-call request issued by the model, kept in the provider's wire shape.

    Attributes:
        id: Correlation id the tool result has to echo back.
        type: Always ``"function"``.
        function: Name and raw JSON arguments of the call.
    """

    id: str
    type: Literal["function"] = "function"
    function: ToolCallFunction


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with the model.

    Attributes:
        role: Role associated with the message.
        timestamp: Creation time of the message.
    """

    role: str
    timestamp: datetime = Field(default_factory=utcnow)


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseMessage):
    """Message authored by the assistant, optionally carrying tool calls."""

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None

    @field_validator("tool_calls")
    @classmethod
    def _empty_calls_to_none(cls, value: Optional[List[ToolCall]]) -> Optional[List[ToolCall]]:
        return value or None

    @model_validator(mode="after")
    def _require_content_or_calls(self) -> "AssistantMessage":
        if self.content is None and not self.tool_calls:
            raise ValueError("An assistant message needs either content or tool calls.")
        return self


class ToolMessage(BaseMessage):
    """Result of a tool invocation, correlated to the call it answers."""

    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str = Field(min_length=1)
    name: Optional[str] = None


Message = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]

message_list_adapter: TypeAdapter[List[Message]] = TypeAdapter(List[Message])
