"""Expose the role-tagged message models shared by the store, orchestrator and model client."""

from .models import (
    BaseMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    ToolCall,
    ToolCallFunction,
    Message,
    message_list_adapter,
    utcnow,
)

__all__ = [
    "BaseMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "ToolCall",
    "ToolCallFunction",
    "Message",
    "message_list_adapter",
    "utcnow",
]
