"""MiniCC - a tool-calling conversation engine with persistent sessions."""

from .core import (
    AgentSettings,
    AssistantMessage,
    BaseTool,
    ConversationOrchestrator,
    ModelClient,
    ModelResponse,
    Session,
    SessionStore,
    SystemMessage,
    ToolDefinition,
    ToolExecutionResult,
    ToolMessage,
    ToolRegistry,
    UserMessage,
)
from .llm_impl import OpenAIModelClient
from .agent import create_orchestrator

__all__ = [
    "AgentSettings",
    "AssistantMessage",
    "BaseTool",
    "ConversationOrchestrator",
    "ModelClient",
    "ModelResponse",
    "Session",
    "SessionStore",
    "SystemMessage",
    "ToolDefinition",
    "ToolExecutionResult",
    "ToolMessage",
    "ToolRegistry",
    "UserMessage",
    "OpenAIModelClient",
    "create_orchestrator",
]
