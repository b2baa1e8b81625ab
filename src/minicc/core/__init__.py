"""Public exports for the core abstractions: messages, sessions, tools, model client and the loop."""

from .base import ModelClient, ModelResponse
from .config import AgentSettings
from .exceptions import (
    MiniCCError,
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    ArgumentParseError,
    ModelUnavailableError,
    MaxStepsExceededError,
    StorageError,
    ConfigurationError,
)
from .logger import get_logger, setup_logging
from .messages import (
    BaseMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    ToolCall,
    ToolCallFunction,
    Message,
)
from .orchestration import ConversationOrchestrator, DEFAULT_SYSTEM_PROMPT
from .sessions import Session, SessionSummary, SessionStore
from .tools import BaseTool, FunctionTool, ToolDefinition, ToolExecutionResult, ToolRegistry

__all__ = [
    "ModelClient",
    "ModelResponse",
    "AgentSettings",
    "MiniCCError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "ArgumentParseError",
    "ModelUnavailableError",
    "MaxStepsExceededError",
    "StorageError",
    "ConfigurationError",
    "get_logger",
    "setup_logging",
    "BaseMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "ToolCall",
    "ToolCallFunction",
    "Message",
    "ConversationOrchestrator",
    "DEFAULT_SYSTEM_PROMPT",
    "Session",
    "SessionSummary",
    "SessionStore",
    "BaseTool",
    "FunctionTool",
    "ToolDefinition",
    "ToolExecutionResult",
    "ToolRegistry",
]
