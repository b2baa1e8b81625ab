"""Export the exception hierarchy used across tools, sessions and the model client."""

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

__all__ = [
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
]
