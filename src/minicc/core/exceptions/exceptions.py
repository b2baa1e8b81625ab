"""
Exception hierarchy for MiniCC.

Tool-level errors (``LLMToolError`` and its subclasses) are recoverable: the
orchestrator turns them into failed tool results so the model always gets a
well-formed turn. Model, storage and configuration errors escape the loop.
"""


class MiniCCError(Exception):
    """Base exception for all MiniCC errors."""

    pass


class LLMToolError(MiniCCError):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when a tool cannot be registered."""

    pass


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised by a tool implementation when it fails."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when a tool definition or its parameters are invalid."""

    pass


class ArgumentParseError(LLMToolError):
    """Raised when the arguments of a tool call cannot be decoded."""

    pass


class ModelUnavailableError(MiniCCError):
    """Raised when the model endpoint cannot be reached or rejects the request."""

    pass


class MaxStepsExceededError(MiniCCError):
    """Raised when the model keeps requesting tools beyond the configured step limit."""

    pass


class StorageError(MiniCCError):
    """Raised when a session cannot be written to or removed from disk."""

    pass


class ConfigurationError(MiniCCError):
    """Raised when required settings are missing or invalid."""

    pass
