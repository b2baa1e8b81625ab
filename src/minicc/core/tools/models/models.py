"""Tool definition and tool result models."""

import json
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Describes a function-backed tool.

    Attributes:
        name: The unique name of the tool.
        description: What the tool does, shown to the model.
        func: The Python callable implementing the tool.
        parameters: JSON schema of the tool's arguments.
        args_model: Optional pydantic model used to validate and coerce arguments.
    """

    name: str
    description: str
    func: Callable[..., Any]
    parameters: Optional[Dict[str, Any]] = None
    args_model: Optional[Type[BaseModel]] = None


class ToolExecutionResult(BaseModel):
    """
    Outcome of a tool execution. Its JSON form is the content of a tool message.

    Attributes:
        success: Whether the tool completed its task.
        data: Tool-specific payload, opaque to the orchestrator.
        error: Human readable failure description.
    """

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ToolExecutionResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, data: Any = None) -> "ToolExecutionResult":
        return cls(success=False, error=error, data=data)

    def to_message_content(self) -> str:
        """Serialize the result for a tool message, omitting empty fields."""
        return json.dumps(self.model_dump(exclude_none=True), ensure_ascii=False, default=str)
