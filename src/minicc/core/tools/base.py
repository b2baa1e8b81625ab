"""The tool capability every registered tool implements."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from .models import ToolExecutionResult

EMPTY_PARAMETERS: Dict[str, Any] = {"type": "object", "properties": {}}


class BaseTool(ABC):
    """
    A named local capability the model can invoke.

    Subclasses set ``name``, ``description`` and ``parameters`` (a JSON schema
    object) and implement ``execute``. ``execute`` must not raise: failures are
    returned as ``ToolExecutionResult(success=False, error=...)``.
    """

    name: str
    description: str
    parameters: Dict[str, Any] = EMPTY_PARAMETERS

    def to_model_tool(self) -> Dict[str, Any]:
        """Render the tool in the chat-completions ``tools`` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters or EMPTY_PARAMETERS,
            },
        }

    @abstractmethod
    async def execute(self, args: Dict[str, Any]) -> ToolExecutionResult:
        """Run the tool with decoded arguments."""
        ...
