"""Abstraction over the chat-completion endpoint used by the orchestrator."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..messages import Message, ToolCall


class ModelResponse(BaseModel):
    """Normalized result of one model round trip.

    Attributes:
        content: Text returned by the model, if any.
        tool_calls: Tool calls requested by the model, in the order issued.
        raw: Provider-specific response payload.
    """

    content: Optional[str] = None
    tool_calls: List[ToolCall] = Field(default_factory=list)
    raw: Any = None

    @property
    def is_terminal(self) -> bool:
        """A turn ends the loop only when it requests no tools, whatever its text."""
        return not self.tool_calls


class ModelClient(ABC):
    """Stateless request/response access to a chat model.

    Implementations perform exactly one request per ``complete`` call, do not
    retry beyond what their SDK does, and raise ``ModelUnavailableError`` on
    network, authentication or endpoint failures.
    """

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        history: Sequence[Message],
        tools: Sequence[Dict[str, Any]],
    ) -> ModelResponse:
        """
        Send the system prompt, the conversation history and the advertised tools.

        Args:
            system_prompt: Instruction placed before the history.
            history: Every message of the session, oldest first.
            tools: Tool advertisements in chat-completions format.

        Returns:
            The model's answer.
        """
        pass
