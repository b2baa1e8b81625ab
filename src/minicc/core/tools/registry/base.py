"""Name-keyed registry of the tools advertised to the model."""

from typing import Any, Callable, Dict, List, Optional, Union

from ...exceptions import ToolExecutionError, ToolNotFoundError, ToolRegistrationError
from ...logger import get_logger
from ..base import BaseTool
from ..execution import FunctionTool
from ..models import ToolDefinition, ToolExecutionResult

logger = get_logger(__name__)

ToolLike = Union[BaseTool, ToolDefinition, Callable[..., Any]]


class ToolRegistry:
    """
    A central registry to manage and dispatch the available tools.

    Tools are keyed by name. Registering a name twice replaces the earlier
    tool, and the change is visible on the next model request.
    """

    def __init__(self, tool_timeout: float = 180.0, register_builtin: bool = False) -> None:
        """Initialize the registry.

        Args:
            tool_timeout: Timeout in seconds applied to function-backed tools.
            register_builtin: Register the built-in file, shell and search tools.
        """
        self.tools: Dict[str, BaseTool] = {}
        self.tool_timeout = tool_timeout
        if register_builtin:
            self.register_builtin_tools()

    def register(
        self,
        tool: ToolLike,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> BaseTool:
        """
        Register a tool.

        Accepts a ``BaseTool`` instance, a ``ToolDefinition``, or a plain callable
        whose definition is generated from its signature and docstring.

        Args:
            tool: The tool, definition, or function to register.
            name: Name override when registering a callable.
            description: Description override when registering a callable.

        Returns:
            The registered tool.

        Raises:
            ToolRegistrationError: If the object cannot be turned into a tool.
            ToolValidationError: If a callable lacks a docstring or parameter descriptions.
        """
        if isinstance(tool, BaseTool):
            resolved = tool
        elif isinstance(tool, ToolDefinition):
            resolved = FunctionTool(tool, timeout=self.tool_timeout)
        elif callable(tool):
            resolved = FunctionTool.from_function(tool, name=name, description=description, timeout=self.tool_timeout)
        else:
            msg = f"Cannot register object of type {type(tool).__name__} as a tool."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        if not getattr(resolved, "name", None):
            msg = "Tools must have a non-empty name."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        if resolved.name in self.tools:
            logger.warning("Tool '%s' is already registered; replacing it.", resolved.name)

        self.tools[resolved.name] = resolved
        logger.info("Registered tool: '%s'", resolved.name)
        return resolved

    def unregister(self, tool_name: str) -> None:
        """Remove a tool from the registry.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")
        del self.tools[tool_name]
        logger.info("Unregistered tool: '%s'", tool_name)

    def tool(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Decorator registering a function as a tool and returning it unchanged."""
        self.register(func)
        return func

    def get(self, name: str) -> Optional[BaseTool]:
        return self.tools.get(name)

    @property
    def names(self) -> List[str]:
        return list(self.tools)

    def list_as_model_tools(self) -> List[Dict[str, Any]]:
        """The ``tools`` field of a chat-completions request, in registration order."""
        return [tool.to_model_tool() for tool in self.tools.values()]

    async def execute(self, name: str, args: Dict[str, Any]) -> ToolExecutionResult:
        """Dispatch a call to the named tool.

        Args:
            name: Tool name requested by the model.
            args: Decoded arguments.

        Returns:
            The tool's result; tools report their own failures in it.

        Raises:
            ToolNotFoundError: If no tool with that name is registered.
        """
        tool = self.tools.get(name)
        if tool is None:
            msg = f"Tool '{name}' not found"
            logger.warning(msg)
            raise ToolNotFoundError(msg)

        logger.info("Executing tool '%s'...", name)
        result = await tool.execute(args)
        if not isinstance(result, ToolExecutionResult):
            msg = f"Tool '{name}' returned {type(result).__name__} instead of a ToolExecutionResult."
            logger.error(msg)
            raise ToolExecutionError(msg)
        logger.debug("Tool '%s' finished (success=%s).", name, result.success)
        return result

    def register_builtin_tools(self) -> None:
        """Register the built-in file, edit, shell and search tools."""
        from minicc.builtin_tools import BUILTIN_TOOLS

        for func in BUILTIN_TOOLS:
            self.register(func)
