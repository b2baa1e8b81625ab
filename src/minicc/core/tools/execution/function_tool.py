"""Adapter turning plain Python callables into tools."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from ...exceptions import ToolExecutionError
from ...logger import get_logger
from ..base import EMPTY_PARAMETERS, BaseTool
from ..models import ToolDefinition, ToolExecutionResult
from ..schema import FunctionSchemaBuilder

logger = get_logger(__name__)


class FunctionTool(BaseTool):
    """A tool backed by a sync or async Python function.

    Arguments are validated against the definition's ``args_model`` when there
    is one, sync functions run in a worker thread, and every call is bounded by
    ``timeout`` seconds. Return values become ``data`` of a successful result;
    raised exceptions become failed results.
    """

    # Errors expected from tool code; anything else is logged with a traceback.
    RECOVERABLE_ERRORS = (
        ToolExecutionError,
        FileNotFoundError,
        FileExistsError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
        UnicodeDecodeError,
        ValueError,
        TypeError,
    )

    def __init__(self, definition: ToolDefinition, timeout: float = 180.0) -> None:
        """Wrap a tool definition.

        Args:
            definition: Name, description, schema and callable of the tool.
            timeout: Maximum seconds a single call may take.
        """
        self.definition = definition
        self.name = definition.name
        self.description = definition.description
        self.parameters = definition.parameters or EMPTY_PARAMETERS
        self.timeout = timeout

    @classmethod
    def from_function(
        cls,
        func: Callable[..., Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
        timeout: float = 180.0,
    ) -> FunctionTool:
        """Generate the definition of ``func`` from its signature and docstring.

        Args:
            func: The callable implementing the tool.
            name: Optional name override, defaults to ``func.__name__``.
            description: Optional description override, defaults to the docstring.
            timeout: Maximum seconds a single call may take.

        Raises:
            ToolValidationError: If the docstring or a parameter description is missing.
        """
        tool_name = name or func.__name__
        if description is None:
            description = FunctionSchemaBuilder.get_description(func, tool_name)
        parameters, args_model = FunctionSchemaBuilder.build(func, tool_name)
        definition = ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=parameters,
            args_model=args_model,
        )
        return cls(definition, timeout=timeout)

    async def execute(self, args: Dict[str, Any]) -> ToolExecutionResult:
        args_model = self.definition.args_model
        if args_model is not None:
            try:
                validated = args_model(**args)
            except ValidationError as e:
                msg = f"Argument validation failed: {e}"
                logger.warning("Validation error for '%s': %s", self.name, msg)
                return ToolExecutionResult.failure(msg)
            args = {field: getattr(validated, field) for field in type(validated).model_fields}

        try:
            result = await self._call(args)
        except self.RECOVERABLE_ERRORS as e:
            logger.warning("Recoverable error in '%s': %s (%s)", self.name, e, type(e).__name__)
            return ToolExecutionResult.failure(str(e))
        except Exception as e:
            logger.error("Tool '%s' crashed: %s", self.name, e, exc_info=True)
            return ToolExecutionResult.failure(f"{type(e).__name__}: {e}")

        if isinstance(result, ToolExecutionResult):
            return result
        return ToolExecutionResult.ok(result)

    async def _call(self, args: Dict[str, Any]) -> Any:
        """Run the wrapped function, handling async/sync and the timeout.

        Raises:
            ToolExecutionError: If execution times out.
        """
        func = self.definition.func
        try:
            if inspect.iscoroutinefunction(func):
                return await asyncio.wait_for(func(**args), timeout=self.timeout)
            return await asyncio.wait_for(asyncio.to_thread(func, **args), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ToolExecutionError(f"Tool execution timed out after {self.timeout} seconds.") from e
