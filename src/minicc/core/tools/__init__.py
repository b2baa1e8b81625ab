from .base import BaseTool
from .models import ToolDefinition, ToolExecutionResult
from .registry import ToolRegistry
from .execution import FunctionTool
from .schema import SchemaValidator, FunctionSchemaBuilder

__all__ = [
    "BaseTool",
    "ToolDefinition",
    "ToolExecutionResult",
    "ToolRegistry",
    "FunctionTool",
    "SchemaValidator",
    "FunctionSchemaBuilder",
]
