"""Tool execution adapters."""

from .function_tool import FunctionTool

__all__ = ["FunctionTool"]
