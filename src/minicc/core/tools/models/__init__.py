"""Tool-related data models."""

from .models import ToolDefinition, ToolExecutionResult

__all__ = ["ToolDefinition", "ToolExecutionResult"]
