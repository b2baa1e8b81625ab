"""Expose the OpenAI chat-completions model client."""

from .core import OpenAIModelClient

__all__ = ["OpenAIModelClient"]
