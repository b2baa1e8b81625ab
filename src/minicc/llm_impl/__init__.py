"""Concrete model backends."""

from .openai_api import OpenAIModelClient

__all__ = ["OpenAIModelClient"]
