"""Re-export the model client interface and its response model."""

from .base import ModelClient, ModelResponse

__all__ = ["ModelClient", "ModelResponse"]
