"""The conversation orchestrator and its default prompt."""

from .orchestrator import ConversationOrchestrator, DEFAULT_SYSTEM_PROMPT

__all__ = ["ConversationOrchestrator", "DEFAULT_SYSTEM_PROMPT"]
