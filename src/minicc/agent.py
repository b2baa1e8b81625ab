"""Wire settings, model client, tools and session store into an orchestrator."""

from typing import Iterable, Optional

from openai import AsyncOpenAI

from .core import AgentSettings, ConversationOrchestrator, SessionStore, ToolRegistry
from .core.logger import get_logger
from .core.tools.registry import ToolLike
from .llm_impl import OpenAIModelClient

logger = get_logger(__name__)


def create_orchestrator(
    settings: AgentSettings,
    tools: Optional[Iterable[ToolLike]] = None,
    register_builtin: bool = True,
    client: Optional[AsyncOpenAI] = None,
) -> ConversationOrchestrator:
    """Build a ready-to-use orchestrator.

    Args:
        settings: Backend, storage and loop configuration.
        tools: Extra tools registered after the built-in ones (same names replace them).
        register_builtin: Register the built-in file, shell and search tools.
        client: Pre-built ``AsyncOpenAI`` client; created from ``settings`` when omitted.

    Returns:
        The configured orchestrator.
    """
    if client is None:
        client = AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url, max_retries=settings.max_retries)

    registry = ToolRegistry(tool_timeout=settings.tool_timeout, register_builtin=register_builtin)
    for tool in tools or []:
        registry.register(tool)

    logger.debug("Creating orchestrator for model '%s' with tools: %s", settings.model, registry.names)
    return ConversationOrchestrator(
        model_client=OpenAIModelClient(
            client=client,
            model_name=settings.model,
            temp=settings.temperature,
            max_tokens=settings.max_tokens,
        ),
        registry=registry,
        session_store=SessionStore(settings.history_dir),
        system_prompt=settings.system_prompt,
        max_steps=settings.max_steps,
    )
