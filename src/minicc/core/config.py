"""Runtime settings for the agent, read from the environment."""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4"
SYSTEM_PROMPT_FILE = Path(".minicc") / "system_prompt.md"


class AgentSettings(BaseModel):
    """
    Configuration of the model backend, the session store and the loop.

    Attributes:
        api_key: API key of the OpenAI-compatible endpoint.
        base_url: Endpoint base URL.
        model: Model identifier.
        temperature: Sampling temperature, between 0 and 2.
        max_tokens: Maximum tokens per completion.
        max_retries: Retries performed by the OpenAI client itself.
        history_dir: Directory holding session files.
        max_steps: Maximum model calls per chat turn.
        tool_timeout: Timeout in seconds for function-backed tools.
        system_prompt: Optional system prompt override.
    """

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int = Field(default=2000, ge=10)
    max_retries: int = Field(default=2, ge=0)
    history_dir: Path = Path(".history")
    max_steps: int = Field(default=25, ge=1)
    tool_timeout: float = Field(default=180.0, gt=0)
    system_prompt: Optional[str] = None

    @classmethod
    def from_env(cls, prompt_file: Path = SYSTEM_PROMPT_FILE) -> "AgentSettings":
        """Build settings from the environment, loading a ``.env`` file first if one is found.

        Args:
            prompt_file: File whose content overrides the default system prompt, if it exists.

        Raises:
            ConfigurationError: If no API key is set or a value is invalid.
        """
        env_file = find_dotenv(usecwd=True)
        if env_file:
            logger.debug("Loading environment from '%s'.", env_file)
            load_dotenv(env_file)

        api_key = os.getenv("OPENAI_API_KEY") or os.getenv("SILICONFLOW_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY environment variable is required "
                "(optionally OPENAI_BASE_URL and MODEL as well)."
            )

        values = {
            "api_key": api_key,
            "base_url": os.getenv("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
            "model": os.getenv("MODEL") or DEFAULT_MODEL,
        }
        if os.getenv("MINICC_HISTORY_DIR"):
            values["history_dir"] = os.environ["MINICC_HISTORY_DIR"]
        if os.getenv("MINICC_MAX_STEPS"):
            values["max_steps"] = os.environ["MINICC_MAX_STEPS"]

        if prompt_file.is_file():
            values["system_prompt"] = prompt_file.read_text(encoding="utf-8").strip() or None
            logger.info("Loaded system prompt from '%s'.", prompt_file)

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
