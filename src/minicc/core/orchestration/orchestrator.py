"""The conversation loop: model turn, tool execution, repeat until a final answer."""

from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional, Tuple

from ..base import ModelClient
from ..exceptions import ArgumentParseError, LLMToolError, MaxStepsExceededError
from ..logger import get_logger
from ..messages import AssistantMessage, ToolCall, ToolMessage, UserMessage
from ..sessions import Session, SessionStore
from ..tools import ToolExecutionResult, ToolRegistry

logger = get_logger(__name__)

DEFAULT_SYSTEM_PROMPT = """You are MiniCC, an AI programming assistant working in the user's terminal.

Your capabilities include:
1. Reading and writing files
2. Editing files (find/replace, insert, delete lines)
3. Executing shell commands
4. Searching through code
5. Listing directory contents

You should:
- Be helpful and concise
- Use tools when needed to accomplish tasks
- Provide clear explanations
- Ask for clarification when needed

Available tools:
- file_read: Read file contents
- file_write: Write entire file (overwrites or appends)
- file_edit: Edit file by replacing specific content
- file_insert: Insert content at a specific line
- file_delete_lines: Delete specific lines from a file
- file_list: List directory contents
- shell_execute: Execute shell commands
- code_search: Search for patterns in code"""

ERROR_REPLY_TEMPLATE = "Sorry, an error occurred while processing your request: {error}\nPlease try again later."


class ConversationOrchestrator:
    """Runs chat turns against a session, executing requested tools in between.

    Each step re-renders the whole persisted history, so a crash loses at most
    the step in flight and a resumed session sees the same context. Tool calls
    of one turn run sequentially in the order the model issued them. Tool
    failures of any kind are handed back to the model as failed results; model
    and storage failures end the turn and are re-raised after the session has
    recorded them.
    """

    def __init__(
        self,
        *,
        model_client: ModelClient,
        registry: ToolRegistry,
        session_store: SessionStore,
        system_prompt: Optional[str] = None,
        max_steps: int = 25,
        argument_error_formatter: Optional[Callable[[str, Exception], str]] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            model_client: Client for the chat model.
            registry: Tools advertised to and executed for the model.
            session_store: Persistence for conversation logs.
            system_prompt: Overrides the default system prompt for every turn.
            max_steps: Maximum number of model calls within one ``chat`` call.
            argument_error_formatter: Optional formatter for argument parsing errors.
        """
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1.")

        self.model_client = model_client
        self.registry = registry
        self.sessions = session_store
        self.system_prompt = system_prompt or DEFAULT_SYSTEM_PROMPT
        self.max_steps = max_steps
        self._argument_error_formatter = argument_error_formatter or self._default_argument_error
        # session id -> (lock, number of chat calls holding or awaiting it)
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}

    async def chat(self, session_id: str, user_text: str) -> str:
        """
        Run one conversational turn.

        Loads (or creates) the session, appends the user's text when non-empty,
        and loops until the model answers without requesting tools.

        Args:
            session_id: Session to continue or create.
            user_text: The user's message; an empty string just resumes the loop.

        Returns:
            The model's final text.

        Raises:
            ModelUnavailableError: If the model endpoint fails.
            MaxStepsExceededError: If the model keeps requesting tools past ``max_steps``.
            StorageError: If the session cannot be saved.
        """
        async with self._session_lock(session_id):
            session = self._load_or_create(session_id)

            if user_text:
                session.messages.append(UserMessage(content=user_text))

            try:
                return await self._run_steps(session)
            except Exception as exc:
                logger.error("Chat turn failed for session '%s': %s", session_id, exc)
                session.messages.append(AssistantMessage(content=ERROR_REPLY_TEMPLATE.format(error=exc)))
                self.sessions.save(session)
                raise

    async def _run_steps(self, session: Session) -> str:
        for step in range(1, self.max_steps + 1):
            response = await self.model_client.complete(
                self.system_prompt,
                session.messages,
                self.registry.list_as_model_tools(),
            )

            if response.is_terminal:
                text = response.content or ""
                session.messages.append(AssistantMessage(content=text))
                self.sessions.save(session)
                logger.debug("Session '%s' finished after %d step(s).", session.id, step)
                return text

            logger.info(
                "Step %d/%d: processing %d tool call(s).", step, self.max_steps, len(response.tool_calls)
            )
            session.messages.append(AssistantMessage(content=response.content, tool_calls=response.tool_calls))

            for call in response.tool_calls:
                result = await self._execute_tool_call(call)
                session.messages.append(
                    ToolMessage(
                        content=result.to_message_content(),
                        tool_call_id=call.id,
                        name=call.function.name,
                    )
                )

            self.sessions.save(session)

        msg = f"Stopped after {self.max_steps} model steps without a final answer."
        logger.warning(msg)
        raise MaxStepsExceededError(msg)

    async def _execute_tool_call(self, call: ToolCall) -> ToolExecutionResult:
        """Decode, dispatch and run one tool call; never raises for tool-level faults."""
        name = call.function.name
        logger.debug("Handling tool call: %s (ID: %s)", name, call.id)

        try:
            args = self._normalize_function_args(name, call.function.arguments)
        except ArgumentParseError as exc:
            logger.warning("Argument parsing failed for '%s': %s", name, exc)
            return ToolExecutionResult.failure(str(exc))

        try:
            return await self.registry.execute(name, args)
        except LLMToolError as exc:
            logger.warning("Tool call '%s' failed: %s", name, exc)
            return ToolExecutionResult.failure(str(exc))
        except Exception as exc:
            logger.error("Tool '%s' broke its execute contract: %s", name, exc, exc_info=True)
            return ToolExecutionResult.failure(f"{type(exc).__name__}: {exc}")

    def _normalize_function_args(self, tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Decode the JSON argument string of a tool call into a dictionary.

        Raises:
            ArgumentParseError: If the arguments are not a JSON object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        try:
            parsed = json.loads(raw_args)
        except (json.JSONDecodeError, TypeError) as exc:
            raise ArgumentParseError(self._argument_error_formatter(tool_name, exc)) from exc

        if parsed is None:
            return {}

        if not isinstance(parsed, dict):
            error = ValueError("Function arguments must decode to a JSON object.")
            raise ArgumentParseError(self._argument_error_formatter(tool_name, error))

        return parsed

    def _load_or_create(self, session_id: str) -> Session:
        session = self.sessions.get(session_id)
        if session is None:
            session = self.sessions.create(session_id)
        return session

    @asynccontextmanager
    async def _session_lock(self, session_id: str) -> AsyncIterator[None]:
        """Hold the session's lock; the entry is dropped once no call uses it."""
        lock, users = self._locks.get(session_id, (asyncio.Lock(), 0))
        self._locks[session_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[session_id]
            if users == 1:
                del self._locks[session_id]
            else:
                self._locks[session_id] = (lock, users - 1)

    @staticmethod
    def _default_argument_error(tool_name: str, error: Exception) -> str:
        return f"Failed to parse arguments for tool '{tool_name}': {error}"
