from typing import Any, Dict, Iterable, List, Sequence, cast

from openai import AsyncOpenAI, OpenAIError
from openai.types.chat import ChatCompletion

from minicc.core.base import ModelClient, ModelResponse
from minicc.core.exceptions import ModelUnavailableError
from minicc.core.logger import get_logger
from minicc.core.messages import (
    AssistantMessage,
    Message,
    SystemMessage,
    ToolCall,
    ToolCallFunction,
    ToolMessage,
    UserMessage,
)

logger = get_logger(__name__)


class OpenAIModelClient(ModelClient):
    """
    ModelClient for OpenAI-compatible chat-completions endpoints.

    Performs one ``chat.completions.create`` call per ``complete``; retries are
    left to the ``AsyncOpenAI`` client's own ``max_retries``.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        temp: float = 0.7,
        max_tokens: int = 2000,
    ):
        """
        Initializes the OpenAI model client.

        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier of the model to use (e.g., 'gpt-4').
            temp: The temperature for text generation.
            max_tokens: The maximum number of tokens to generate per response.
        """
        self.client = client
        self.model = model_name
        self.temperature = temp
        self.max_tokens = max_tokens

    async def complete(
        self,
        system_prompt: str,
        history: Sequence[Message],
        tools: Sequence[Dict[str, Any]],
    ) -> ModelResponse:
        """
        Sends the system prompt, the rendered history and the tool list to the model.

        Args:
            system_prompt: Instruction sent as the leading system message.
            history: The session's messages, oldest first.
            tools: Tool advertisements; ``tools``/``tool_choice`` are omitted when empty.

        Returns:
            ModelResponse: The answer text and any tool calls.

        Raises:
            ModelUnavailableError: On connection, authentication or API errors, or an empty answer.
        """
        messages: List[Dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        messages.extend(self._convert_history(history))

        extra: Dict[str, Any] = {}
        if tools:
            extra["tools"] = list(tools)
            extra["tool_choice"] = "auto"

        logger.debug("Sending %d message(s) and %d tool(s) to model '%s'.", len(messages), len(tools), self.model)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=cast(Iterable[Any], messages),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                **extra,
            )
        except OpenAIError as e:
            msg = f"Model request failed: {e}"
            logger.error(msg)
            raise ModelUnavailableError(msg) from e

        return self._build_response(response)

    @staticmethod
    def _convert_history(history: Sequence[Message]) -> List[Dict[str, Any]]:
        """
        Converts session messages to chat-completions message dictionaries.

        Assistant tool calls are passed through unchanged and tool messages keep
        their ``tool_call_id``; timestamps are not sent.

        Args:
            history: List of session messages.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, UserMessage):
                openai_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = [call.model_dump() for call in msg.tool_calls]
                openai_history.append(openai_msg)
            elif isinstance(msg, SystemMessage):
                openai_history.append({"role": "system", "content": msg.content})
            elif isinstance(msg, ToolMessage):
                openai_history.append({"role": "tool", "tool_call_id": msg.tool_call_id, "content": msg.content})
        return openai_history

    @staticmethod
    def _build_response(response: ChatCompletion) -> ModelResponse:
        """
        Extracts text and function tool calls from a chat completion.

        Args:
            response: The completion returned by the endpoint.

        Returns:
            ModelResponse: Normalized answer with the raw completion attached.

        Raises:
            ModelUnavailableError: If the completion has no choices.
        """
        if not response.choices:
            msg = "Model returned a response without choices."
            logger.error(msg)
            raise ModelUnavailableError(msg)

        message = response.choices[0].message
        tool_calls: List[ToolCall] = []
        for tool_call in message.tool_calls or []:
            if tool_call.type != "function":
                logger.warning("Ignoring unsupported tool call type '%s'.", tool_call.type)
                continue
            tool_calls.append(
                ToolCall(
                    id=tool_call.id,
                    function=ToolCallFunction(
                        name=tool_call.function.name,
                        arguments=tool_call.function.arguments or "",
                    ),
                )
            )

        return ModelResponse(content=message.content, tool_calls=tool_calls, raw=response)
