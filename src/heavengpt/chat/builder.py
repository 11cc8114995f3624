"""Turns a user prompt into a chat request."""

from collections.abc import Sequence

from ..prompts import get_system_prompt
from .errors import EmptyInputError
from .models import ChatMessage, ChatRequest, RequestMessage

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 2048


class RequestBuilder:
    """Builds ``ChatRequest`` objects with fixed generation parameters.

    By default each request carries only the system instruction and the
    latest prompt. With ``include_history`` the most recent
    ``history_limit`` conversation messages are forwarded between them.
    """

    def __init__(
        self,
        system_prompt: str | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        include_history: bool = False,
        history_limit: int = 10,
    ) -> None:
        self.system_prompt = system_prompt if system_prompt and system_prompt.strip() else get_system_prompt()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.include_history = include_history
        self.history_limit = history_limit

    def build(self, prompt: str, history: Sequence[ChatMessage] = ()) -> ChatRequest:
        """Build the request for a prompt.

        Args:
            prompt: User text, forwarded verbatim
            history: Prior conversation, used only when history is enabled

        Returns:
            ChatRequest with streaming disabled

        Raises:
            EmptyInputError: If the prompt is empty after trimming
        """
        if not prompt or not prompt.strip():
            raise EmptyInputError()

        messages = [RequestMessage(role="system", content=self.system_prompt)]
        if self.include_history and self.history_limit > 0:
            messages.extend(msg.to_request_message() for msg in history[-self.history_limit:])
        messages.append(RequestMessage(role="user", content=prompt))

        return ChatRequest(
            messages=messages,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            stream=False,
        )
