"""Chat session: the request/response pipeline behind a single send.

Hides how a prompt becomes conversation entries:
- request construction and the in-flight guard
- transport invocation and busy-state bookkeeping
- all-or-nothing appends to the conversation
- error capture into a result value (nothing raises out of ``send``)
"""

import logging
from dataclasses import dataclass, field
from itertools import count

from ..diagnostics import DiagnosticLog
from .base import ChatTransport
from .builder import RequestBuilder
from .conversation import Conversation
from .errors import ChatError, HTTPStatusError, RequestInFlightError, StaleResponseError
from .models import ChatMessage

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    """Outcome of one send: the appended messages or the error."""

    messages: list[ChatMessage] = field(default_factory=list)
    error: ChatError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def replies(self) -> list[ChatMessage]:
        """Appended messages that came from the server."""
        return [msg for msg in self.messages if not msg.is_user]


class ChatSession:
    """Sends prompts and keeps the conversation in step with the replies.

    At most one request is outstanding. A completion is applied only if its
    token is still the current one; ``cancel_pending`` and ``reset``
    invalidate the token so a late reply is discarded.

    Usage:
        async with HttpChatTransport(base_url) as transport:
            session = ChatSession(transport, RequestBuilder())
            result = await session.send("Explain decorators")
            if result.ok:
                print(result.replies[0].content)
    """

    def __init__(
        self,
        transport: ChatTransport,
        builder: RequestBuilder | None = None,
        conversation: Conversation | None = None,
        log: DiagnosticLog | None = None,
    ) -> None:
        self._transport = transport
        self._builder = builder or RequestBuilder()
        self._conversation = conversation if conversation is not None else Conversation()
        self._log = log or DiagnosticLog(None)
        self._tokens = count(1)
        self._in_flight: int | None = None
        self._last_error: ChatError | None = None

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    @property
    def log(self) -> DiagnosticLog:
        return self._log

    @property
    def busy(self) -> bool:
        """True while a request is awaiting its response."""
        return self._in_flight is not None

    @property
    def last_error(self) -> ChatError | None:
        """Error from the most recent send, cleared by the next success."""
        return self._last_error

    def cancel_pending(self) -> bool:
        """Forget the outstanding request so its reply is discarded.

        Returns:
            True if a request was pending
        """
        if self._in_flight is None:
            return False
        self._log.info("Session", f"Request #{self._in_flight} cancelled")
        self._in_flight = None
        return True

    def reset(self) -> None:
        """Clear the conversation and drop any pending reply."""
        self.cancel_pending()
        self._conversation.clear()
        self._last_error = None

    async def send(self, prompt: str) -> ChatResult:
        """Send a prompt and append the prompt plus every reply on success.

        Args:
            prompt: User text

        Returns:
            ChatResult with the appended messages, or with the error and no
            change to the conversation
        """
        try:
            request = self._builder.build(prompt, history=self._conversation.messages)
        except ChatError as e:
            return self._fail(e)

        if self._in_flight is not None:
            return self._fail(RequestInFlightError())

        token = next(self._tokens)
        self._in_flight = token
        self._log.info(
            "Session",
            f"Request #{token}: {len(request.messages)} message(s), model={request.model}",
        )

        try:
            response = await self._transport.complete(request)
        except ChatError as e:
            return self._fail(e)
        finally:
            current = self._in_flight == token
            if current:
                self._in_flight = None

        if not current:
            return self._fail(StaleResponseError())

        messages = [ChatMessage(role="user", content=prompt)]
        messages.extend(
            ChatMessage(role=choice.message.role, content=choice.message.content)
            for choice in response.choices
        )
        self._conversation.append(*messages)
        self._last_error = None

        if not response.choices:
            self._log.warning("Session", f"Request #{token}: response contained no choices")
        else:
            self._log.info("Session", f"Request #{token}: {len(response.choices)} choice(s) received")

        return ChatResult(messages=messages)

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    def _fail(self, error: ChatError) -> ChatResult:
        self._last_error = error
        detail = error.message
        if isinstance(error, HTTPStatusError) and error.response_body:
            detail = f"{detail}: {error.response_body[:200]}"
        self._log.error("Session", f"{type(error).__name__}: {detail}")
        logger.debug("send failed", exc_info=error)
        return ChatResult(error=error)
