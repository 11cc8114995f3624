from abc import ABC, abstractmethod
from typing import Any

from .models import ChatRequest, ServerResponse


class ChatTransport(ABC):
    """Delivers a ChatRequest and returns the decoded reply.

    Implementations own:
    - Endpoint resolution
    - Request serialization
    - Status and payload validation
    - Mapping failures onto the ChatError hierarchy

    Usable as an async context manager:
        async with HttpChatTransport(base_url) as transport:
            response = await transport.complete(request)
    """

    @abstractmethod
    async def complete(self, request: ChatRequest) -> ServerResponse:
        """Send a chat request and wait for the complete response.

        Args:
            request: Fully built chat request

        Returns:
            Decoded server response

        Raises:
            ChatError: One subclass per failure category (transport, status,
                empty body, decode, encode, invalid endpoint)
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close on exit; a loop that is already closed is not an error here."""
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
