"""HTTP transport for OpenAI-compatible ``/chat/completions`` endpoints."""

import logging

import httpx
from pydantic import ValidationError

from .base import ChatTransport
from .errors import (
    DecodeError,
    EmptyBodyError,
    EncodeError,
    HTTPStatusError,
    InvalidEndpointError,
    TransportError,
)
from .models import ChatRequest, ServerResponse

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/chat/completions"
DEFAULT_TIMEOUT = 60.0


def build_endpoint(base_url: str) -> str:
    """Resolve the completions URL for a base URL.

    Raises:
        InvalidEndpointError: If the base URL is not an absolute http(s) URL
    """
    try:
        url = httpx.URL(base_url.strip())
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidEndpointError(f"Invalid URL: {base_url!r} ({e})") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidEndpointError(f"Invalid URL: {base_url!r}")

    return str(url.copy_with(path=url.path.rstrip("/") + COMPLETIONS_PATH))


class HttpChatTransport(ChatTransport):
    """Chat transport that POSTs JSON with httpx and waits for the full body.

    Hidden design decisions:
    - Endpoint path and headers
    - Timeout policy (one value for the whole call, no retries)
    - Which failures map to which ChatError subclass
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the transport.

        Args:
            base_url: Server base URL; ``/chat/completions`` is appended
            timeout: Seconds before the call fails; None disables the timeout
            http_client: Optional pre-configured client (closed by ``close``)

        Raises:
            InvalidEndpointError: If base_url is not usable
        """
        self._endpoint = build_endpoint(base_url)
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def endpoint(self) -> str:
        """Fully resolved completions URL."""
        return self._endpoint

    async def complete(self, request: ChatRequest) -> ServerResponse:
        try:
            payload = request.to_json()
        except (ValueError, TypeError) as e:
            raise EncodeError(f"Error encoding request: {e}") from e

        logger.debug("POST %s (%d bytes)", self._endpoint, len(payload))

        try:
            response = await self._client.post(
                self._endpoint,
                content=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Error making request: request timed out ({e})") from e
        except httpx.RequestError as e:
            raise TransportError(f"Error making request: {e}") from e

        if response.status_code != 200:
            raise HTTPStatusError(
                f"Server returned status {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )

        if not response.content.strip():
            raise EmptyBodyError()

        try:
            return ServerResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"Error decoding JSON: {e.error_count()} validation error(s)") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
