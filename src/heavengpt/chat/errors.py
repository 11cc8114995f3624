"""Exceptions raised while building, sending and decoding chat requests."""


class ChatError(Exception):
    """Base exception for every failure surfaced to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyInputError(ChatError):
    """Raised when the prompt is empty or whitespace only."""

    def __init__(self, message: str = "Please enter a prompt before sending.") -> None:
        super().__init__(message)


class InvalidEndpointError(ChatError):
    """Raised when the configured base URL cannot be used for requests."""


class EncodeError(ChatError):
    """Raised when a request cannot be serialized to JSON."""


class TransportError(ChatError):
    """Raised when the request fails at the network layer."""


class HTTPStatusError(ChatError):
    """Raised when the server answers with anything other than 200."""

    def __init__(self, message: str, status_code: int, response_body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class EmptyBodyError(ChatError):
    """Raised when a 200 response carries no payload."""

    def __init__(self, message: str = "No data received") -> None:
        super().__init__(message)


class DecodeError(ChatError):
    """Raised when the payload does not match the expected response schema."""


class RequestInFlightError(ChatError):
    """Raised when a send is attempted while another one is pending."""

    def __init__(self, message: str = "A request is already in progress.") -> None:
        super().__init__(message)


class StaleResponseError(ChatError):
    """Raised when a completion arrives after its request was cancelled."""

    def __init__(self, message: str = "The response arrived after the request was cancelled.") -> None:
        super().__init__(message)
