from .base import ChatTransport
from .builder import RequestBuilder
from .conversation import Conversation
from .errors import (
    ChatError,
    DecodeError,
    EmptyBodyError,
    EmptyInputError,
    EncodeError,
    HTTPStatusError,
    InvalidEndpointError,
    RequestInFlightError,
    StaleResponseError,
    TransportError,
)
from .http import HttpChatTransport
from .models import ChatMessage, ChatRequest, MessageSegment, RequestMessage, ServerResponse
from .segments import code_blocks, parse_segments
from .session import ChatResult, ChatSession

__all__ = [
    "ChatError",
    "ChatMessage",
    "ChatRequest",
    "ChatResult",
    "ChatSession",
    "ChatTransport",
    "Conversation",
    "DecodeError",
    "EmptyBodyError",
    "EmptyInputError",
    "EncodeError",
    "HTTPStatusError",
    "HttpChatTransport",
    "InvalidEndpointError",
    "MessageSegment",
    "RequestBuilder",
    "RequestInFlightError",
    "RequestMessage",
    "ServerResponse",
    "StaleResponseError",
    "TransportError",
    "code_blocks",
    "parse_segments",
]
