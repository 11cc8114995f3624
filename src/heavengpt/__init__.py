"""
HeavenGPT: a terminal chat client for chat-completion HTTP endpoints.

Prompts go out as one blocking POST per send; replies are split into
prose and code segments and rendered with syntax highlighting.
"""

__version__ = "0.1.0"

from .chat import (
    ChatError,
    ChatMessage,
    ChatRequest,
    ChatResult,
    ChatSession,
    Conversation,
    HttpChatTransport,
    MessageSegment,
    RequestBuilder,
    parse_segments,
)
from .config import ChatConfig, load_config

__all__ = [
    "ChatConfig",
    "ChatError",
    "ChatMessage",
    "ChatRequest",
    "ChatResult",
    "ChatSession",
    "Conversation",
    "HttpChatTransport",
    "MessageSegment",
    "RequestBuilder",
    "load_config",
    "parse_segments",
]
