"""Data models for chat requests, responses and display messages.

Hides the wire format: field names on the wire (``max_tokens``) and the
tolerance for extra response keys are decided here and nowhere else.
"""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class RequestMessage(BaseModel):
    """A role-tagged message as it is sent to the server."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the sender: 'system', 'user' or 'assistant'")
    content: str = Field(description="Message text")


class ChatRequest(BaseModel):
    """Body of a ``POST /chat/completions`` call."""

    model_config = ConfigDict(frozen=True)

    messages: list[RequestMessage] = Field(description="Ordered conversation sent to the model")
    model: str = Field(description="Model identifier")
    temperature: float = Field(ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(gt=0, description="Maximum tokens to generate")
    stream: bool = Field(default=False, description="Always false: one complete body per call")

    def to_json(self) -> bytes:
        """Serialize to the UTF-8 JSON payload sent on the wire."""
        return self.model_dump_json().encode("utf-8")


class ResponseMessage(BaseModel):
    """Message inside a response choice."""

    role: str
    content: str


class Choice(BaseModel):
    """One generated continuation returned by the server."""

    message: ResponseMessage


class ServerResponse(BaseModel):
    """Decoded body of a successful completion call.

    Keys the client does not use (``id``, ``usage``, ``finish_reason``...)
    are ignored so any OpenAI-compatible server decodes cleanly.
    """

    choices: list[Choice]


class ChatMessage(BaseModel):
    """A message in the displayed conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex, description="Stable unique identifier")
    role: str = Field(description="'user' for prompts, server role for replies")
    content: str = Field(description="Message text")
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.role.lower() == "user"

    def to_request_message(self) -> RequestMessage:
        return RequestMessage(role=self.role.lower(), content=self.content)


class MessageSegment(BaseModel):
    """A contiguous run of message text, either prose or code."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Position of the segment within its message")
    text: str
    is_code: bool = False
    language: str | None = Field(default=None, description="Fence language tag, if any")
