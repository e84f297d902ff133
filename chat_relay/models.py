from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

DEFAULT_MODEL = "gpt-4o-mini"
MAX_TOKENS = 800
TEMPERATURE = 0.2


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class CompletionRequest(BaseModel):
    # model and messages stay untyped: caller values are forwarded unchecked
    model: Any = DEFAULT_MODEL
    messages: list[Any]
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE


# Outcome of the single outbound call

class UpstreamReply(BaseModel):
    kind: Literal["reply"] = "reply"
    data: Any


class UpstreamError(BaseModel):
    kind: Literal["upstream_error"] = "upstream_error"
    status_code: int
    # raw upstream bytes, relayed without re-decoding
    body: bytes
    content_type: Optional[str] = None


class LocalFailure(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["local_failure"] = "local_failure"
    message: str
    error: Optional[BaseException] = None


UpstreamResult = Union[UpstreamReply, UpstreamError, LocalFailure]


# Decoded completion body

class HasMessage(BaseModel):
    kind: Literal["has_message"] = "has_message"
    message: Any


class MissingMessage(BaseModel):
    kind: Literal["missing"] = "missing"


ParsedCompletion = Union[HasMessage, MissingMessage]
