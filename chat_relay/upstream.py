import logging
from typing import Any, Optional

import requests

from .config import Settings
from .models import (
    CompletionRequest,
    HasMessage,
    LocalFailure,
    MissingMessage,
    ParsedCompletion,
    UpstreamError,
    UpstreamReply,
    UpstreamResult,
)
from .prompts import system_message

logger = logging.getLogger("chat_relay.upstream")


def build_payload(messages: list, model: Any) -> dict:
    """Prepend the system instruction; caller messages follow untouched and in order."""
    request = CompletionRequest(model=model, messages=[system_message(), *messages])
    return request.model_dump()


def parse_completion(data: Any) -> ParsedCompletion:
    """Locate choices[0].message in a decoded completion body."""
    if not isinstance(data, dict):
        return MissingMessage()
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return MissingMessage()
    first = choices[0]
    if not isinstance(first, dict) or first.get("message") is None:
        return MissingMessage()
    return HasMessage(message=first["message"])


def assistant_message(parsed: ParsedCompletion) -> Optional[Any]:
    if isinstance(parsed, HasMessage):
        return parsed.message
    return None


class UpstreamClient:
    """Performs the single outbound completion call for one relayed request."""

    def __init__(self, settings: Settings):
        self.endpoint = settings.upstream_endpoint
        self.timeout = settings.upstream_timeout
        self._headers = {
            "Authorization": f"Bearer {settings.openai_api_key}",
            "Content-Type": "application/json",
        }

    def complete(self, payload: dict) -> UpstreamResult:
        try:
            response = requests.post(
                self.endpoint,
                json=payload,
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            return LocalFailure(message=str(e), error=e)

        if not 200 <= response.status_code < 300:
            logger.warning("Upstream returned %d (%d bytes)", response.status_code, len(response.content))
            return UpstreamError(
                status_code=response.status_code,
                body=response.content,
                content_type=response.headers.get("Content-Type"),
            )

        try:
            return UpstreamReply(data=response.json())
        except ValueError as e:
            return LocalFailure(message=str(e), error=e)
