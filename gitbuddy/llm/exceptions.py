"""LLM-related exception classes.

Every failure of the generation pipeline is an LLMError:
- MissingAPIKeyError: Raised when a required API key is not set
- TransportError: Raised when the endpoint rejects the request or is unreachable
- StreamDecodeError: Raised when an event-stream chunk is not valid JSON
- JSONParseError: Raised when the model output cannot be parsed into commit entries
"""

from typing import Optional


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class TransportError(LLMError):
    """Raised when the chat endpoint fails.

    Attributes:
        status_code: HTTP status, or None when no response was received.
        body: Response body or the connection error text.
    """

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Request failed: {body}"
        else:
            message = f"Error occurred in request, reason: '{body}', status code: {status_code}"
        super().__init__(message)


class StreamDecodeError(LLMError):
    """Raised when an event-stream chunk cannot be decoded.

    Attributes:
        payload: The raw chunk text that failed to decode.
    """

    def __init__(self, payload: str, reason: str):
        self.payload = payload
        super().__init__(f"Failed to decode stream chunk: {reason}\nPayload: {payload[:200]}")


class JSONParseError(LLMError):
    """Raised when the LLM response cannot be parsed as valid JSON."""

    pass
