"""Transport for streaming chat completion requests.

A transport sends a request payload and yields the raw event-stream lines
in arrival order. Vendor differences (endpoint, key) come from ModelConfig.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional

import httpx

from gitbuddy.config import DEFAULT_TIMEOUT, ModelConfig
from gitbuddy.llm.exceptions import TransportError

logger = logging.getLogger(__name__)

# Cap on how much of an error body is carried into TransportError
MAX_ERROR_BODY_CHARS = 2000


class BaseTransport(ABC):
    """Abstract base class for chat completion transports."""

    @abstractmethod
    def stream_lines(self, payload: dict[str, Any]) -> Iterator[str]:
        """Send the request and yield response lines as they arrive.

        Args:
            payload: JSON request body.

        Yields:
            Response lines without line terminators.

        Raises:
            TransportError: On a non-success status or connection failure.
        """
        pass


class OpenAICompatibleTransport(BaseTransport):
    """Transport for any endpoint implementing POST {base_url}/chat/completions."""

    def __init__(
        self,
        model_config: ModelConfig,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the transport.

        Args:
            model_config: Endpoint, model and key of the vendor.
            timeout: Connect/read timeout in seconds.
            client: Pre-built httpx client; one is created per request otherwise.
        """
        self.model_config = model_config
        self.timeout = timeout
        self._client = client

    def build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "text/event-stream",
            "Content-Type": "application/json",
        }
        if self.model_config.api_key:
            headers["Authorization"] = f"Bearer {self.model_config.api_key}"
        return headers

    def stream_lines(self, payload: dict[str, Any]) -> Iterator[str]:
        url = self.model_config.chat_completions_url
        logger.debug("POST %s model=%s", url, payload.get("model"))

        client = self._client or httpx.Client(timeout=self.timeout)
        try:
            with client.stream("POST", url, json=payload, headers=self.build_headers()) as response:
                if not response.is_success:
                    body = response.read().decode("utf-8", errors="replace")
                    raise TransportError(response.status_code, body[:MAX_ERROR_BODY_CHARS])
                yield from response.iter_lines()
        except httpx.HTTPError as e:
            raise TransportError(None, str(e)) from e
        finally:
            if self._client is None:
                client.close()
