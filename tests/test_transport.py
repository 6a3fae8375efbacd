"""Tests for gitbuddy.llm.transport module."""

import json

import httpx
import pytest

from gitbuddy.config import ModelConfig, Vendor
from gitbuddy.llm.exceptions import TransportError
from gitbuddy.llm.transport import OpenAICompatibleTransport


def _transport(model_config, handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenAICompatibleTransport(model_config, client=client)


class TestOpenAICompatibleTransport:
    """Tests for OpenAICompatibleTransport."""

    def test_streams_lines(self, model_config):
        """Test that response lines are yielded in order."""
        body = 'data: {"choices":[]}\n\ndata: [DONE]\n'
        transport = _transport(model_config, lambda request: httpx.Response(200, text=body))

        lines = [line for line in transport.stream_lines({"model": "m"}) if line]

        assert lines == ['data: {"choices":[]}', "data: [DONE]"]

    def test_request_shape(self, model_config):
        """Test URL, headers and body of the outgoing request."""
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, text="data: [DONE]\n")

        transport = _transport(model_config, handler)
        list(transport.stream_lines({"model": "deepseek-chat", "stream": True}))

        assert captured["url"] == "https://api.deepseek.com/v1/chat/completions"
        assert captured["headers"]["authorization"] == "Bearer sk-test-key-1234567890"
        assert captured["headers"]["accept"] == "text/event-stream"
        assert captured["body"] == {"model": "deepseek-chat", "stream": True}

    def test_no_authorization_without_key(self):
        """Test that keyless vendors send no Authorization header."""
        config = ModelConfig(
            vendor=Vendor.OLLAMA,
            model="qwen2.5-coder",
            base_url="http://localhost:11434/v1/",
        )
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            return httpx.Response(200, text="")

        list(_transport(config, handler).stream_lines({}))

        assert "authorization" not in captured["headers"]
        assert captured["url"] == "http://localhost:11434/v1/chat/completions"

    def test_error_status_raises(self, model_config):
        """Test that a non-success status raises TransportError with status and body."""
        transport = _transport(
            model_config,
            lambda request: httpx.Response(500, text='{"error": "overloaded"}'),
        )

        with pytest.raises(TransportError) as exc_info:
            list(transport.stream_lines({}))

        assert exc_info.value.status_code == 500
        assert "overloaded" in exc_info.value.body
        assert "status code: 500" in str(exc_info.value)

    def test_unauthorized_raises(self, model_config):
        """Test that a 401 is reported with its status."""
        transport = _transport(model_config, lambda request: httpx.Response(401, text="bad key"))

        with pytest.raises(TransportError) as exc_info:
            list(transport.stream_lines({}))

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "bad key"

    def test_connection_error_raises(self, model_config):
        """Test that connection failures raise TransportError without status."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = _transport(model_config, handler)

        with pytest.raises(TransportError) as exc_info:
            list(transport.stream_lines({}))

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)
