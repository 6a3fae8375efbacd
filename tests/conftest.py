"""Shared test fixtures and configuration."""

import json
import tempfile
from pathlib import Path

import pytest

from gitbuddy.config import ModelConfig, Vendor


def make_stream_lines(fragments, usage=None, done=True):
    """Build event-stream lines carrying the given content fragments.

    Args:
        fragments: Text fragments, one chunk each.
        usage: Optional usage dict attached to every chunk.
        done: Whether to end with the [DONE] sentinel.
    """
    lines = []
    for i, fragment in enumerate(fragments):
        chunk = {
            "id": "chatcmpl-1",
            "object": "chat.completion.chunk",
            "choices": [{"index": 0, "delta": {"content": fragment}, "finish_reason": None}],
        }
        if usage is not None:
            chunk["usage"] = usage
        lines.append(f"data: {json.dumps(chunk)}")
        lines.append("")
    if done:
        lines.append("data: [DONE]")
    return lines


@pytest.fixture
def stream_lines():
    """Builder for event-stream lines."""
    return make_stream_lines


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point the global config directory at a temporary location."""
    mock_dir = temp_dir / ".gitbuddy"
    mocker.patch("gitbuddy.global_config._CONFIG_DIR", mock_dir)
    return mock_dir


@pytest.fixture
def model_config():
    """ModelConfig for a local endpoint."""
    return ModelConfig(
        vendor=Vendor.DEEPSEEK,
        model="deepseek-chat",
        base_url="https://api.deepseek.com/v1",
        api_key="sk-test-key-1234567890",
    )


@pytest.fixture
def sample_entries_json():
    """A well-formed model response with two commit entries."""
    return json.dumps([
        {
            "type": "feat",
            "scope": "auth",
            "subject": "add oauth2 login",
            "body": "Implement the authorization code flow.",
            "footer": None,
        },
        {
            "type": "fix",
            "scope": None,
            "subject": "handle expired tokens",
            "body": None,
            "footer": "Closes #12",
        },
    ])


@pytest.fixture
def sample_diff():
    """Sample staged diff."""
    return """diff --git a/auth.py b/auth.py
index 1234567..abcdefg 100644
--- a/auth.py
+++ b/auth.py
@@ -1,3 +1,5 @@
+def login():
+    pass
"""
