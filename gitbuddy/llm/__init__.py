"""LLM pipeline for gitbuddy.

Data flow:
    build_messages -> transport -> consume_stream -> strip_reasoning
    -> parse_commit_entries -> format_commit_entry -> LLMResult
"""

import logging
from typing import Callable, Optional

from dotenv import load_dotenv

from gitbuddy.config import (
    DEFAULT_LANGUAGE,
    DEFAULT_NUMBER,
    DEFAULT_TIMEOUT,
    DEFAULT_USAGE_MODE,
    DEFAULT_WRAP_WIDTH,
    ModelConfig,
    ModelParameters,
    UsageMode,
)
from gitbuddy.llm.exceptions import (
    JSONParseError,
    LLMError,
    MissingAPIKeyError,
    StreamDecodeError,
    TransportError,
)
from gitbuddy.llm.formatter import format_commit_entry, wrap_text
from gitbuddy.llm.models import (
    ChatMessage,
    CommitType,
    LLMResult,
    StructuredCommitEntry,
    TokenUsage,
    UsageAccumulator,
)
from gitbuddy.llm.parsing import parse_commit_entries
from gitbuddy.llm.prompts import Prompt, render_prompt
from gitbuddy.llm.reasoning import strip_reasoning
from gitbuddy.llm.request import build_messages, build_payload
from gitbuddy.llm.stream import consume_stream
from gitbuddy.llm.transport import BaseTransport, OpenAICompatibleTransport

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def process_llm_output(
    raw_output: str,
    usage: TokenUsage,
    reference: Optional[str] = None,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
) -> LLMResult:
    """Turn the accumulated model output into formatted commit messages.

    Args:
        raw_output: The complete streamed text.
        usage: Token totals of the request.
        reference: External reference appended to every header.
        wrap_width: Wrap width for bodies and footers.

    Returns:
        An LLMResult; commit_messages may be empty.

    Raises:
        JSONParseError: If no array of commit entries can be parsed.
    """
    message = strip_reasoning(raw_output)
    entries = parse_commit_entries(message)
    commit_messages = [
        format_commit_entry(entry, reference=reference, width=wrap_width)
        for entry in entries
    ]

    return LLMResult(
        commit_message=commit_messages[0] if commit_messages else "",
        commit_messages=commit_messages,
        usage=usage,
    )


def generate_commit_messages(
    diff_content: str,
    model_config: ModelConfig,
    parameters: Optional[ModelParameters] = None,
    *,
    prompt: Prompt = Prompt.P1,
    number: int = DEFAULT_NUMBER,
    language: str = DEFAULT_LANGUAGE,
    hint: Optional[str] = None,
    reference: Optional[str] = None,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
    usage_mode: UsageMode = DEFAULT_USAGE_MODE,
    timeout: float = DEFAULT_TIMEOUT,
    on_delta: Optional[Callable[[str], None]] = None,
    transport: Optional[BaseTransport] = None,
) -> LLMResult:
    """Generate commit message candidates for a diff.

    This is the main entry point for generating commit messages.

    Args:
        diff_content: The staged diff.
        model_config: Vendor endpoint, model and key.
        parameters: Sampling options; defaults are used when omitted.
        prompt: System prompt template.
        number: Number of candidates to request.
        language: Language for subject and body.
        hint: Optional extra instruction for the model.
        reference: External reference appended to every header.
        wrap_width: Wrap width for bodies and footers.
        usage_mode: How streamed usage records are folded.
        timeout: Request timeout in seconds.
        on_delta: Receives each text fragment as it streams in.
        transport: Transport override; an OpenAICompatibleTransport otherwise.

    Returns:
        An LLMResult with the formatted candidates and token usage.

    Raises:
        TransportError: If the request fails.
        StreamDecodeError: If a stream chunk is malformed.
        JSONParseError: If the response cannot be parsed.
    """
    parameters = parameters or ModelParameters()
    transport = transport or OpenAICompatibleTransport(model_config, timeout=timeout)

    system_prompt = render_prompt(prompt, number=number, language=language)
    messages = build_messages(system_prompt, diff_content, hint)
    payload = build_payload(model_config.model, messages, parameters)

    logger.debug(
        "Requesting %d commit messages from %s (%s), diff %d chars",
        number,
        model_config.vendor.value,
        model_config.model,
        len(diff_content),
    )

    raw_output, usage = consume_stream(
        transport.stream_lines(payload),
        on_delta=on_delta,
        usage_mode=usage_mode,
    )

    return process_llm_output(raw_output, usage, reference=reference, wrap_width=wrap_width)


# Export commonly used items
__all__ = [
    "BaseTransport",
    "ChatMessage",
    "CommitType",
    "JSONParseError",
    "LLMError",
    "LLMResult",
    "MissingAPIKeyError",
    "OpenAICompatibleTransport",
    "Prompt",
    "StreamDecodeError",
    "StructuredCommitEntry",
    "TokenUsage",
    "TransportError",
    "UsageAccumulator",
    "build_messages",
    "build_payload",
    "consume_stream",
    "format_commit_entry",
    "generate_commit_messages",
    "parse_commit_entries",
    "process_llm_output",
    "render_prompt",
    "strip_reasoning",
    "wrap_text",
]
