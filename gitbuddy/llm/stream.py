"""Event-stream consumption for chat completion responses.

Turns the `data:` lines of a server-sent event stream into the accumulated
model output and token usage.
"""

import logging
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from gitbuddy.config import UsageMode
from gitbuddy.llm.exceptions import StreamDecodeError
from gitbuddy.llm.models import StreamEventChunk, TokenUsage, UsageAccumulator

logger = logging.getLogger(__name__)

EVENT_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


def _payload_of(line: str) -> Optional[str]:
    """Return the payload of a data line, or None for any other line."""
    if not line.startswith(EVENT_PREFIX):
        return None
    payload = line[len(EVENT_PREFIX):]
    # A single space after the colon is part of the field separator
    if payload.startswith(" "):
        payload = payload[1:]
    return payload.strip()


def decode_chunk(payload: str) -> StreamEventChunk:
    """Decode one event payload.

    Raises:
        StreamDecodeError: If the payload is not a valid chunk.
    """
    try:
        return StreamEventChunk.model_validate_json(payload)
    except ValidationError as e:
        raise StreamDecodeError(payload, str(e)) from e


def consume_stream(
    lines: Iterable[str],
    on_delta: Optional[Callable[[str], None]] = None,
    usage_mode: UsageMode = UsageMode.INCREMENTAL,
) -> tuple[str, TokenUsage]:
    """Accumulate the text and usage of an event stream.

    Lines without the `data:` prefix and empty lines are ignored. The
    `[DONE]` sentinel ends consumption; running out of lines without it is
    treated the same way.

    Args:
        lines: Stream lines in arrival order, without trailing newlines.
        on_delta: Called with every text fragment as soon as it is decoded.
        usage_mode: How usage records are folded together.

    Returns:
        Tuple of (accumulated text, usage totals).

    Raises:
        StreamDecodeError: On the first chunk that fails to decode. Nothing
            accumulated so far is returned.
    """
    fragments: list[str] = []
    usage = UsageAccumulator(mode=usage_mode)
    skipped = 0
    chunks = 0

    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        payload = _payload_of(line)
        if payload is None:
            skipped += 1
            continue

        if payload == DONE_SENTINEL:
            logger.debug("Stream sentinel reached after %d chunks", chunks)
            break

        chunk = decode_chunk(payload)
        chunks += 1

        for choice in chunk.choices:
            content = choice.delta_content
            if not content:
                continue
            fragments.append(content)
            if on_delta is not None:
                on_delta(content)

        usage.fold(chunk.usage)
    else:
        logger.debug("Stream ended without sentinel after %d chunks", chunks)

    if skipped:
        logger.debug("Ignored %d non-data stream lines", skipped)

    return "".join(fragments), usage.snapshot()
