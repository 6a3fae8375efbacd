"""Removal of inline reasoning traces from model output."""

import re

REASONING_OPEN_TAG = "<think>"
REASONING_CLOSE_TAG = "</think>"

_REASONING_RE = re.compile(
    re.escape(REASONING_OPEN_TAG) + r".*?" + re.escape(REASONING_CLOSE_TAG),
    re.DOTALL,
)


def strip_reasoning(text: str) -> str:
    """Remove every <think>...</think> span and trim the result.

    The match is non-greedy, so adjacent reasoning blocks are removed one by
    one and the text between them is kept.

    Args:
        text: The accumulated model output.

    Returns:
        The text without reasoning spans, stripped of outer whitespace.
    """
    return _REASONING_RE.sub("", text.strip()).strip()
