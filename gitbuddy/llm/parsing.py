"""JSON extraction, repair and validation for LLM responses.

Contains functions for turning free-form model output into commit entries:
- extract_json_content: Pick the JSON candidate out of fences or prose
- repair_json: Fix common malformations in the candidate
- parse_commit_entries: Validate the repaired candidate as a list of entries
"""

import json
import logging
import re

from pydantic import TypeAdapter, ValidationError

from gitbuddy.llm.exceptions import JSONParseError
from gitbuddy.llm.models import StructuredCommitEntry

logger = logging.getLogger(__name__)

_JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_ANY_FENCE_RE = re.compile(r"```\s*([\s\S]*?)\s*```")
_TRAILING_COMMA_RE = re.compile(r",(\s*\])")

# Double-escaped sequences and their replacements, applied in this order
_ESCAPE_FIXES = [
    ("\\n", "\n"),
    ('\\"', '"'),
    ("\\\\", "\\"),
    ("\\'", "'"),
]

_ENTRIES_ADAPTER = TypeAdapter(list[StructuredCommitEntry])


def extract_json_content(text: str) -> str:
    """Pick the JSON candidate out of the model output.

    Checks in order:
    1. A ```json fenced block
    2. Any fenced block
    3. The text itself

    Args:
        text: The model output with reasoning already removed.

    Returns:
        The content of the first matching fence, or the unmodified text.
    """
    match = _JSON_FENCE_RE.search(text)
    if match:
        logger.debug("Using ```json fenced block")
        return match.group(1).strip()

    match = _ANY_FENCE_RE.search(text)
    if match:
        logger.debug("Using untagged fenced block")
        return match.group(1).strip()

    return text


def _locate_array(text: str) -> str:
    """Cut the text down to the span from the first '[' to the last ']'."""
    first_bracket = text.find("[")
    last_bracket = text.rfind("]")

    if first_bracket != -1 and last_bracket > first_bracket:
        return text[first_bracket:last_bracket + 1]
    return text


def _try_canonical(text: str):
    """Parse leniently and re-serialize an array or object.

    Returns None if the text does not parse or parses to a scalar, such as
    a whole array quoted into a JSON string.
    """
    try:
        # strict=False accepts raw control characters inside strings
        value = json.loads(text, strict=False)
    except json.JSONDecodeError:
        return None
    if isinstance(value, dict):
        value = [value]
    elif not isinstance(value, list):
        return None
    return json.dumps(value, ensure_ascii=False)


def repair_json(text: str) -> str:
    """Best-effort repair of an embedded JSON array.

    Applied in order:
    - cut surrounding prose down to the outermost [...] span
    - normalize double-escaped newline, quote, backslash and apostrophe
      sequences
    - remove a trailing comma before a closing bracket
    - parse into a generic JSON value and re-serialize it canonically

    Candidates that already parse as an array or object skip the escape
    normalization. A single JSON object is wrapped into a one-element
    array. If the generic parse still fails, the comma-fixed text is
    returned unchanged.

    Args:
        text: The extracted JSON candidate.

    Returns:
        JSON array source, or the best attempt at one.
    """
    candidate = text.strip()

    canonical = _try_canonical(candidate)
    if canonical is not None:
        return canonical

    candidate = _locate_array(candidate)
    canonical = _try_canonical(candidate)
    if canonical is not None:
        return canonical

    cleaned = candidate
    for old, new in _ESCAPE_FIXES:
        cleaned = cleaned.replace(old, new)

    comma_fixed = _TRAILING_COMMA_RE.sub(r"\1", cleaned)

    canonical = _try_canonical(comma_fixed)
    if canonical is not None:
        return canonical

    logger.debug("Generic JSON parse failed after repair, passing text through")
    return comma_fixed


def parse_commit_entries(text: str) -> list[StructuredCommitEntry]:
    """Extract, repair and validate commit entries from model output.

    Args:
        text: The model output with reasoning already removed.

    Returns:
        The entries in model order. May be empty.

    Raises:
        JSONParseError: If the repaired text is not a valid array of entries.
    """
    content = extract_json_content(text)
    fixed_json = repair_json(content)

    try:
        entries = _ENTRIES_ADAPTER.validate_json(fixed_json)
    except ValidationError as e:
        raise JSONParseError(
            f"Parse JSON failed.\n"
            f"Error: {e}\n"
            f"Raw response:\n{text}"
        ) from e

    logger.debug("Parsed %d commit entries", len(entries))
    return entries
