"""Conventional Commits rendering of structured commit entries.

Format:
    <type>(<scope>): <subject> [reference]

    <body>

    <footer>
"""

import textwrap
from typing import Optional

from gitbuddy.config import DEFAULT_WRAP_WIDTH
from gitbuddy.llm.models import StructuredCommitEntry


def wrap_text(text: str, width: int = DEFAULT_WRAP_WIDTH) -> str:
    """Wrap text to the given width, line by line.

    Lines that already fit are kept verbatim. Longer lines are re-flowed
    word by word with single spaces between words; a single word longer
    than the width stays intact on its own line. Wrapping an already
    wrapped text returns it unchanged.

    Args:
        text: Text to wrap; explicit newlines are preserved.
        width: Maximum line width.

    Returns:
        Wrapped text.
    """
    lines = []
    for line in text.split("\n"):
        if len(line) <= width:
            lines.append(line)
            continue
        lines.extend(
            textwrap.wrap(
                " ".join(line.split()),
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
            )
            or [""]
        )
    return "\n".join(lines)


def format_header(entry: StructuredCommitEntry, reference: Optional[str] = None) -> str:
    """Build the `type(scope): subject` header line.

    Args:
        entry: The structured commit entry.
        reference: External reference (e.g. an issue key) appended after a space.

    Returns:
        The header line.
    """
    subject = entry.subject.strip()
    scope = entry.get_scope()

    if scope:
        header = f"{entry.type.value}({scope}): {subject}"
    else:
        header = f"{entry.type.value}: {subject}"

    if reference:
        header = f"{header} {reference}"
    return header


def format_commit_entry(
    entry: StructuredCommitEntry,
    reference: Optional[str] = None,
    width: int = DEFAULT_WRAP_WIDTH,
) -> str:
    """Render a structured entry as a commit message.

    Args:
        entry: The structured commit entry.
        reference: External reference appended to the header.
        width: Wrap width for body and footer.

    Returns:
        Formatted commit message text.

    Example output:
        feat(auth): add oauth2 authentication flow #42

        implement secure authentication using OAuth2 protocol

        BREAKING CHANGE: authentication header format changed
    """
    parts = [format_header(entry, reference)]

    body = entry.get_body()
    if body:
        parts.append("")
        parts.append(wrap_text(body, width))

    footer = entry.get_footer()
    if footer:
        parts.append("")
        parts.append(wrap_text(footer, width))

    return "\n".join(parts)
