"""Shared utility functions for CLI commands."""

import logging
from dataclasses import dataclass
from typing import Optional

from gitbuddy.config import DEFAULT_NUMBER
from gitbuddy.llm import Prompt


@dataclass
class GenerationOptions:
    """Options shared by the default command and `gitbuddy ai`."""

    vendor: Optional[str] = None
    model: Optional[str] = None
    prompt: Prompt = Prompt.P1
    hint: Optional[str] = None
    number: int = DEFAULT_NUMBER
    reference: Optional[str] = None
    language: Optional[str] = None


def setup_logging(debug: bool) -> None:
    """Send log records to stderr; DEBUG with --debug, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def mask_key(api_key: str) -> str:
    """Mask an API key for display."""
    if len(api_key) > 12:
        return api_key[:8] + "..." + api_key[-4:]
    return "***"
