"""System prompt templates for commit message generation.

- detailed (p1): JSON-schema prompt for capable hosted models
- concise (p2): short instructions for small local models
"""

from enum import Enum

from gitbuddy.llm.prompts.concise import PROMPT_TEMPLATE_CONCISE
from gitbuddy.llm.prompts.detailed import PROMPT_TEMPLATE_DETAILED


class Prompt(str, Enum):
    """Available system prompt templates."""

    P1 = "p1"
    P2 = "p2"

    @property
    def template(self) -> str:
        return PROMPT_TEMPLATES[self]


PROMPT_TEMPLATES = {
    Prompt.P1: PROMPT_TEMPLATE_DETAILED,
    Prompt.P2: PROMPT_TEMPLATE_CONCISE,
}


def render_prompt(prompt: Prompt, number: int, language: str) -> str:
    """Render a system prompt for the requested number of options.

    Args:
        prompt: The template to use.
        number: How many commit messages the model should return.
        language: Language for subject and body text.

    Returns:
        The rendered system prompt.
    """
    return prompt.template.format(number=number, language=language)


__all__ = [
    "Prompt",
    "PROMPT_TEMPLATES",
    "PROMPT_TEMPLATE_DETAILED",
    "PROMPT_TEMPLATE_CONCISE",
    "render_prompt",
]
