"""Outbound request assembly for the chat completion endpoint."""

from typing import Any, Optional

from gitbuddy.config import ModelParameters
from gitbuddy.llm.models import ChatMessage

KEEP_ALIVE = "30m"

USER_DIFF_TEMPLATE = (
    "Generate commit message for these changes. If it's a new file, focus on "
    "its purpose rather than analyzing its content:\n```diff\n{diff_content}\n```"
)


def build_messages(
    system_prompt: str,
    diff_content: str,
    hint: Optional[str] = None,
) -> list[ChatMessage]:
    """Build the ordered message list for a request.

    Args:
        system_prompt: The rendered system prompt.
        diff_content: The staged diff.
        hint: Optional extra instruction from the user.

    Returns:
        System message, diff message and, if given, the hint message.
    """
    messages = [
        ChatMessage.system(system_prompt),
        ChatMessage.user(USER_DIFF_TEMPLATE.format(diff_content=diff_content)),
    ]
    if hint:
        messages.append(ChatMessage.user(f"hint: {hint}"))
    return messages


def build_payload(
    model: str,
    messages: list[ChatMessage],
    parameters: ModelParameters,
) -> dict[str, Any]:
    """Build the JSON body of a streaming chat completion request.

    Sampling options are sent nested under `options` and, for servers that
    only read top-level fields, as `temperature`, `top_p` and `max_tokens`.
    """
    return {
        "model": model,
        "messages": [message.model_dump(mode="json") for message in messages],
        "options": parameters.model_dump(),
        "temperature": parameters.temperature,
        "top_p": parameters.top_p,
        "max_tokens": parameters.max_tokens,
        "stream": True,
        "stream_options": {"include_usage": True},
        "keep_alive": KEEP_ALIVE,
    }
