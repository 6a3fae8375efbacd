"""Terminal presentation for the gitbuddy CLI.

All colors and decorations live here; the generation pipeline never sees them.
"""

from typing import Optional

import typer

from gitbuddy.config import ModelConfig, ModelParameters
from gitbuddy.llm import LLMResult


def _accent(text: str, bold: bool = False) -> str:
    return typer.style(text, fg=typer.colors.BRIGHT_CYAN, bold=bold)


def _value(text: str) -> str:
    return typer.style(text, fg=typer.colors.BRIGHT_GREEN, bold=True)


def stream_separators() -> tuple[str, str]:
    """Header and footer printed around the live model output."""
    rule = typer.style("═" * 32, fg=typer.colors.BRIGHT_YELLOW)
    start = f"{typer.style('▶', fg=typer.colors.BRIGHT_YELLOW)} {_accent('Starting Commit Analysis')} {rule}"
    end = f"{typer.style('■', fg=typer.colors.BRIGHT_YELLOW)} {_accent('Analysis Complete')} {rule}"
    return start, end


def echo_delta(fragment: str) -> None:
    """Print a streamed fragment without a newline."""
    typer.echo(typer.style(fragment, fg=typer.colors.CYAN), nl=False)


def print_configuration(
    model_config: ModelConfig,
    parameters: ModelParameters,
    diff_content: str,
) -> None:
    """Print the request settings before streaming starts."""
    typer.echo()
    typer.echo(_accent("LLM Configuration", bold=True))
    typer.echo(f"  Model: {_value(model_config.model)}")
    typer.echo(f"  Max Tokens: {_value(str(parameters.max_tokens))}")
    typer.echo(f"  Temperature: {_value(str(parameters.temperature))}")
    typer.echo(f"  Top P: {_value(str(parameters.top_p))}")
    typer.echo(f"  Diff Length: {_value(str(len(diff_content)))} chars")
    typer.echo(f"  Diff Lines: {_value(str(len(diff_content.splitlines())))} lines")
    typer.echo(f"  Endpoint: {typer.style(model_config.base_url, fg=typer.colors.BRIGHT_GREEN)}")
    typer.echo()


def format_stats(result: LLMResult, duration_ms: int) -> list[str]:
    """Build the stats lines; zero values are left out."""
    usage = result.usage
    stats = [
        ("Duration (ms)", duration_ms),
        ("Usage", usage.total_tokens),
        ("Completion", usage.completion_tokens),
        ("Prompt Tokens", usage.prompt_tokens),
    ]
    return [f"{_accent(label + ':')} {_value(str(value))}" for label, value in stats if value > 0]


def print_stats(result: LLMResult, duration_ms: int) -> None:
    """Print duration and token usage."""
    lines = format_stats(result, duration_ms)
    if not lines:
        return
    typer.echo()
    typer.echo(_accent("Performance Stats", bold=True))
    for line in lines:
        typer.echo(f"  {line}")
    typer.echo()


def print_commit_options(result: LLMResult) -> None:
    """Print the numbered commit message candidates."""
    rule = typer.style("•" * 37, fg=typer.colors.BRIGHT_BLUE)
    prefix = typer.style("∴ ", fg=typer.colors.BRIGHT_BLUE)
    typer.echo(f"{_accent('Commit Options', bold=True)} {rule}")
    for idx, message in enumerate(result.commit_messages, 1):
        typer.echo(f"{prefix}{_accent(f'Option {idx}:', bold=True)}")
        typer.echo(typer.style(message, fg=typer.colors.CYAN))
        if idx < len(result.commit_messages):
            typer.echo()
    typer.echo(rule)


def parse_choice(choice: str, result: LLMResult) -> Optional[str]:
    """Map the user's input to a commit message.

    Args:
        choice: Raw input. Empty selects option 1, "n" cancels.
        result: The generation result.

    Returns:
        The selected message, or None if the user cancelled.

    Raises:
        ValueError: If the input is not a valid option number.
    """
    choice = choice.strip().lower()
    if choice == "":
        return result.commit_messages[0]
    if choice == "n":
        return None
    if not choice.isdigit():
        raise ValueError("Input must be a number")
    index = int(choice)
    if not 1 <= index <= len(result.commit_messages):
        raise ValueError("Invalid input choice")
    return result.commit_messages[index - 1]


def select_commit_message(result: LLMResult) -> Optional[str]:
    """Ask the user to pick a candidate."""
    typer.echo()
    choice = typer.prompt(
        f"Select your commit [1-{len(result.commit_messages)}] (n: cancel, default: 1)",
        default="",
        show_default=False,
    )
    return parse_choice(choice, result)
