"""Main CLI commands for generating commit messages."""

import time
from typing import Optional

import typer

from gitbuddy import global_config
from gitbuddy.cli import ui
from gitbuddy.cli.utils import GenerationOptions, setup_logging
from gitbuddy.config import DEFAULT_NUMBER
from gitbuddy.git import (
    GitError,
    NoStagedChangesError,
    ensure_git_repository,
    get_staged_diff,
    git_commit,
    git_push,
)
from gitbuddy.global_config import GlobalConfigError
from gitbuddy.llm import LLMError, Prompt, generate_commit_messages


def run_generation(options: GenerationOptions, push: bool = False, dry_run: bool = False) -> None:
    """Generate candidates for the staged diff, commit the chosen one and optionally push."""
    try:
        ensure_git_repository()

        diff_content = get_staged_diff(global_config.get_ignore_patterns())
        model_config = global_config.load_model_config(options.vendor, options.model)
        parameters = global_config.get_model_parameters()

        ui.print_configuration(model_config, parameters, diff_content)

        start_separator, end_separator = ui.stream_separators()
        typer.echo(start_separator)
        started = time.monotonic()

        result = generate_commit_messages(
            diff_content,
            model_config,
            parameters,
            prompt=options.prompt,
            number=options.number,
            language=options.language or global_config.get_language(),
            hint=options.hint,
            reference=options.reference,
            wrap_width=global_config.get_wrap_width(),
            usage_mode=global_config.get_usage_mode(),
            timeout=global_config.get_timeout(),
            on_delta=ui.echo_delta,
        )

        duration_ms = int((time.monotonic() - started) * 1000)
        typer.echo()
        typer.echo(end_separator)
        ui.print_stats(result, duration_ms)

        if not result.commit_messages:
            typer.echo("The model returned no commit messages.", err=True)
            raise typer.Exit(1)

        ui.print_commit_options(result)

        try:
            message = ui.select_commit_message(result)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

        if message is None:
            typer.echo("Commit cancelled.")
            raise typer.Exit(0)

        git_commit(message, dry_run=dry_run)
        typer.echo("✓ Committed" + (" (dry run)" if dry_run else ""))

        if push:
            git_push(dry_run=dry_run)
            typer.echo("✓ Pushed to origin" + (" (dry run)" if dry_run else ""))

    except NoStagedChangesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except GlobalConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)


def main_command(
    ctx: typer.Context,
    vendor: Optional[str] = typer.Option(
        None,
        "--vendor",
        "-v",
        help="LLM vendor (openai, deepseek, ollama); defaults to the configured vendor",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name; defaults to the vendor's configured model",
    ),
    prompt: Prompt = typer.Option(
        Prompt.P1,
        "--prompt",
        help="System prompt template (p1: detailed, p2: concise)",
    ),
    hint: Optional[str] = typer.Option(
        None,
        "--hint",
        help="Extra instruction for the model",
    ),
    number: int = typer.Option(
        DEFAULT_NUMBER,
        "--number",
        "-n",
        min=1,
        help="Number of commit message candidates to generate",
    ),
    reference: Optional[str] = typer.Option(
        None,
        "--reference",
        "-r",
        help="Reference appended to every header (e.g. an issue number)",
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        help="Language of subject and body; defaults to the configured language",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log request and parsing details to stderr",
    ),
) -> None:
    """Generate AI-powered commit messages from staged changes."""
    setup_logging(debug)

    ctx.obj = GenerationOptions(
        vendor=vendor,
        model=model,
        prompt=prompt,
        hint=hint,
        number=number,
        reference=reference,
        language=language,
    )

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    run_generation(ctx.obj)


def ai_command(
    ctx: typer.Context,
    push: bool = typer.Option(
        False,
        "--push",
        help="Push to origin after committing",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Generate and select a message without committing or pushing",
    ),
) -> None:
    """Generate commit messages, commit the selected one and optionally push."""
    options = ctx.obj if isinstance(ctx.obj, GenerationOptions) else GenerationOptions()
    run_generation(options, push=push, dry_run=dry_run)
