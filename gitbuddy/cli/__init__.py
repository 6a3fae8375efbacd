"""CLI entry point for gitbuddy.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from gitbuddy.cli.config import config_app
from gitbuddy.cli.init import init_config
from gitbuddy.cli.main import ai_command, main_command, run_generation

# Main application
app = typer.Typer(
    name="gitbuddy",
    help="gitbuddy: AI-powered commit message generator",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("init")(init_config)
app.command("ai")(ai_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)

__all__ = ["app", "run_generation"]
