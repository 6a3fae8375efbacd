"""CLI commands for global configuration management."""

from typing import Optional

import typer

from gitbuddy import global_config
from gitbuddy.cli.utils import mask_key
from gitbuddy.config import (
    AVAILABLE_MODELS,
    DEFAULT_BASE_URLS,
    VENDORS_WITHOUT_KEY,
    Vendor,
    default_model,
    get_api_key_env_var,
)
from gitbuddy.global_config import GlobalConfigError

VALID_VENDORS = ", ".join(v.value for v in Vendor)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global gitbuddy configuration in ~/.gitbuddy/",
    add_completion=False,
)


def _parse_vendor_argument(vendor: str) -> Vendor:
    try:
        return Vendor(vendor.lower())
    except ValueError:
        typer.echo(f"Invalid vendor: {vendor}", err=True)
        typer.echo(f"Valid vendors: {VALID_VENDORS}")
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        if not global_config.is_configured():
            typer.echo("No configuration found. Run 'gitbuddy init' to set up.")
            return

        config = global_config.load_global_config()
        vendor = global_config.get_default_vendor()
        parameters = global_config.get_model_parameters()

        typer.echo("Current gitbuddy configuration (~/.gitbuddy/config.yaml):")
        typer.echo()
        typer.echo(f"  Default Vendor: {vendor.value}")
        typer.echo(f"  Timeout: {global_config.get_timeout()}s")
        typer.echo(f"  Language: {global_config.get_language()}")
        typer.echo(f"  Wrap Width: {global_config.get_wrap_width()}")
        typer.echo(f"  Usage Mode: {global_config.get_usage_mode().value}")
        typer.echo(f"  Temperature: {parameters.temperature}")
        typer.echo(f"  Top P: {parameters.top_p}")
        typer.echo(f"  Top K: {parameters.top_k}")
        typer.echo(f"  Max Tokens: {parameters.max_tokens}")

        vendors = config.get("vendors") or {}
        if vendors:
            typer.echo()
            typer.echo("  Vendors:")
            for name, section in vendors.items():
                section = section or {}
                typer.echo(f"    {name}: {section.get('model', 'not set')} @ {section.get('base_url', 'default')}")

        ignore = global_config.get_ignore_patterns()
        if ignore:
            typer.echo()
            typer.echo("  Ignore Patterns:")
            for pattern in ignore:
                typer.echo(f"    - {pattern}")

        typer.echo()

        env_var = get_api_key_env_var(vendor)
        api_key = global_config.get_credential(env_var)
        if api_key:
            typer.echo(f"  API Key ({env_var}): {mask_key(api_key)}")
        elif vendor in VENDORS_WITHOUT_KEY:
            typer.echo(f"  API Key ({env_var}): not required")
        else:
            typer.echo(f"  API Key ({env_var}): not set")

    except GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("set-key")
def config_set_key(
    vendor: str = typer.Argument(
        ...,
        help=f"Vendor name ({VALID_VENDORS})",
    )
) -> None:
    """Set or update an API key for a vendor."""
    selected = _parse_vendor_argument(vendor)
    env_var = get_api_key_env_var(selected)

    typer.echo(f"Setting API key for {selected.value}")
    api_key = typer.prompt(f"Enter your {selected.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {selected.value}")


@config_app.command("set-vendor")
def config_set_vendor(
    vendor: str = typer.Argument(
        ...,
        help=f"Vendor name ({VALID_VENDORS})",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (defaults to the vendor's first known model)",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="API root, e.g. http://localhost:11434/v1",
    ),
) -> None:
    """Set the default vendor and its model and endpoint."""
    selected = _parse_vendor_argument(vendor)

    if model and model not in AVAILABLE_MODELS[selected]:
        typer.echo(f"Note: {model} is not in the list of known models for {selected.value}")
    model = model or default_model(selected)

    try:
        global_config.set_vendor_config(selected, model, base_url)
        global_config.set_default_vendor(selected)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Default vendor set to {selected.value}")
    typer.echo(f"  Model: {model}")
    typer.echo(f"  Base URL: {base_url or DEFAULT_BASE_URLS[selected]}")


@config_app.command("list-vendors")
def config_list_vendors() -> None:
    """List supported vendors with their endpoints and known models."""
    typer.echo("Supported vendors:")
    for vendor in Vendor:
        typer.echo()
        typer.echo(f"  {vendor.value} ({DEFAULT_BASE_URLS[vendor]})")
        for model in AVAILABLE_MODELS[vendor]:
            typer.echo(f"    - {model}")
