"""CLI command for initializing gitbuddy configuration."""

import typer

from gitbuddy import global_config
from gitbuddy.config import (
    AVAILABLE_MODELS,
    DEFAULT_BASE_URLS,
    DEFAULT_VENDOR,
    VENDORS_WITHOUT_KEY,
    Vendor,
    get_api_key_env_var,
)
from gitbuddy.global_config import GlobalConfigError


def init_config() -> None:
    """Initialize gitbuddy global configuration interactively."""
    typer.echo("Welcome to gitbuddy! Let's set up your configuration.")
    typer.echo()

    if global_config.is_configured():
        overwrite = typer.confirm(
            "Configuration already exists at ~/.gitbuddy/config.yaml. Overwrite?",
            default=False
        )
        if not overwrite:
            typer.echo("Keeping existing configuration.")
            raise typer.Exit(0)

    # Select vendor
    typer.echo("Available vendors:")
    vendors = list(Vendor)
    for i, vendor in enumerate(vendors, 1):
        typer.echo(f"  {i}. {vendor.value}")

    vendor_choice = typer.prompt(
        f"Select a vendor (1-{len(vendors)})",
        type=int,
        default=vendors.index(DEFAULT_VENDOR) + 1
    )

    if vendor_choice < 1 or vendor_choice > len(vendors):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)

    selected_vendor = vendors[vendor_choice - 1]

    # Select model
    models = AVAILABLE_MODELS[selected_vendor]
    typer.echo()
    typer.echo(f"Available models for {selected_vendor.value}:")
    for i, model in enumerate(models, 1):
        typer.echo(f"  {i}. {model}")

    model_choice = typer.prompt(
        f"Select a model (1-{len(models)})",
        type=int,
        default=1
    )

    if model_choice < 1 or model_choice > len(models):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)

    selected_model = models[model_choice - 1]

    base_url = typer.prompt(
        "API base URL",
        default=DEFAULT_BASE_URLS[selected_vendor]
    )

    # Get API key
    api_key = None
    if selected_vendor not in VENDORS_WITHOUT_KEY:
        typer.echo()
        api_key = typer.prompt(
            f"Enter your {selected_vendor.value} API key",
            hide_input=True
        )

    try:
        global_config.initialize_default_config()
        global_config.set_vendor_config(selected_vendor, selected_model, base_url)
        global_config.set_default_vendor(selected_vendor)
        if api_key:
            global_config.save_credential(get_api_key_env_var(selected_vendor), api_key)

        typer.echo()
        typer.echo("✓ Configuration saved to ~/.gitbuddy/")
        typer.echo(f"  Vendor: {selected_vendor.value}")
        typer.echo(f"  Model: {selected_model}")
        typer.echo(f"  Base URL: {base_url}")
        typer.echo()
        typer.echo("You can now use 'gitbuddy' in any git repository!")

    except GlobalConfigError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        raise typer.Exit(1)
