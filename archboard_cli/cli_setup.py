"""Credential and palette configuration commands."""

from __future__ import annotations

from typing import Optional

import typer

from . import config, config_manager
from .cli_groups import config_grp
from .emitter import DEFAULT_COLOR, DEFAULT_PALETTE


def print_success(message: str, err: bool = False):
    """Print success message."""
    typer.echo(typer.style(f"✅ {message}", fg=typer.colors.GREEN), err=err)


def print_error(message: str):
    """Print error message."""
    typer.echo(typer.style(f"❌ {message}", fg=typer.colors.RED), err=True)


def print_info(message: str):
    """Print info message."""
    typer.echo(typer.style(f"ℹ️  {message}", fg=typer.colors.BLUE))


@config_grp.command("set-token")
def set_token(
    api_token: Optional[str] = typer.Option(
        None, "--token", "-t", help="Miro API token (prompted if omitted)."
    ),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Custom Miro API base URL."),
):
    """Store Miro credentials in ~/.archboard/config.toml."""
    if api_token is None:
        print_info("Create a token at: https://miro.com/app/settings/user-profile/apps")
        api_token = typer.prompt("Enter your Miro API token", hide_input=True)

    if not api_token.strip():
        print_error("API token cannot be empty!")
        raise typer.Exit(code=1)

    if not config_manager.save_miro_config(api_token.strip(), api_url or ""):
        print_error(f"Could not write {config.CONFIG_FILE}")
        raise typer.Exit(code=1)
    print_success(f"Saved Miro token to {config.CONFIG_FILE}")


@config_grp.command("unset-token")
def unset_token():
    """Remove the stored Miro token."""
    if config_manager.clear_miro_token():
        print_success("Removed stored Miro token.")
    else:
        print_info("No stored Miro token.")


@config_grp.command("show")
def show_config():
    """Show effective configuration (token masked)."""
    miro = config_manager.load_miro_config()
    token = config.MIRO_API_TOKEN or miro.get("api_token", "")
    typer.echo(f"Config file: {config.CONFIG_FILE}")
    typer.echo(f"API URL:     {config.MIRO_API_URL}")
    typer.echo(f"API token:   {config_manager.mask_token(token)}")
    typer.echo(f"Board name:  {config.BOARD_NAME}")

    palette = dict(DEFAULT_PALETTE)
    palette.update(config_manager.load_color_config())
    typer.echo("Colors:")
    for name, color in palette.items():
        typer.echo(f"  {name}: {color}")
    typer.echo(f"  (default): {DEFAULT_COLOR}")
