"""Config command implementations."""

import logging
from pathlib import Path
from typing import Optional

import click

from radioremote.exceptions import RadioRemoteError
from radioremote.models import AppConfig
from radioremote.models.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def config_path_from(ctx: click.Context) -> Path:
    """Config path chosen with the top-level --config option."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


def load_config(ctx: click.Context) -> AppConfig:
    """
    Load the config file (or defaults) and apply environment overrides.

    Raises:
        click.ClickException: If the config file is invalid
    """
    path = config_path_from(ctx)
    try:
        return AppConfig.load_or_default(path).with_env_overrides()
    except RadioRemoteError as e:
        raise click.ClickException(e.get_full_message()) from e


@click.group(name="config")
def config_group():
    """Show or create the configuration file."""
    pass


@config_group.command(name="show")
@click.pass_context
def show_config(ctx):
    """Print the effective configuration (file + environment)."""
    path = config_path_from(ctx)
    config = load_config(ctx)

    source = str(path) if path.exists() else f"{path} (not found, showing defaults)"
    click.echo(f"Config: {source}\n")
    click.echo(config.model_dump_json(indent=2))


@config_group.command(name="init")
@click.option('--device-name', type=str, default=None, help='Spotify device the radio controls')
@click.option('--serial-port', type=str, default=None, help='Serial port of the remote')
@click.option('--client-id', type=str, default=None, help='Spotify OAuth client ID')
@click.option(
    '--channel',
    'channels',
    multiple=True,
    help='Channel context URI, in button order (repeatable)'
)
@click.option('--force', is_flag=True, help='Overwrite an existing config file')
@click.pass_context
def init_config(
    ctx,
    device_name: Optional[str],
    serial_port: Optional[str],
    client_id: Optional[str],
    channels: tuple[str, ...],
    force: bool
):
    """
    Write a config file.

    \b
    Examples:
      radioremote config init --serial-port /dev/ttyUSB0 \\
          --channel spotify:album:1A2B --channel spotify:playlist:3C4D
    """
    path = config_path_from(ctx)
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")

    values: dict = {"channels": list(channels)}
    if device_name:
        values["device_name"] = device_name
    if serial_port:
        values["serial_port"] = serial_port
    if client_id:
        values["spotify"] = {"client_id": client_id}

    try:
        config = AppConfig.model_validate(values)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    config.save(path)
    logger.info(f"Wrote config to {path}")
    click.echo(f"Wrote {path}")
