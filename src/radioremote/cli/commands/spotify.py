"""Spotify command implementations."""

import logging

import click

from radioremote.exceptions import RadioRemoteError
from radioremote.services import SpotifyService

from .config import load_config

logger = logging.getLogger(__name__)


@click.group(name="spotify")
def spotify_group():
    """Spotify account and device commands."""
    pass


@spotify_group.command(name="auth")
@click.pass_context
def auth_spotify(ctx):
    """
    Log in to Spotify.

    Opens a browser for the OAuth (PKCE) login. The token is cached, so
    this only needs to be done once.
    """
    config = load_config(ctx)
    if not config.spotify.is_configured:
        raise click.ClickException(
            "spotify.client_id is not set. Create an app at "
            "https://developer.spotify.com/dashboard and run "
            "'radioremote config init --client-id <id>'."
        )

    with SpotifyService(config.spotify) as service:
        try:
            service.authenticate()
        except RadioRemoteError as e:
            raise click.ClickException(e.get_full_message()) from e

    click.echo("Spotify authorized.")


@spotify_group.command(name="devices")
@click.pass_context
def list_devices(ctx):
    """List Spotify Connect devices (* marks the configured one)."""
    config = load_config(ctx)

    with SpotifyService(config.spotify) as service:
        try:
            devices = service.list_devices()
        except RadioRemoteError as e:
            raise click.ClickException(e.get_full_message()) from e

    click.echo("Spotify Devices:\n")
    if not devices:
        click.echo("  No devices found.")
        return

    for device in devices:
        marker = "*" if device.name == config.device_name else " "
        active = " (active)" if device.is_active else ""
        volume = f" {device.volume_percent}%" if device.volume_percent is not None else ""
        click.echo(f" {marker} {device.name} [{device.type}]{volume}{active}  {device.id}")
