"""Run command - starts the remote/Spotify bridge."""

import logging
import sys

import click

from radioremote.exceptions import format_error_for_display

from .config import load_config

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    '--port',
    '-p',
    type=str,
    default=None,
    help='Serial port of the remote (overrides config)'
)
@click.option(
    '--device-name',
    '-d',
    type=str,
    default=None,
    help='Spotify device to control (overrides config)'
)
@click.pass_context
def run(ctx, port: str | None, device_name: str | None):
    """
    Run the bridge until Ctrl+C.

    Connects to the remote, keeps its channel light in sync with Spotify
    and turns button presses into playback commands.
    """
    # Lazy imports keep --help fast
    from radioremote.cli.main import default_log_path, setup_logging
    from radioremote.orchestration import RadioOrchestrator

    obj = ctx.find_root().obj or {}
    verbose = obj.get("verbose", 0)
    debug = obj.get("debug", False)
    log_file = obj.get("log_file")
    log_level = obj.get("log_level", "INFO")

    setup_logging(verbose, debug, log_file, log_level)
    logger.info("Starting Radio Remote")

    config = load_config(ctx)
    updates = {}
    if port:
        updates["serial_port"] = port
    if device_name:
        updates["device_name"] = device_name
    if updates:
        config = config.model_copy(update=updates)

    if config.serial_port is None:
        click.echo("No serial port configured - running without the remote.", err=True)
    if not config.channels:
        click.echo("No channels configured - channel buttons will signal an error.", err=True)

    try:
        orchestrator = RadioOrchestrator(config)
        click.echo(f"Controlling '{config.device_name}'. Press Ctrl+C to stop.")
        orchestrator.run()

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running application")

        user_message, recovery_hint = format_error_for_display(e)

        click.echo("\n" + "="*70, err=True)
        click.echo(f"ERROR: {user_message}", err=True)
        click.echo("="*70, err=True)

        if recovery_hint:
            click.echo(f"\n{recovery_hint}", err=True)

        click.echo(f"\nFor details, check the log file: {default_log_path(debug, log_file)}", err=True)
        sys.exit(1)
