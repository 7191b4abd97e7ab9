"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from radioremote import __version__

from .commands import config_group, run, serial_group, spotify_group

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".radioremote" / "logs"


def default_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log output goes for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "radioremote-debug.log"
    return LOG_DIR / "radioremote.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    # Determine log level based on flags
    if debug:
        level = logging.DEBUG
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = default_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Create rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    # Headless service: mirror to stderr when asked for verbose output
    if verbose or debug:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="radioremote")
@click.option(
    '--config',
    '-c',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.radioremote/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./radioremote-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Radio Remote - drive Spotify playback from a serial radio remote control.

    Channel buttons start the Spotify albums/playlists configured as
    channels, the volume knob changes volume and its push toggles playback.
    The remote's channel light follows whatever is playing on the
    configured device.

    \b
    Examples:
      # Run the bridge (same as 'radioremote run')
      radioremote

      # Log in to Spotify (once)
      radioremote spotify auth

      # Find the remote's serial port
      radioremote serial list

      # Write a starter config
      radioremote config init --serial-port /dev/ttyUSB0 --channel spotify:album:xyz

      # Enable debug logging
      radioremote --debug
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        verbose=verbose,
        debug=debug,
        log_file=log_file,
        log_level=log_level,
    )

    # No subcommand: run the bridge
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


# Register commands
cli.add_command(run)
cli.add_command(serial_group)
cli.add_command(spotify_group)
cli.add_command(config_group)

if __name__ == "__main__":
    cli()
