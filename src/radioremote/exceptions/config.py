"""Configuration errors.

Raised while reading ~/.radioremote/config.json or the file given with
``--config``. Hints name the CLI command that fixes the problem.
"""

from typing import Any, Optional

from .base import RadioRemoteError

INIT_COMMAND = "radioremote config init --force"
RESET_HINT = f"Or run '{INIT_COMMAND}' to start over (the old file is kept as .bak)."

_TIMING_HINT = "Timings are whole milliseconds greater than zero."

# Advice per top-level config field
FIELD_HINTS: dict[str, str] = {
    "channels": (
        "Channels are Spotify context URIs such as spotify:album:<id>. Buttons 0-14 "
        "map to list positions and slot 15 means 'no channel', so at most 15 are allowed."
    ),
    "device_name": "Run 'radioremote spotify devices' and copy the speaker's name exactly.",
    "serial_port": "Run 'radioremote serial list' to see the ports the remote may be on.",
    "baud_rate": "The remote's firmware talks at 115200 baud unless it was rebuilt.",
    "poll_interval_ms": _TIMING_HINT,
    "debounce_ms": _TIMING_HINT,
    "heartbeat_ms": _TIMING_HINT,
    "spotify": (
        "Set spotify.client_id to the ID of your app on developer.spotify.com; "
        "spotify.redirect_uri must match the app's settings."
    ),
}


class ConfigurationError(RadioRemoteError):
    """The configuration can't be used."""

    default_recoverable = True
    default_hint = "Run 'radioremote config show' to see the configuration in effect."


class ConfigFileInvalidError(ConfigurationError):
    """The configuration file is empty or isn't valid JSON."""

    def __init__(
        self,
        file_path: str,
        parse_error: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        if line is not None:
            where = f"line {line}, column {column}"
            user_msg = f"{file_path} is not valid JSON ({where}: {parse_error})"
            hint = (
                f"Check {where} of {file_path}; a comma after the last item or a "
                f"missing quote are the usual causes. {RESET_HINT}"
            )
        else:
            user_msg = f"{file_path} can't be read as a configuration: {parse_error}"
            hint = f"Fix {file_path} by hand or run '{INIT_COMMAND}' to write a fresh one."

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config parse error in {file_path}: {parse_error}",
            recovery_hint=hint,
        )
        self.file_path = file_path
        self.parse_error = parse_error
        self.line = line
        self.column = column


class ConfigValidationError(ConfigurationError):
    """A value in the configuration file is out of range or the wrong type."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        source = file_path or "the configuration"
        hint = FIELD_HINTS.get(field.split(".")[0], f"Fix '{field}' in {source}.")

        super().__init__(
            user_message=f"Bad value for '{field}' in {source}: {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recovery_hint=f"{hint}\n{RESET_HINT}",
        )
        self.field = field
        self.value = value
        self.file_path = file_path
