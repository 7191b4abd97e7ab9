"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

```
┌─────────────────────────────────────────┐
│  USER LAYER (CLI)                       │
│  - Formats error.user_message           │
│  - Shows error.recovery_hint            │
└─────────────────────────────────────────┘
                  ↑  RadioRemoteError
┌─────────────────────────────────────────┐
│  APPLICATION LAYER (Orchestrator)       │
│  - Absorbs failures of hardware actions │
│  - Signals the remote on a lost device  │
└─────────────────────────────────────────┘
                  ↑  PlaybackError
┌─────────────────────────────────────────┐
│  SERVICE LAYER (SpotifyService)         │
│  - Converts SpotifyException            │
└─────────────────────────────────────────┘
                  ↑  SpotifyException, SerialException
┌─────────────────────────────────────────┐
│  LOW LEVEL (spotipy, pyserial, I/O)     │
└─────────────────────────────────────────┘
```

## Handling Patterns

| Pattern | Code |
|---------|------|
| Log, swallow, return fallback | `@handle_errors(operation_name="volume", re_raise=False)` |
| Log and re-raise | `@handle_errors(operation_name="init", re_raise=True)` |
| Convert spotipy errors | `raise wrap_spotify_error(e, "pause", device_id) from e` |
| Convert Pydantic errors | `raise wrap_pydantic_error(e, str(path)) from e` |
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from pydantic import ValidationError

from .base import RadioRemoteError
from .config import ConfigValidationError
from .playback import DeviceNotFoundError, PlaybackAuthError, PlaybackError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Args:
        operation_name: Name of the operation for logging (e.g., "set volume")
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Example:
        ```python
        @handle_errors(operation_name="select channel", re_raise=False)
        def _on_channel_selected(self, channel: int) -> None:
            ...
        ```
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except RadioRemoteError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")
                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.log(
                    log_level,
                    f"Unexpected error during {operation_name}: {e}",
                    exc_info=True
                )
                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


def wrap_pydantic_error(error: ValidationError, file_path: str) -> ConfigValidationError:
    """
    Convert a validation failure of the config file into a ConfigValidationError.

    A single bad field is reported by name so its hint can be looked up;
    several are listed together under "multiple fields".
    """
    errors = error.errors()

    def location(err) -> str:
        return ".".join(str(part) for part in err.get("loc", ())) or "config"

    if len(errors) == 1:
        err = errors[0]
        return ConfigValidationError(
            field=location(err),
            value=err.get("input"),
            error_msg=err.get("msg", "validation failed"),
            file_path=file_path,
        )

    lines = [f"  - {location(err)}: {err.get('msg', 'validation failed')}" for err in errors]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} problems:\n" + "\n".join(lines),
        file_path=file_path,
    )


def wrap_spotify_error(
    error: Exception, operation: str, device_id: Optional[str] = None
) -> PlaybackError:
    """
    Convert a spotipy exception into a PlaybackError.

    A 404 on a device-targeted call means the bound device vanished and is
    reported as DeviceNotFoundError; 401 becomes PlaybackAuthError.

    Args:
        error: The original exception (usually spotipy.SpotifyException)
        operation: Description of the failed call (e.g., "pause playback")
        device_id: The device the call targeted, if any

    Returns:
        A PlaybackError with appropriate type and message
    """
    status = getattr(error, "http_status", None)

    if status == 404 and device_id is not None:
        return DeviceNotFoundError(device_id=device_id, original_error=str(error))

    if status == 401:
        return PlaybackAuthError(
            "Spotify session expired",
            http_status=status,
            technical_message=f"Failed to {operation}: {error}",
        )

    return PlaybackError(
        f"Failed to {operation}",
        http_status=status,
        technical_message=f"Failed to {operation} (HTTP {status}): {error}",
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, RadioRemoteError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
