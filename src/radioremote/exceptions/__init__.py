"""
Custom exception hierarchy for radioremote.

## Exception Hierarchy

```
RadioRemoteError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── PlaybackError
│   ├── DeviceNotFoundError
│   └── PlaybackAuthError
└── SerialPortError
```

All custom exceptions carry a `user_message`, a `technical_message` for logs,
a `recoverable` flag and an optional `recovery_hint`.

See `radioremote.exceptions.handlers` for utilities to handle these
exceptions systematically.
"""

from .base import RadioRemoteError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_spotify_error,
)
from .playback import DeviceNotFoundError, PlaybackAuthError, PlaybackError
from .transport import SerialPortError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Playback
    "DeviceNotFoundError",
    "PlaybackAuthError",
    "PlaybackError",
    # Base
    "RadioRemoteError",
    # Transport
    "SerialPortError",
    # Handlers
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_spotify_error",
]
