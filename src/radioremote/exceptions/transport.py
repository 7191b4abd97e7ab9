"""Serial transport exceptions."""

from .base import RadioRemoteError


class SerialPortError(RadioRemoteError):
    """The remote control's serial port could not be opened."""

    default_recoverable = True
    default_hint = (
        "Check that the remote is plugged in and no other program holds the port. "
        "Run 'radioremote serial list' to see available ports."
    )

    def __init__(self, port: str, original_error: str | None = None):
        """
        Initialize serial port error.

        Args:
            port: Path of the serial port
            original_error: The original error message from pyserial
        """
        tech_msg = f"Failed to open serial port {port}"
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(f"Could not open serial port {port}", technical_message=tech_msg)
        self.port = port
