"""Serial remote command implementations."""

import logging
from datetime import datetime

import click
import serial

from radioremote.exceptions import SerialPortError
from radioremote.remote import Command, RemoteController, decode, encode_frame

logger = logging.getLogger(__name__)

COMMAND_NAMES = {
    "status": Command.SYSTEM_STATUS,
    "volume": Command.VOLUME,
    "channel": Command.CHANNEL_SELECT,
}


def open_serial(port: str, baud_rate: int, timeout: float) -> serial.Serial:
    """
    Open a serial port for a one-off command.

    Raises:
        click.ClickException: If the port can't be opened
    """
    try:
        return serial.Serial(port, baudrate=baud_rate, timeout=timeout)
    except serial.SerialException as e:
        error = SerialPortError(port, str(e))
        logger.error(error.technical_message)
        raise click.ClickException(error.get_full_message()) from e


def describe_frame(byte: int) -> str:
    """Human-readable form of one wire byte."""
    frame = decode(byte)
    try:
        name = Command(frame.command).name
    except ValueError:
        name = f"UNKNOWN({frame.command})"
    return f"0x{byte:02x} {name} value={frame.value}"


@click.group(name="serial")
def serial_group():
    """Serial remote commands."""
    pass


@serial_group.command(name="list")
def list_serial():
    """List available serial ports."""
    ports = RemoteController.list_ports()

    click.echo("Serial Ports:\n")
    if not ports:
        click.echo("  No serial ports found.")
    else:
        for i, port in enumerate(ports):
            click.echo(f"  [{i}] {port}")


@serial_group.command(name="monitor")
@click.argument("port")
@click.option("--baud-rate", "-b", type=int, default=115200, help="Baud rate (default: 115200)")
def monitor_serial(port: str, baud_rate: int):
    """
    Print frames received from the remote on PORT.

    Press Ctrl+C to stop monitoring.
    """
    connection = open_serial(port, baud_rate, timeout=0.1)

    click.echo(f"Monitoring {port} at {baud_rate} baud")
    click.echo("\nPress Ctrl+C to stop\n")

    try:
        with connection:
            while True:
                for byte in connection.read(1):
                    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
                    click.echo(f"[{timestamp}] {describe_frame(byte)}")
    except KeyboardInterrupt:
        click.echo("\n\nStopping monitor...")
    except serial.SerialException as e:
        raise click.ClickException(f"Lost {port}: {e}") from e


@serial_group.command(name="send")
@click.argument("port")
@click.argument("command", type=click.Choice(sorted(COMMAND_NAMES), case_sensitive=False))
@click.argument("value", type=click.IntRange(0, 15))
@click.option("--baud-rate", "-b", type=int, default=115200, help="Baud rate (default: 115200)")
def send_serial(port: str, command: str, value: int, baud_rate: int):
    """
    Write one frame to the remote on PORT.

    \b
    Examples:
      radioremote serial send /dev/ttyUSB0 channel 3    # light channel 3
      radioremote serial send /dev/ttyUSB0 channel 15   # light off
      radioremote serial send /dev/ttyUSB0 volume 15    # error flash
    """
    frame = encode_frame(COMMAND_NAMES[command.lower()], value)

    try:
        with open_serial(port, baud_rate, timeout=1.0) as connection:
            connection.write(frame)
    except serial.SerialException as e:
        raise click.ClickException(f"Could not write to {port}: {e}") from e

    click.echo(f"Sent {describe_frame(frame[0])}")
