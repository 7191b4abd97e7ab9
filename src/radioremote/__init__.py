"""Radio Remote - bridge a serial radio remote control to Spotify playback."""

__version__ = "0.1.0"
