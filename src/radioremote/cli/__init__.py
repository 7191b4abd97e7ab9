"""Command-line interface for radioremote."""
