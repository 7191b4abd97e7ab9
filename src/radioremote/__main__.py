"""Main entry point for radioremote."""

from radioremote.cli.main import cli

if __name__ == "__main__":
    cli()
