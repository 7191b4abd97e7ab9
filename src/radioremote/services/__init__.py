"""Services for external collaborators."""

from .spotify_service import SpotifyService

__all__ = ["SpotifyService"]
