"""Core radio logic: shared state and playback reconciliation."""

from .reconciler import PlaybackReconciler
from .state import RadioState

__all__ = ["PlaybackReconciler", "RadioState"]
