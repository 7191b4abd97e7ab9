"""Application orchestration."""

from .orchestrator import RadioOrchestrator

__all__ = ["RadioOrchestrator"]
