"""Model management helpers: the config file store and observer lists."""

from radioremote.model_manager.observer import ObserverManager, RemoteEventObservers, StateObservers
from radioremote.model_manager.persistence import backup_path, read_config_file, write_config_file

__all__ = [
    # Observers
    "ObserverManager",
    "RemoteEventObservers",
    "StateObservers",
    # Config file
    "backup_path",
    "read_config_file",
    "write_config_file",
]
