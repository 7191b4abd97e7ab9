"""Reading and writing the configuration file.

The config file is the only thing radioremote persists. Writes go to a temp
file that is then renamed over the target, so a crash never leaves a
half-written config, and the previous file is kept as ``<name>.bak``.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from radioremote.exceptions import ConfigFileInvalidError, wrap_pydantic_error

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def backup_path(path: Path) -> Path:
    """Where ``write_config_file`` keeps the previous version of ``path``."""
    return path.with_suffix(path.suffix + ".bak")


def read_config_file(path: Path, model_type: type[M]) -> M | None:
    """
    Load and validate a configuration file.

    Returns:
        The validated model, or None if the file doesn't exist

    Raises:
        ConfigFileInvalidError: If the file is empty or not valid JSON
        ConfigValidationError: If the JSON holds a value the model rejects
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None

    if not text.strip():
        raise ConfigFileInvalidError(str(path), "File is empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigFileInvalidError(str(path), e.msg, line=e.lineno, column=e.colno) from e

    try:
        config = model_type.model_validate(data)
    except ValidationError as e:
        logger.error(f"Invalid configuration in {path}: {e}")
        raise wrap_pydantic_error(e, str(path)) from e

    logger.debug(f"Loaded configuration from {path}")
    return config


def write_config_file(config: BaseModel, path: Path, backup: bool = True) -> None:
    """
    Save a configuration atomically.

    Raises:
        OSError: If the file can't be written (permissions, disk full)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if backup and path.exists():
        shutil.copy2(path, backup_path(path))

    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        temp_path.write_text(config.model_dump_json(indent=2) + "\n", encoding="utf-8")
        temp_path.replace(path)
    finally:
        temp_path.unlink(missing_ok=True)

    logger.info(f"Saved configuration to {path}")
