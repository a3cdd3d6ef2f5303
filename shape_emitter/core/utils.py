"""
Utility functions: settings loading, logging setup and random sources
"""

import logging
import logging.handlers
import os
import numpy as np
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union


logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class Settings:
    """
    Runtime settings read from a YAML file.

    Example file:
        logging:
          level: DEBUG
          log_file: logs/emitter.log
        seed: 42
        presets_dir: ~/.shape-emitter/presets
    """
    logging: Dict[str, Any] = field(default_factory=dict)
    seed: Optional[int] = None
    presets_dir: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Settings':
        data = data or {}
        presets_dir = data.get('presets_dir')
        seed = data.get('seed')
        return cls(
            logging=dict(data.get('logging') or {}),
            seed=None if seed is None else int(seed),
            presets_dir=Path(presets_dir).expanduser() if presets_dir else None,
        )


def load_settings(path: Union[str, Path]) -> Settings:
    """Load settings from a YAML file."""
    path = Path(path)
    logger.info("Loading settings from %s", path)
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error("Settings file not found at %s", path)
        raise
    except yaml.YAMLError:
        logger.error("Error parsing YAML from %s", path)
        raise
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    return Settings.from_dict(data)


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from a ``logging`` settings section.

    Always logs to the console. When ``log_file`` is set, also logs to a
    rotating file (1MB, 5 backups).
    """
    log_level = str(config.get('level', 'WARNING')).upper()
    log_format = config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = config.get('log_file')

    root = logging.getLogger()
    root.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if root.hasHandlers():
        root.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logger.debug("Log level set to %s", log_level)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seeded generator for reproducible emission; None draws fresh entropy"""
    return np.random.default_rng(seed)
