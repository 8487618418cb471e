# objectlog/config.py
"""
Configuration.

Loaded from YAML; every key is optional:

    store_dir: ~/.objectlog
    default_limit: 50
    view:
      width: 100
      height: 40
    log_level: INFO
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_STORE_DIR = "~/.objectlog"


@dataclass
class Config:
    store_dir: Path = Path(DEFAULT_STORE_DIR).expanduser()
    default_limit: int = 0
    view_width: int = 80
    view_height: int = 40
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "Config":
        """
        Parse configuration from a YAML string.

        Raises:
            ValueError: the YAML is malformed or a value has the wrong shape
        """
        try:
            data = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config YAML: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Config must be a YAML mapping")

        view = data.get("view") or {}
        if not isinstance(view, dict):
            raise ValueError("Config 'view' must be a mapping")

        defaults = cls()
        try:
            return cls(
                store_dir=Path(data.get("store_dir", defaults.store_dir)).expanduser(),
                default_limit=int(data.get("default_limit", defaults.default_limit)),
                view_width=int(view.get("width", defaults.view_width)),
                view_height=int(view.get("height", defaults.view_height)),
                log_level=str(data.get("log_level", defaults.log_level)).upper(),
            )
        except TypeError as e:
            raise ValueError(f"Invalid config value: {e}") from e

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            config = cls.from_yaml(f.read())
        logger.debug(f"Loaded config from {path}")
        return config
