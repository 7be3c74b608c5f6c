"""Configuration: frozen dataclass loaded from an optional YAML file and env vars."""

import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "BRACKETLOG_CONFIG"


@dataclass(frozen=True)
class Config:
    log_path: str = "./logs"
    log_format_extension: str = "log"

    def __post_init__(self):
        if not self.log_path:
            raise ValueError("log_path must not be empty")
        if not self.log_format_extension:
            raise ValueError("log_format_extension must not be empty")


def _normalize_extension(value: str) -> str:
    return value.strip().lstrip(".")


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or no file."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, then YAML, then LOG_PATH / LOG_FORMAT_EXTENSION."""
    yaml_data = load_yaml_config(path or os.environ.get(CONFIG_PATH_ENV))

    log_path = str(yaml_data.get("log_path", Config.log_path))
    extension = str(yaml_data.get("log_format_extension", Config.log_format_extension))

    log_path = os.environ.get("LOG_PATH", log_path)
    extension = os.environ.get("LOG_FORMAT_EXTENSION", extension)

    return Config(
        log_path=log_path,
        log_format_extension=_normalize_extension(extension),
    )
