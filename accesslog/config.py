"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _normalize_level(value: str) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("Unknown log level %r, using INFO", value)
        return "INFO"
    return level


@dataclass(frozen=True)
class Config:
    log_file: str = ""
    sql_db: str = ""
    truncate: bool = False
    log_level: str = "INFO"


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring it", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def _pick(cli_value, env_key: str, yaml_data: dict, yaml_key: str, default):
    """CLI flag > environment variable > YAML key > default."""
    if cli_value is not None:
        return cli_value
    if env_key in os.environ:
        return os.environ[env_key]
    if yaml_key in yaml_data and yaml_data[yaml_key] is not None:
        return yaml_data[yaml_key]
    return default


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data."""
    # --truncate is store_true, so an unset flag means "not given" here
    cli_truncate = True if getattr(cli_args, "truncate", False) else None

    return Config(
        log_file=str(_pick(cli_args.log_file, "ACCESS_LOG_FILE", yaml_data, "log_file", Config.log_file)),
        sql_db=str(_pick(cli_args.sql_db, "ACCESS_LOG_DB", yaml_data, "sql_db", Config.sql_db)),
        truncate=_parse_bool(
            _pick(cli_truncate, "ACCESS_LOG_TRUNCATE", yaml_data, "truncate", Config.truncate)
        ),
        log_level=_normalize_level(
            _pick(cli_args.log_level, "LOG_LEVEL", yaml_data, "log_level", Config.log_level)
        ),
    )
