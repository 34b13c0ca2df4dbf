"""
ledgermsg/config.py
Settings for the extraction server: whether attempts are validated
strictly, how the message field of incoming transactions is encoded,
where the HTTP API binds, and the log level.

Resolution order: DEFAULT_CONFIG < ledgermsg_config.json < LEDGERMSG_*
environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "strict_validation": False,
    "payload_encoding": "trytes",
    "api_host": "127.0.0.1",
    "api_port": 8766,
    "log_level": "INFO",
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "LEDGERMSG_STRICT": "strict_validation",
    "LEDGERMSG_PAYLOAD_ENCODING": "payload_encoding",
    "LEDGERMSG_LOG_LEVEL": "log_level",
}

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _config_path(project_root: Optional[Path] = None) -> Path:
    """ledgermsg_config.json under project_root, or the working directory."""
    root = project_root or Path.cwd()
    return root / "ledgermsg_config.json"


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read ledgermsg_config.json and merge it over DEFAULT_CONFIG.
    A missing file gives the defaults. An unreadable file, or one whose
    top level is not an object, is logged and also gives the defaults.
    """
    path = _config_path(project_root)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level value is not an object")
            return {**DEFAULT_CONFIG, **data}
        except (json.JSONDecodeError, OSError, ValueError) as e:
            logger.warning(f"Config load failed: {e}")
    return dict(DEFAULT_CONFIG)


def save_config(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Write the server settings to ledgermsg_config.json and return its path."""
    path = _config_path(project_root)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of config with LEDGERMSG_* environment variables applied."""
    merged = dict(config)
    for env_name, key in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        merged[key] = _parse_bool(raw) if key == "strict_validation" else raw.strip()
        logger.info(f"Config override from {env_name}: {key}={merged[key]}")
    return merged


def ensure_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load config and apply environment overrides.
    Returns merged config.
    """
    return apply_env_overrides(load_config(project_root))


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level  = getattr(logging, str(level).upper(), logging.INFO),
        format = LOG_FORMAT,
    )
