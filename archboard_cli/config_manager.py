"""Configuration manager for ArchBoard CLI using TOML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger(__name__)


def _config_file() -> Path:
    # Resolved lazily so tests can point ARCHBOARD_HOME elsewhere.
    from . import config
    return config.CONFIG_FILE


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections).

    Returns an empty dict when the file is missing or malformed.
    """
    path = _config_file()
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    path = _config_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError as exc:
        logger.warning("Could not write config %s: %s", path, exc)
        return False


def load_miro_config() -> Dict[str, Any]:
    """Load the ``[miro]`` section (``api_token``, ``api_url``)."""
    section = load_full_config().get("miro", {})
    return dict(section) if isinstance(section, dict) else {}


def load_color_config() -> Dict[str, str]:
    """Load the ``[colors]`` section mapping module names to fill colors."""
    section = load_full_config().get("colors", {})
    if not isinstance(section, dict):
        return {}
    return {str(name): str(color) for name, color in section.items()}


def save_miro_config(api_token: str = "", api_url: str = "") -> bool:
    """Save Miro credentials to the TOML file.

    Preserves other sections (e.g. ``[colors]``) in the file.

    Args:
        api_token: Miro REST API access token
        api_url: Custom API base URL

    Returns:
        True if saved successfully, False otherwise
    """
    config = load_full_config()
    section = dict(config.get("miro", {}))
    if api_token:
        section["api_token"] = api_token
    if api_url:
        section["api_url"] = api_url
    config["miro"] = section
    return _save_full_config(config)


def clear_miro_token() -> bool:
    """Remove the stored API token, keeping everything else."""
    config = load_full_config()
    section = dict(config.get("miro", {}))
    if "api_token" not in section:
        return False
    del section["api_token"]
    config["miro"] = section
    return _save_full_config(config)


def mask_token(token: str) -> str:
    """Return a display-safe version of *token*."""
    if not token:
        return "(not set)"
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}{'*' * (len(token) - 8)}{token[-4:]}"
