"""Configuration paths and defaults for ArchBoard runs."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("ARCHBOARD_HOME", str(Path.home() / ".archboard"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

# Checked in order; a file matching the first suffix is never counted twice.
SOURCE_SUFFIXES = (".ts", ".js")
DEFAULT_SOURCE_DIR = "src"
DEFAULT_BOARD_NAME = "Architecture Diagram"
DEFAULT_MIRO_API_URL = "https://api.miro.com/v2"
DEFAULT_SPACING = 300

# Load configuration from TOML file (missing file -> empty sections)
from .config_manager import load_color_config, load_miro_config  # noqa: E402

_miro_config = load_miro_config()
_color_config = load_color_config()

# Environment wins over ~/.archboard/config.toml (set via `archboard config set-token`)
MIRO_API_TOKEN = os.environ.get("MIRO_API_TOKEN") or _miro_config.get("api_token", "")
MIRO_API_URL = os.environ.get("MIRO_API_URL") or _miro_config.get("api_url", DEFAULT_MIRO_API_URL)
BOARD_NAME = os.environ.get("BOARD_NAME") or DEFAULT_BOARD_NAME
GITHUB_URL = os.environ.get("GITHUB_URL", "")

# Module name -> fill color overrides for the diagram palette
COLOR_OVERRIDES = dict(_color_config)


def ensure_base_dirs() -> None:
    """Create the base directory for local configuration if needed."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)
