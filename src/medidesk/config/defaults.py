"""Default configuration values and constants for configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Default configuration tree used when no files are present.
DEFAULT_CONFIG: dict[str, Any] = {
    "general": {
        "verbosity": "info",
        "output_format": "text",
        "color_enabled": True,
        "log_file": str(Path.home() / ".medidesk" / "medidesk.log"),
    },
    "ui": {
        # Seconds before an error/success banner disappears
        "message_ttl_seconds": 5.0,
        # Redraw/expiry ticks per second
        "tick_rate_hz": 30.0,
        "min_width": 95,
        "min_height": 35,
    },
    "storage": {
        # "sqlite" or "memory"
        "backend": "sqlite",
        "db_path": "medidesk.db",
        # Create a root/root account on an empty database
        "seed_root_user": True,
    },
}

ENV_PREFIX = "MEDIDESK"
USER_CONFIG_PATH = Path.home() / ".medidesk" / "config.yaml"
PROJECT_CONFIG_FILENAME = "medidesk.yaml"
