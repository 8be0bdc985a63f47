"""Configuration file manager for GeoBridge.

Handles reading and writing JSON state files using platformdirs
for cross-platform config directory management.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from geobridge.logging import GEOBRIDGE_LOGGER


class ConfigManager:
    """Manages a single JSON file in the GeoBridge config directory."""

    def __init__(self, file_name: str = "config.json", config_dir: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            file_name: Name of the JSON file inside the config directory.
            config_dir: Override for the config directory (defaults to the platform user config dir).
        """
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("geobridge", appauthor="geobridge"))
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / file_name

    def ensure_config_directory(self) -> None:
        """Create config directory with proper permissions if it doesn't exist."""
        if not self.config_dir.exists():
            self.config_dir.mkdir(parents=True, mode=0o700)
        else:
            os.chmod(self.config_dir, 0o700)

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from JSON file.

        Returns:
            Dict containing configuration, or empty dict if the file is missing or unreadable.
        """
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            GEOBRIDGE_LOGGER.error(f"Error loading config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            GEOBRIDGE_LOGGER.error(f"Config file {self.config_file} does not hold a JSON object")
            return {}
        return data

    def save_config(self, config: Dict[str, Any]) -> None:
        """Save configuration to JSON file with proper permissions.

        Args:
            config: Dictionary of configuration values to save.
        """
        self.ensure_config_directory()

        # Write to temp file first, then atomic rename
        temp_file = self.config_file.with_suffix(".json.tmp")
        try:
            with open(temp_file, "w") as f:
                json.dump(config, f, indent=2)
            os.chmod(temp_file, 0o600)
            temp_file.replace(self.config_file)
        except Exception as e:
            if temp_file.exists():
                temp_file.unlink()
            raise IOError(f"Failed to save config: {e}") from e

    def get_config_path(self) -> Path:
        return self.config_file

    def config_exists(self) -> bool:
        return self.config_file.exists()
