from pathlib import Path
from typing import Optional

from geobridge.constants import LOCATION_PERMISSION_KEY, PERMISSIONS_FILE_NAME
from geobridge.location.types import PermissionState
from geobridge.logging import GEOBRIDGE_LOGGER
from geobridge.settings.config_manager import ConfigManager


class PermissionStore:
    """Persisted location permission decision."""

    def __init__(self, config_manager: Optional[ConfigManager] = None, config_dir: Optional[Path] = None):
        self.config_manager = config_manager or ConfigManager(PERMISSIONS_FILE_NAME, config_dir=config_dir)

    def get_state(self) -> Optional[PermissionState]:
        """
        Read the stored decision.

        Returns:
            UNDETERMINED when nothing is stored, the stored state, or None if the
            stored value is not a recognised state.
        """
        config = self.config_manager.load_config()
        if LOCATION_PERMISSION_KEY not in config:
            return PermissionState.UNDETERMINED

        state = PermissionState.parse(config[LOCATION_PERMISSION_KEY])
        if state is None:
            GEOBRIDGE_LOGGER.warning(f"Unrecognised stored location permission: {config[LOCATION_PERMISSION_KEY]!r}")
        return state

    def set_state(self, state: PermissionState) -> None:
        config = self.config_manager.load_config()
        config[LOCATION_PERMISSION_KEY] = state.value
        self.config_manager.save_config(config)
        GEOBRIDGE_LOGGER.info(f"Location permission set to {state.value}")

    def reset(self) -> None:
        """Forget the stored decision so the next request prompts again."""
        config = self.config_manager.load_config()
        if config.pop(LOCATION_PERMISSION_KEY, None) is not None:
            self.config_manager.save_config(config)
            GEOBRIDGE_LOGGER.info("Location permission reset")
