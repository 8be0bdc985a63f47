from geobridge.settings.config_manager import ConfigManager
from geobridge.settings.geobridge_settings import GeoBridgeSettings

__all__ = ["ConfigManager", "GeoBridgeSettings"]
