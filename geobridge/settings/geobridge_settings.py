from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from geobridge.constants import (
    DEFAULT_CHANNEL_NAME,
    DEFAULT_NETWORK_FALLBACK_URL,
    DEFAULT_NETWORK_PRIMARY_URL,
)
from geobridge.logging import GEOBRIDGE_LOGGER

PERMISSION_PROMPT_MODES = ("console", "deny")


class GeoBridgeSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GEOBRIDGE_",
        env_nested_delimiter="__",
    )

    channel_name: str = DEFAULT_CHANNEL_NAME

    # GPS provider (gpsd via gpspipe)
    gps_enabled: bool = True
    gpspipe_timeout: float = 5.0

    # Network provider (IP geolocation)
    network_enabled: bool = True
    network_primary_url: str = DEFAULT_NETWORK_PRIMARY_URL
    network_fallback_url: str = DEFAULT_NETWORK_FALLBACK_URL
    network_timeout: float = 4.0

    # Passive provider: a configured static position
    passive_latitude: Optional[float] = None
    passive_longitude: Optional[float] = None

    # How an undetermined permission is resolved: "console" prompts, "deny" refuses
    permission_prompt: str = "console"

    log_level: str = "INFO"

    def __init__(self, log_level: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        if log_level is not None:
            self.log_level = log_level

    def model_post_init(self, __context) -> None:
        if self.permission_prompt not in PERMISSION_PROMPT_MODES:
            GEOBRIDGE_LOGGER.warning(
                f"{self.__class__.__name__} permission_prompt '{self.permission_prompt}' is not one of "
                f"{', '.join(PERMISSION_PROMPT_MODES)}; falling back to 'deny'"
            )
            self.permission_prompt = "deny"
        if (self.passive_latitude is None) != (self.passive_longitude is None):
            GEOBRIDGE_LOGGER.warning(
                f"{self.__class__.__name__} passive position needs both latitude and longitude; ignoring it"
            )
            self.passive_latitude = None
            self.passive_longitude = None
