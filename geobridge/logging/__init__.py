from geobridge.logging._geobridge_logger import GEOBRIDGE_LOGGER, ColoredFormatter, set_log_level

__all__ = ["GEOBRIDGE_LOGGER", "ColoredFormatter", "set_log_level"]
