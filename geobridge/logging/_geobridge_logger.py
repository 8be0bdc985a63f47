import logging


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[94m",  # Blue
        "INFO": "\033[92m",  # Green
        "WARNING": "\033[93m",  # Yellow
        "ERROR": "\033[91m",  # Red
        "CRITICAL": "\033[95m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record):
        # Colour a copy so other handlers still see the plain level name
        original_levelname = record.levelname
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


GEOBRIDGE_LOGGER = logging.getLogger("geobridge")
GEOBRIDGE_LOGGER.setLevel(logging.INFO)

# StreamHandler writes to stderr, keeping stdout free for channel replies
handler = logging.StreamHandler()
log_format = "%(asctime)s %(levelname)s %(message)s"
date_format = "%Y-%m-%d %H:%M:%S"
formatter = ColoredFormatter(fmt=log_format, datefmt=date_format)
handler.setFormatter(formatter)
GEOBRIDGE_LOGGER.handlers.clear()
GEOBRIDGE_LOGGER.addHandler(handler)


def set_log_level(level: str) -> None:
    """Set the bridge log level from a name such as ``"DEBUG"``."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        GEOBRIDGE_LOGGER.warning(f"Unknown log level '{level}', keeping {logging.getLevelName(GEOBRIDGE_LOGGER.level)}")
        return
    GEOBRIDGE_LOGGER.setLevel(numeric)
