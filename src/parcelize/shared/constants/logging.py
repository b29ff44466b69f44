"""
Logging Configuration Constants
"""


class LogConfig:
    """Log configuration constants."""

    ROOT_LOGGER = "parcelize"
    DEFAULT_LEVEL = "WARNING"
    DEBUG_LEVEL = "DEBUG"
    TIME_FORMAT = "[%H:%M:%S]"

    # Prefix of client trace messages
    DEBUG_PREFIX = "[ParcelAPI]:"
