"""
CLI Constants
"""


class CLIDefaults:
    """Default values and exit codes for the CLI."""

    VERSION = "1.0.0"
    APP_NAME = "parcelize"

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_NO_DATA = 2


class CLIMessages:
    """User-facing CLI messages."""

    VERSION_TEXT = "Parcelize CLI v{version}"
    NO_DATA = "No data returned for {command} (request failed or response was empty)"
    ERROR_PREFIX = "Error"
    WHITELIST_SUCCESS = "Successfully whitelisted {user_id} for {product_id}"
    WHITELIST_FAILED = "Failed to whitelist {user_id} for {product_id}: {reason}"
