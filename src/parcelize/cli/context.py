"""CLI context shared by every command of one invocation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    """Log levels accepted by ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class CliContext:
    """Global options parsed by the main callback.

    Attributes:
        token: Hub secret key given on the command line, if any
        debug: Force client debug tracing on or off (None follows the host)
        json_output: Print the JSON envelope instead of rich output
        log_level: Log level override, None keeps the configured level
    """

    token: str | None = None
    debug: bool | None = None
    json_output: bool = False
    log_level: LogLevel | None = None

    def is_json_output_enabled(self) -> bool:
        return self.json_output
