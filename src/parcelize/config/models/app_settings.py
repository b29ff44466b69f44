"""Application and logging configuration models.

The application settings describe the host runtime the client runs in.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from parcelize.shared.constants import LogConfig


class Runtime(str, Enum):
    """Side of the game the process runs on."""

    SERVER = "server"
    CLIENT = "client"


class AppSettings(BaseModel):
    """Host runtime configuration."""

    runtime: Runtime = Field(
        default=Runtime.SERVER,
        description="Execution context; the client only runs on the server",
    )
    studio: bool = Field(
        default=False,
        description="Running inside the development studio (enables debug tracing)",
    )
    http_enabled: bool = Field(
        default=True,
        description="Whether outbound HTTP requests are allowed",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default=LogConfig.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(
        default=True,
        description="Render console logs with rich instead of JSON lines",
    )


__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Runtime",
]
