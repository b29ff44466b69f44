"""Host runtime integration.

The client runs inside a game-server host that decides whether the process
is the server, whether it runs in the development studio, whether HTTP is
enabled, and which secrets are available. ``HostEnvironment`` is that seam;
``SettingsHost`` answers from Parcelize settings and the process environment.
"""

from __future__ import annotations

import os
import re
from typing import Mapping, Protocol

from parcelize.config.models.app_settings import Runtime
from parcelize.config.models.settings import Settings

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class HostEnvironment(Protocol):
    """What the client needs to know about the process it runs in."""

    def is_server(self) -> bool:
        """Whether the process is the game server."""

    def is_studio(self) -> bool:
        """Whether the process runs inside the development studio."""

    def http_enabled(self) -> bool:
        """Whether outbound HTTP requests are allowed."""

    def get_secret(self, name: str) -> str | None:
        """Return the secret stored under ``name``, or None."""


def secret_env_var(name: str) -> str:
    """Environment variable holding secret ``name``.

    Example:
        >>> secret_env_var("ParcelToken")
        'PARCEL_TOKEN'
    """
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").upper()


class SettingsHost:
    """Host environment backed by Settings and environment variables.

    Secrets are looked up in the environment first (``ParcelToken`` is read
    from ``PARCEL_TOKEN``), then in ``api.parcel.auth_token``.

    Args:
        settings: Loaded settings.
        environ: Environment mapping, ``os.environ`` by default.
    """

    def __init__(self, settings: Settings, environ: Mapping[str, str] | None = None) -> None:
        self.settings = settings
        self._environ = os.environ if environ is None else environ

    def is_server(self) -> bool:
        return self.settings.app.runtime == Runtime.SERVER

    def is_studio(self) -> bool:
        return self.settings.app.studio

    def http_enabled(self) -> bool:
        return self.settings.app.http_enabled

    def get_secret(self, name: str) -> str | None:
        value = self._environ.get(secret_env_var(name))
        if value:
            return value

        if name == self.settings.api.parcel.secret_name and self.settings.api.parcel.auth_token:
            return self.settings.api.parcel.auth_token

        return None
