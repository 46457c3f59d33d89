"""
Purpose: Central configuration for the Directions client.
What it does:

Stores the tunables for talking to the routing service:

BASE_URL = https://api.mapbox.com
TIMEOUT = 10 seconds
MAX_WORKERS = 4 (thread pool used by enqueue_call)

Values can be overridden from the environment or a .env file:

DIRECTIONS_BASE_URL=http://localhost:5000
DIRECTIONS_TIMEOUT=5
DIRECTIONS_MAX_WORKERS=8

Rule: No logic here, just parameters (and the User-Agent string built from them).
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

SDK_NAME = "directions-client"
SDK_VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://api.mapbox.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 4


def _sdk_identity() -> str:
    return f"{SDK_NAME}/{SDK_VERSION} ({platform.system() or 'unknown'})"


@dataclass(frozen=True)
class ClientSettings:
    """
    Connection settings shared by every request built from the same builder.
    """

    base_url: str = DEFAULT_BASE_URL

    # How long to wait for the service before giving up (seconds).
    timeout: float = DEFAULT_TIMEOUT

    # Size of the thread pool that runs enqueued calls.
    max_workers: int = DEFAULT_MAX_WORKERS

    # SDK identity sent as User-Agent; a client app name gets prefixed to it.
    user_agent: str = _sdk_identity()

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not self.base_url:
            raise ValueError("base_url must not be empty")

        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")

        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_workers <= 0:
            raise ValueError("max_workers must be > 0")

    def header_user_agent(self, client_app_name: Optional[str] = None) -> str:
        if client_app_name:
            return f"{client_app_name} {self.user_agent}"
        return self.user_agent


def default_settings() -> ClientSettings:
    """
    Convenience factory: defaults overridden by DIRECTIONS_* environment variables.
    """
    settings = ClientSettings(
        base_url=os.getenv("DIRECTIONS_BASE_URL", DEFAULT_BASE_URL),
        timeout=float(os.getenv("DIRECTIONS_TIMEOUT", DEFAULT_TIMEOUT)),
        max_workers=int(os.getenv("DIRECTIONS_MAX_WORKERS", DEFAULT_MAX_WORKERS)),
    )
    settings.validate()
    return settings
