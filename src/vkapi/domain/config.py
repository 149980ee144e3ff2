from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


DEFAULT_BASE_URL = "https://api.vk.com/method/"


class Browser(Protocol):
    """
    Transport port consumed by the method façades.

    Implementations receive a complete URL and return the raw response body,
    or raise `TransportError` when the platform cannot be reached.
    """

    def fetch(self, url: str) -> str:
        ...


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    api_version: Optional[str] = None
    timeout: float = 10.0
    access_token: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """
    Read-only call context shared by every method family.

    The token may be empty; façades check it before touching the transport.
    """

    browser: Browser
    access_token: Optional[str] = None
    api_version: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL

    @property
    def is_authorized(self) -> bool:
        return bool(self.access_token)
