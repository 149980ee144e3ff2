from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from vkapi.domain.errors import TransportError


logger = logging.getLogger(__name__)


@dataclass
class HttpClient:
    """
    Default `Browser` adapter on top of httpx.

    Each URL is requested exactly once; there is no retry or backoff.
    """

    timeout: float = 10.0

    def fetch(self, url: str) -> str:
        try:
            resp = httpx.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("transport failure: %s", type(exc).__name__)
            raise TransportError(str(exc)) from exc
        return resp.text
