from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from vkapi.domain.config import Session
from vkapi.domain.errors import (
    AccessTokenInvalidError,
    InvalidArgumentError,
    TransportError,
    api_error_for,
    transport_error_for,
)
from vkapi.infrastructure.envelope import Failure, decode_envelope
from vkapi.infrastructure.parameters import MethodRequest, build_url


logger = logging.getLogger(__name__)


@dataclass
class ApiCategory:
    """
    Base for a family of platform methods.

    Every operation follows the same steps:
      1) check the session token, then the caller's arguments;
      2) encode the request and hand the URL to the browser;
      3) decode the envelope, raising the mapped error on failure;
      4) decode the payload into entities (done by the subclass).

    Nothing is cached between calls and nothing is retried.
    """

    session: Session

    def _require_token(self) -> None:
        if not self.session.is_authorized:
            raise AccessTokenInvalidError()

    @staticmethod
    def _require_id(value: Optional[int], name: str) -> int:
        if value is None:
            raise InvalidArgumentError(f"{name} can not be null.")
        return value

    @staticmethod
    def _require_ids(ids: Optional[Sequence[int]], name: str) -> Sequence[int]:
        if not ids or any(item is None for item in ids):
            raise InvalidArgumentError(f"{name} can not be null or empty.")
        return ids

    def _call(self, request: MethodRequest) -> Any:
        url = build_url(request, self.session)
        logger.debug("calling method %s", request.method)

        try:
            body = self.session.browser.fetch(url)
        except TransportError:
            raise
        except OSError as exc:
            raise transport_error_for(exc) from exc

        envelope = decode_envelope(body)
        if isinstance(envelope, Failure):
            logger.warning(
                "method %s failed: error_code=%s error_msg=%s",
                request.method,
                envelope.code,
                envelope.message,
            )
            raise api_error_for(envelope.code, envelope.message, envelope.request_params)

        return envelope.payload
