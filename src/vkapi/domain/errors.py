from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Type


class VkApiError(Exception):
    """Base exception for all library errors."""


class AccessTokenInvalidError(VkApiError):
    """Raised before any request when the session carries no access token."""

    def __init__(self, message: str = "Access token is missing or empty.") -> None:
        super().__init__(message)


class InvalidArgumentError(VkApiError, ValueError):
    """Raised before any request when a required argument is null or empty."""


class TransportError(VkApiError):
    """Raised when the platform could not be reached at all."""


class MalformedResponseError(VkApiError):
    """Raised when a response body breaks the wire contract."""


class ApiResponseError(VkApiError):
    """Raised when the platform returns an error envelope."""

    def __init__(
        self,
        message: str,
        *,
        code: int,
        request_params: Optional[List[Tuple[str, str]]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.request_params = list(request_params or [])


class UserAuthorizationFailError(ApiResponseError):
    """The platform rejected the access token."""


class AccessDeniedError(ApiResponseError):
    """The requested data is hidden by the owner's privacy settings."""


ERROR_KINDS: Dict[int, Type[ApiResponseError]] = {
    5: UserAuthorizationFailError,
    15: AccessDeniedError,
    200: AccessDeniedError,
    201: AccessDeniedError,
    203: AccessDeniedError,
    260: AccessDeniedError,
}


def api_error_for(
    code: int,
    message: str,
    request_params: Optional[List[Tuple[str, str]]] = None,
) -> ApiResponseError:
    """
    Build the typed error for a platform error code.

    Unknown codes fall back to `ApiResponseError` with code and message kept verbatim.
    """
    kind = ERROR_KINDS.get(code, ApiResponseError)
    return kind(message, code=code, request_params=request_params)


def transport_error_for(exc: BaseException) -> TransportError:
    if isinstance(exc, TransportError):
        return exc
    return TransportError(str(exc))
