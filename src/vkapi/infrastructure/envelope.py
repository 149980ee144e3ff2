from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union

from vkapi.domain.errors import MalformedResponseError


@dataclass(frozen=True)
class Success:
    payload: Any


@dataclass(frozen=True)
class Failure:
    code: int
    message: str
    # Echoed back by the platform for diagnostics only.
    request_params: List[Tuple[str, str]] = field(default_factory=list)


ResponseEnvelope = Union[Success, Failure]


def _parse_request_params(raw: Any) -> List[Tuple[str, str]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedResponseError("error.request_params must be a list")

    params: List[Tuple[str, str]] = []
    for item in raw:
        if not isinstance(item, dict) or "key" not in item:
            raise MalformedResponseError(f"Bad request_params entry: {item!r}")
        value = item.get("value")
        params.append((str(item["key"]), "" if value is None else str(value)))
    return params


def _parse_failure(error: Any) -> Failure:
    if not isinstance(error, dict):
        raise MalformedResponseError("'error' must be an object")

    code = error.get("error_code")
    if isinstance(code, str) and code.lstrip("-").isdigit():
        code = int(code)
    if not isinstance(code, int) or isinstance(code, bool):
        raise MalformedResponseError(f"Bad error_code: {code!r}")

    message = error.get("error_msg", "")
    if not isinstance(message, str):
        raise MalformedResponseError(f"Bad error_msg: {message!r}")

    return Failure(
        code=code,
        message=message,
        request_params=_parse_request_params(error.get("request_params")),
    )


def decode_envelope(body: str) -> ResponseEnvelope:
    """
    Split a raw response body into `Success` or `Failure`.

    The `response` value is passed through untouched: it may be an object,
    a list or a bare scalar depending on the method.
    """
    try:
        document = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Response body is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise MalformedResponseError("Response root must be a JSON object")

    if "error" in document:
        return _parse_failure(document["error"])
    if "response" in document:
        return Success(payload=document["response"])

    raise MalformedResponseError("Response has neither 'response' nor 'error'")
