from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Any, List, Optional, Tuple

from vkapi.domain.config import Session


@dataclass(frozen=True)
class MethodRequest:
    """
    One platform method call: the method name plus its parameters in wire order.

    Parameter order is part of the contract; it is never sorted.
    """

    method: str
    params: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, method: str, *params: Tuple[str, Any]) -> "MethodRequest":
        return cls(method=method, params=tuple(params))


def _single_bit(value: int) -> bool:
    return value != 0 and value & (value - 1) == 0


def flag_names(value: Flag) -> List[str]:
    """
    Names of the set flags, lower-cased, in the flag type's declared order.
    """
    names: List[str] = []
    for member in type(value).__members__.values():
        if not _single_bit(member.value):
            continue
        if member in value:
            names.append(member.name.lower())
    return names


def render_value(value: Any) -> Optional[str]:
    """
    Render one parameter value for the query string.

    Returns None for values that must be left out entirely: None, empty
    strings, empty sequences and empty flag sets.
    """
    if value is None:
        return None
    if isinstance(value, Flag):
        names = flag_names(value)
        return ",".join(names) if names else None
    if isinstance(value, Enum):
        return render_value(value.value)
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value or None
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        return ",".join(str(int(item)) for item in value)
    raise TypeError(f"Unsupported parameter value: {value!r}")


def encode_query(request: MethodRequest, session: Session) -> str:
    """
    Canonical query string: method parameters in order, then `v` when the
    session has a version, then `access_token` last.

    Values are not URL-escaped here; the transport escapes what it must.
    """
    pairs: List[Tuple[str, str]] = []
    for name, value in request.params:
        rendered = render_value(value)
        if rendered is not None:
            pairs.append((name, rendered))

    if session.api_version:
        pairs.append(("v", session.api_version))
    pairs.append(("access_token", session.access_token or ""))

    return "&".join(f"{name}={value}" for name, value in pairs)


def build_url(request: MethodRequest, session: Session) -> str:
    base = session.base_url
    if not base.endswith("/"):
        base += "/"
    return f"{base}{request.method}?{encode_query(request, session)}"
