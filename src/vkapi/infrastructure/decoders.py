from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

from vkapi.domain.errors import MalformedResponseError
from vkapi.domain.schemas import (
    Connections,
    Contacts,
    Counters,
    Education,
    Group,
    GroupPhotos,
    GroupPublicity,
    GroupType,
    LastSeen,
    PhotoPreviews,
    Place,
    Relative,
    RelativeType,
    School,
    Sex,
    University,
    User,
    VkCollection,
)


T = TypeVar("T")

_INT_RE = re.compile(r"^-?\d+$")

_PHOTO_KEYS = (
    "photo_50",
    "photo_100",
    "photo_200",
    "photo_200_orig",
    "photo_400_orig",
    "photo_max",
    "photo_max_orig",
)
_CONNECTION_KEYS = ("twitter", "skype", "facebook", "facebook_name", "livejournal", "instagram")
_CONTACT_KEYS = ("mobile_phone", "home_phone")
_COUNTER_KEYS = tuple(Counters.model_fields)
_GROUP_PHOTO_KEYS = ("photo", "photo_medium", "photo_big")


# ---------------------------------------------------------------------------
# Field readers. Absent (or JSON null) -> None; wrong type -> MalformedResponseError.
# ---------------------------------------------------------------------------


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise MalformedResponseError(f"Field {key!r}: expected integer, got {value!r}")
    if isinstance(value, int):
        return value
    # Older API versions send numbers as decimal strings.
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        return int(value.strip())
    raise MalformedResponseError(f"Field {key!r}: expected integer, got {value!r}")


def _int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    return _to_int(value, key)


def _required_int(data: Mapping[str, Any], *keys: str) -> int:
    for key in keys:
        if data.get(key) is not None:
            return _to_int(data[key], key)
    raise MalformedResponseError(f"Missing required field {keys[0]!r} in {dict(data)!r}")


def _nonzero_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = _int(data, key)
    return value or None


def _bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return _to_int(value, key) != 0


def _str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise MalformedResponseError(f"Field {key!r}: expected string, got {value!r}")


def _object(data: Mapping[str, Any], key: str) -> Optional[Dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MalformedResponseError(f"Field {key!r}: expected object, got {value!r}")
    return value


def _array(data: Mapping[str, Any], key: str) -> Optional[List[Any]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise MalformedResponseError(f"Field {key!r}: expected list, got {value!r}")
    return value


def _expect_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedResponseError(f"Expected {what} object, got {value!r}")
    return value


def _strings(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[Dict[str, Optional[str]]]:
    """Collect flat string fields; None when none of them was sent."""
    if not any(data.get(key) is not None for key in keys):
        return None
    return {key: _str(data, key) for key in keys}


# ---------------------------------------------------------------------------
# Entity decoders
# ---------------------------------------------------------------------------


def decode_place(value: Any, key: str) -> Optional[Place]:
    if value is None:
        return None
    if isinstance(value, dict):
        return Place(id=_required_int(value, "id"), title=_str(value, "title"))
    place_id = _to_int(value, key)
    return Place(id=place_id) if place_id else None


def decode_counters(data: Any) -> Counters:
    data = _expect_object(data, "counters")
    return Counters(**{key: _int(data, key) for key in _COUNTER_KEYS})


def decode_education(data: Mapping[str, Any]) -> Optional[Education]:
    """
    Read the flat `university*` / `faculty*` / `graduation` profile fields.

    University `0` means the user never filled the block in. Faculty `0`
    likewise means "no faculty", so it decodes to None rather than 0.
    """
    university_id = _int(data, "university")
    if not university_id:
        return None
    return Education(
        university_id=university_id,
        university_name=_str(data, "university_name"),
        faculty_id=_nonzero_int(data, "faculty"),
        faculty_name=_str(data, "faculty_name"),
        graduation=_int(data, "graduation"),
    )


def decode_university(data: Any) -> University:
    data = _expect_object(data, "university")
    return University(
        id=_required_int(data, "id"),
        country=_int(data, "country"),
        city=_int(data, "city"),
        name=_str(data, "name"),
        faculty=_int(data, "faculty"),
        faculty_name=_str(data, "faculty_name"),
        chair=_int(data, "chair"),
        chair_name=_str(data, "chair_name"),
        graduation=_int(data, "graduation"),
    )


def decode_school(data: Any) -> School:
    data = _expect_object(data, "school")
    return School(
        id=_required_int(data, "id"),
        country=_int(data, "country"),
        city=_int(data, "city"),
        name=_str(data, "name"),
        year_from=_int(data, "year_from"),
        year_to=_int(data, "year_to"),
        year_graduated=_int(data, "year_graduated"),
        class_name=_str(data, "class"),
        type=_int(data, "type"),
        type_str=_str(data, "type_str"),
    )


def decode_relative(data: Any) -> Relative:
    data = _expect_object(data, "relative")
    tag = _str(data, "type")
    try:
        relative_type = RelativeType(tag)
    except ValueError:
        raise MalformedResponseError(f"Unknown relative type: {tag!r}") from None
    return Relative(type=relative_type, id=_int(data, "id"), name=_str(data, "name"))


def decode_last_seen(data: Any) -> LastSeen:
    data = _expect_object(data, "last_seen")
    return LastSeen(time=_int(data, "time"), platform=_int(data, "platform"))


def _decode_sex(data: Mapping[str, Any]) -> Optional[Sex]:
    value = _int(data, "sex")
    if value is None:
        return None
    try:
        return Sex(value)
    except ValueError:
        raise MalformedResponseError(f"Unknown sex value: {value!r}") from None


def _decode_lists(data: Mapping[str, Any]) -> Optional[Tuple[int, ...]]:
    value = data.get("lists")
    if value is None:
        return None
    if isinstance(value, str):
        return tuple(_to_int(part, "lists") for part in value.split(",") if part.strip())
    if isinstance(value, list):
        return tuple(_to_int(part, "lists") for part in value)
    raise MalformedResponseError(f"Field 'lists': expected list, got {value!r}")


def _decode_many(data: Mapping[str, Any], key: str, decoder: Callable[[Any], T]) -> Optional[Tuple[T, ...]]:
    items = _array(data, key)
    if items is None:
        return None
    return tuple(decoder(item) for item in items)


def decode_user(data: Any) -> User:
    """
    Decode one profile object.

    Only the id is required (`id`, or `uid` in older payloads). Everything
    else stays None unless the platform sent it.
    """
    data = _expect_object(data, "user")

    photos = _strings(data, _PHOTO_KEYS)
    contacts = _strings(data, _CONTACT_KEYS)
    connections = _strings(data, _CONNECTION_KEYS)
    counters = _object(data, "counters")
    last_seen = _object(data, "last_seen")

    return User(
        id=_required_int(data, "id", "uid"),
        first_name=_str(data, "first_name"),
        last_name=_str(data, "last_name"),
        nickname=_str(data, "nickname"),
        domain=_str(data, "domain"),
        sex=_decode_sex(data),
        birth_date=_str(data, "bdate"),
        city=decode_place(data.get("city"), "city"),
        country=decode_place(data.get("country"), "country"),
        timezone=_int(data, "timezone"),
        photo_previews=PhotoPreviews(**photos) if photos else None,
        has_mobile=_bool(data, "has_mobile"),
        online=_bool(data, "online"),
        lists=_decode_lists(data),
        contacts=Contacts(**contacts) if contacts else None,
        connections=Connections(**connections) if connections else None,
        site=_str(data, "site"),
        status=_str(data, "status"),
        last_seen=decode_last_seen(last_seen) if last_seen is not None else None,
        common_count=_int(data, "common_count"),
        relation=_int(data, "relation"),
        can_post=_bool(data, "can_post"),
        can_see_all_posts=_bool(data, "can_see_all_posts"),
        can_see_audio=_bool(data, "can_see_audio"),
        can_write_private_message=_bool(data, "can_write_private_message"),
        counters=decode_counters(counters) if counters is not None else None,
        education=decode_education(data),
        universities=_decode_many(data, "universities", decode_university),
        schools=_decode_many(data, "schools", decode_school),
        relatives=_decode_many(data, "relatives", decode_relative),
        deactivated=_str(data, "deactivated"),
    )


def decode_group(data: Any) -> Group:
    data = _expect_object(data, "group")

    closed = _int(data, "is_closed")
    try:
        publicity = GroupPublicity(closed) if closed is not None else None
    except ValueError:
        raise MalformedResponseError(f"Unknown is_closed value: {closed!r}") from None

    tag = _str(data, "type")
    try:
        group_type = GroupType(tag) if tag is not None else None
    except ValueError:
        raise MalformedResponseError(f"Unknown group type: {tag!r}") from None

    photos = _strings(data, _GROUP_PHOTO_KEYS)

    return Group(
        id=_required_int(data, "id", "gid"),
        name=_str(data, "name"),
        screen_name=_str(data, "screen_name"),
        is_closed=publicity,
        is_admin=bool(_bool(data, "is_admin")),
        type=group_type,
        photos=GroupPhotos(**photos) if photos else None,
    )


# ---------------------------------------------------------------------------
# Polymorphic lists: each element is either a bare id or a full object.
# ---------------------------------------------------------------------------


def decode_user_item(item: Any) -> User:
    if isinstance(item, dict):
        return decode_user(item)
    return User(id=_to_int(item, "id"))


def decode_group_item(item: Any) -> Group:
    if isinstance(item, dict):
        return decode_group(item)
    return Group(id=_to_int(item, "id"))


def decode_list(payload: Any, item_decoder: Callable[[Any], T]) -> List[T]:
    """Decode a plain response list, keeping the platform's element order."""
    if not isinstance(payload, list):
        raise MalformedResponseError(f"Expected list response, got {payload!r}")
    return [item_decoder(item) for item in payload]


def decode_counted_list(payload: Any, item_decoder: Callable[[Any], T]) -> VkCollection[T]:
    """
    Decode a list whose first element is the total count, e.g.

        [26953, {...}, {...}]

    The count is not part of the entities. The `{"count": n, "items": [...]}`
    shape newer API versions use is accepted as well.
    """
    if isinstance(payload, dict) and "count" in payload:
        total = _to_int(payload["count"], "count")
        items = payload.get("items") or []
    elif isinstance(payload, list):
        if not payload:
            raise MalformedResponseError("Counted list response is missing its count")
        total = _to_int(payload[0], "count")
        items = payload[1:]
    else:
        raise MalformedResponseError(f"Expected counted list response, got {payload!r}")

    return VkCollection(total_count=total, items=tuple(decode_list(items, item_decoder)))


def decode_int(payload: Any) -> int:
    return _to_int(payload, "response")


def decode_flag(payload: Any) -> bool:
    return _to_int(payload, "response") != 0
