from __future__ import annotations

from enum import Enum, Flag, auto
from typing import Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict


T = TypeVar("T")


class Sex(Enum):
    FEMALE = 1
    MALE = 2


class NameCase(Enum):
    """Grammatical case the platform declines first/last names into."""

    NOM = "nom"
    GEN = "gen"
    DAT = "dat"
    ACC = "acc"
    INS = "ins"
    ABL = "abl"


class GroupPublicity(Enum):
    PUBLIC = 0
    CLOSED = 1
    PRIVATE = 2


class GroupType(Enum):
    GROUP = "group"
    PAGE = "page"
    EVENT = "event"


class RelativeType(Enum):
    CHILD = "child"
    SIBLING = "sibling"
    PARENT = "parent"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"


class ProfileFields(Flag):
    """
    Selection of optional profile fields for `users.get` / `users.search`.

    Member order is the wire order: the encoder walks members as declared,
    so `LAST_NAME | FIRST_NAME` and `FIRST_NAME | LAST_NAME` serialize alike.
    """

    UID = auto()
    FIRST_NAME = auto()
    LAST_NAME = auto()
    SEX = auto()
    BDATE = auto()
    CITY = auto()
    COUNTRY = auto()
    PHOTO_50 = auto()
    PHOTO_100 = auto()
    PHOTO_200 = auto()
    PHOTO_200_ORIG = auto()
    PHOTO_400_ORIG = auto()
    PHOTO_MAX = auto()
    PHOTO_MAX_ORIG = auto()
    ONLINE = auto()
    LISTS = auto()
    DOMAIN = auto()
    HAS_MOBILE = auto()
    CONTACTS = auto()
    CONNECTIONS = auto()
    SITE = auto()
    EDUCATION = auto()
    UNIVERSITIES = auto()
    SCHOOLS = auto()
    CAN_POST = auto()
    CAN_SEE_ALL_POSTS = auto()
    CAN_SEE_AUDIO = auto()
    CAN_WRITE_PRIVATE_MESSAGE = auto()
    STATUS = auto()
    LAST_SEEN = auto()
    COMMON_COUNT = auto()
    RELATION = auto()
    RELATIVES = auto()
    COUNTERS = auto()
    NICKNAME = auto()
    TIMEZONE = auto()

    ALL = (
        UID | FIRST_NAME | LAST_NAME | SEX | BDATE | CITY | COUNTRY
        | PHOTO_50 | PHOTO_100 | PHOTO_200 | PHOTO_200_ORIG | PHOTO_400_ORIG
        | PHOTO_MAX | PHOTO_MAX_ORIG | ONLINE | LISTS | DOMAIN | HAS_MOBILE
        | CONTACTS | CONNECTIONS | SITE | EDUCATION | UNIVERSITIES | SCHOOLS
        | CAN_POST | CAN_SEE_ALL_POSTS | CAN_SEE_AUDIO | CAN_WRITE_PRIVATE_MESSAGE
        | STATUS | LAST_SEEN | COMMON_COUNT | RELATION | RELATIVES | COUNTERS
        | NICKNAME | TIMEZONE
    )


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True)


class Place(_Entity):
    """City or country reference."""

    id: int
    title: Optional[str] = None


class PhotoPreviews(_Entity):
    photo_50: Optional[str] = None
    photo_100: Optional[str] = None
    photo_200: Optional[str] = None
    photo_200_orig: Optional[str] = None
    photo_400_orig: Optional[str] = None
    photo_max: Optional[str] = None
    photo_max_orig: Optional[str] = None


class LastSeen(_Entity):
    time: Optional[int] = None
    platform: Optional[int] = None


class Connections(_Entity):
    twitter: Optional[str] = None
    skype: Optional[str] = None
    facebook: Optional[str] = None
    facebook_name: Optional[str] = None
    livejournal: Optional[str] = None
    instagram: Optional[str] = None


class Contacts(_Entity):
    mobile_phone: Optional[str] = None
    home_phone: Optional[str] = None


class Counters(_Entity):
    """
    Per-profile object counts.

    Each count is independent: `None` means the platform did not send it,
    which is not the same as a count of zero.
    """

    albums: Optional[int] = None
    videos: Optional[int] = None
    audios: Optional[int] = None
    notes: Optional[int] = None
    photos: Optional[int] = None
    groups: Optional[int] = None
    gifts: Optional[int] = None
    friends: Optional[int] = None
    online_friends: Optional[int] = None
    mutual_friends: Optional[int] = None
    user_photos: Optional[int] = None
    user_videos: Optional[int] = None
    followers: Optional[int] = None
    subscriptions: Optional[int] = None
    pages: Optional[int] = None


class Education(_Entity):
    """
    Primary higher-education record embedded in the profile.

    `faculty_id` is `None` when the platform reports faculty `0`.
    """

    university_id: int
    university_name: Optional[str] = None
    faculty_id: Optional[int] = None
    faculty_name: Optional[str] = None
    graduation: Optional[int] = None


class University(_Entity):
    id: int
    country: Optional[int] = None
    city: Optional[int] = None
    name: Optional[str] = None
    faculty: Optional[int] = None
    faculty_name: Optional[str] = None
    chair: Optional[int] = None
    chair_name: Optional[str] = None
    graduation: Optional[int] = None


class School(_Entity):
    id: int
    country: Optional[int] = None
    city: Optional[int] = None
    name: Optional[str] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    year_graduated: Optional[int] = None
    class_name: Optional[str] = None
    type: Optional[int] = None
    type_str: Optional[str] = None


class Relative(_Entity):
    type: RelativeType
    id: Optional[int] = None
    name: Optional[str] = None


class User(_Entity):
    """
    Profile of a platform user.

    Only `id` is guaranteed. Deactivated (deleted or banned) profiles arrive
    with little more than a name and the `deactivated` reason.
    """

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nickname: Optional[str] = None
    domain: Optional[str] = None
    sex: Optional[Sex] = None
    birth_date: Optional[str] = None
    city: Optional[Place] = None
    country: Optional[Place] = None
    timezone: Optional[int] = None
    photo_previews: Optional[PhotoPreviews] = None
    has_mobile: Optional[bool] = None
    online: Optional[bool] = None
    lists: Optional[Tuple[int, ...]] = None
    contacts: Optional[Contacts] = None
    connections: Optional[Connections] = None
    site: Optional[str] = None
    status: Optional[str] = None
    last_seen: Optional[LastSeen] = None
    common_count: Optional[int] = None
    relation: Optional[int] = None
    can_post: Optional[bool] = None
    can_see_all_posts: Optional[bool] = None
    can_see_audio: Optional[bool] = None
    can_write_private_message: Optional[bool] = None
    counters: Optional[Counters] = None
    education: Optional[Education] = None
    universities: Optional[Tuple[University, ...]] = None
    schools: Optional[Tuple[School, ...]] = None
    relatives: Optional[Tuple[Relative, ...]] = None
    deactivated: Optional[str] = None

    @property
    def is_deactivated(self) -> bool:
        return self.deactivated is not None


class GroupPhotos(_Entity):
    photo: Optional[str] = None
    photo_medium: Optional[str] = None
    photo_big: Optional[str] = None


class Group(_Entity):
    """
    Community (group, public page or event).

    A group decoded from a bare id carries only `id`; `is_admin` is `False`
    unless the platform says otherwise.
    """

    id: int
    name: Optional[str] = None
    screen_name: Optional[str] = None
    is_closed: Optional[GroupPublicity] = None
    is_admin: bool = False
    type: Optional[GroupType] = None
    photos: Optional[GroupPhotos] = None


class VkCollection(_Entity, Generic[T]):
    """Page of entities together with the platform-side total count."""

    total_count: int
    items: Tuple[T, ...] = ()

    def __len__(self) -> int:
        return len(self.items)
