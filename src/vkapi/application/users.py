from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from vkapi.application.category import ApiCategory
from vkapi.domain.errors import InvalidArgumentError
from vkapi.domain.schemas import Group, NameCase, ProfileFields, User, VkCollection
from vkapi.infrastructure.decoders import (
    decode_counted_list,
    decode_flag,
    decode_group_item,
    decode_int,
    decode_list,
    decode_user_item,
)
from vkapi.infrastructure.parameters import MethodRequest


DEFAULT_SEARCH_COUNT = 20


@dataclass
class UsersCategory(ApiCategory):
    """
    Methods for working with user profiles.

    Plural calls return entities in the order the platform sent them. They
    are not re-matched to the requested ids, so a reordered response would
    silently shift results against the input positions.
    """

    def get(
        self,
        user_id: Optional[int],
        fields: Optional[ProfileFields] = None,
        name_case: Optional[NameCase] = None,
    ) -> Optional[User]:
        """
        Profile of a single user, or None if the platform returned nothing.
        """
        self._require_token()
        user_id = self._require_id(user_id, "user_id")
        users = self.get_many([user_id], fields=fields, name_case=name_case)
        return users[0] if users else None

    def get_many(
        self,
        user_ids: Optional[Sequence[int]],
        fields: Optional[ProfileFields] = None,
        name_case: Optional[NameCase] = None,
    ) -> List[User]:
        self._require_token()
        user_ids = self._require_ids(user_ids, "user_ids")

        payload = self._call(
            MethodRequest.build(
                "users.get",
                ("fields", fields),
                ("name_case", name_case),
                ("user_ids", list(user_ids)),
            )
        )
        return decode_list(payload, decode_user_item)

    def get_groups(self, user_id: int) -> List[Group]:
        """
        Communities the user belongs to.

        The platform answers with bare ids, so the groups carry only `id`.
        """
        self._require_token()
        user_id = self._require_id(user_id, "user_id")
        payload = self._call(MethodRequest.build("getGroups", ("uid", user_id)))
        return decode_list(payload, decode_group_item)

    def get_groups_full(self) -> List[Group]:
        """Full descriptions of the current user's communities."""
        self._require_token()
        payload = self._call(MethodRequest.build("getGroupsFull"))
        return decode_list(payload, decode_group_item)

    def get_groups_full_by_ids(self, group_ids: Optional[Sequence[int]]) -> List[Group]:
        self._require_token()
        group_ids = self._require_ids(group_ids, "group_ids")

        payload = self._call(MethodRequest.build("getGroupsFull", ("gids", list(group_ids))))
        return decode_list(payload, decode_group_item)

    def get_user_settings(self, user_id: int) -> int:
        """Bitmask of the permissions the user granted to the application."""
        self._require_token()
        user_id = self._require_id(user_id, "user_id")
        payload = self._call(MethodRequest.build("getUserSettings", ("uid", user_id)))
        return decode_int(payload)

    def is_app_user(self, user_id: int) -> bool:
        self._require_token()
        user_id = self._require_id(user_id, "user_id")
        payload = self._call(MethodRequest.build("users.isAppUser", ("user_id", user_id)))
        return decode_flag(payload)

    def search(
        self,
        query: Optional[str],
        fields: Optional[ProfileFields] = None,
        count: int = DEFAULT_SEARCH_COUNT,
        offset: int = 0,
    ) -> VkCollection[User]:
        """
        Search users by a free-text query.

        `total_count` on the result is the number of matches on the platform
        side, not the number of profiles in this page.
        """
        self._require_token()
        if not query:
            raise InvalidArgumentError("Query can not be null or empty.")

        payload = self._call(
            MethodRequest.build(
                "users.search",
                ("q", query),
                ("fields", fields),
                ("count", count),
                ("offset", offset or None),
            )
        )
        return decode_counted_list(payload, decode_user_item)
