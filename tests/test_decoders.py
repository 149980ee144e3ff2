from __future__ import annotations

import pytest

from vkapi.domain.errors import MalformedResponseError
from vkapi.domain.schemas import (
    Counters,
    GroupPublicity,
    GroupType,
    RelativeType,
    Sex,
    User,
)
from vkapi.infrastructure.decoders import (
    decode_counted_list,
    decode_counters,
    decode_flag,
    decode_group,
    decode_group_item,
    decode_int,
    decode_list,
    decode_school,
    decode_user,
    decode_user_item,
)


def test_sparse_user_leaves_optional_fields_absent():
    user = decode_user({"id": 1, "first_name": "Павел", "last_name": "Дуров"})

    assert (user.id, user.first_name, user.last_name) == (1, "Павел", "Дуров")
    populated = {name for name, value in user.model_dump().items() if value is not None}
    assert populated == {"id", "first_name", "last_name"}
    assert user.is_deactivated is False


def test_faculty_zero_decodes_to_absent():
    user = decode_user(
        {
            "id": 1,
            "university": 1,
            "university_name": "СПбГУ",
            "faculty": 0,
            "faculty_name": "",
            "graduation": 2006,
        }
    )

    assert user.education is not None
    assert user.education.university_id == 1
    assert user.education.university_name == "СПбГУ"
    assert user.education.faculty_id is None
    assert user.education.faculty_name == ""
    assert user.education.graduation == 2006


def test_faculty_from_string_field():
    user = decode_user(
        {
            "uid": 102674754,
            "university": "431",
            "university_name": "ВолгГТУ",
            "faculty": "3162",
            "faculty_name": "Электроники и вычислительной техники",
            "graduation": "2010",
        }
    )

    assert user.id == 102674754
    assert user.education.university_id == 431
    assert user.education.faculty_id == 3162
    assert user.education.graduation == 2010


def test_university_zero_means_no_education():
    user = decode_user(
        {
            "uid": 165614770,
            "university": "0",
            "university_name": "",
            "faculty": "0",
            "faculty_name": "",
            "graduation": "0",
        }
    )

    assert user.education is None


def test_zero_counters_are_kept_but_missing_ones_are_absent():
    counters = decode_counters({"albums": 1, "audios": 0, "followers": 5934786})

    assert counters == Counters(albums=1, audios=0, followers=5934786)
    assert counters.videos is None


@pytest.mark.parametrize("raw, expected", [(1, Sex.FEMALE), (2, Sex.MALE)])
def test_sex_mapping(raw, expected):
    assert decode_user({"id": 1, "sex": raw}).sex is expected


@pytest.mark.parametrize("raw", [0, 3])
def test_undefined_sex_fails(raw):
    with pytest.raises(MalformedResponseError):
        decode_user({"id": 1, "sex": raw})


def test_deactivated_user_with_few_fields():
    user = decode_user({"id": 4793858, "first_name": "Антон", "last_name": "Жидков", "deactivated": "deleted"})

    assert user.is_deactivated is True
    assert user.deactivated == "deleted"
    assert user.education is None


def test_tri_state_booleans():
    user = decode_user({"id": 1, "has_mobile": 1, "can_post": 0})

    assert user.has_mobile is True
    assert user.can_post is False
    assert user.online is None


def test_nested_and_flat_profile_blocks():
    user = decode_user(
        {
            "id": 1,
            "city": {"id": 2, "title": "Санкт-Петербург"},
            "country": 1,
            "photo_50": "http://cs7004.vk.me/a.jpg",
            "twitter": "durov",
            "mobile_phone": "",
            "last_seen": {"time": 1392634257, "platform": 7},
            "lists": "1,3",
        }
    )

    assert user.city.id == 2 and user.city.title == "Санкт-Петербург"
    assert user.country.id == 1 and user.country.title is None
    assert user.photo_previews.photo_50 == "http://cs7004.vk.me/a.jpg"
    assert user.photo_previews.photo_max is None
    assert user.connections.twitter == "durov"
    assert user.contacts.mobile_phone == ""
    assert user.last_seen.platform == 7
    assert user.lists == (1, 3)


def test_schools_with_string_ids_and_optional_fields():
    plain = decode_school(
        {
            "id": "1035386",
            "country": "88",
            "city": "16",
            "name": "Sc.Elem. Coppino - Falletti di Barolo",
            "year_from": 1990,
            "year_to": 1992,
            "class": "",
        }
    )
    gymnasium = decode_school({"id": "1", "year_graduated": 2001, "class": "о", "type": 1, "type_str": "Гимназия"})

    assert (plain.id, plain.country, plain.city) == (1035386, 88, 16)
    assert plain.class_name == ""
    assert plain.year_graduated is None and plain.type is None
    assert gymnasium.year_graduated == 2001
    assert gymnasium.type_str == "Гимназия"


def test_relatives():
    user = decode_user({"id": 1, "relatives": [{"id": 5, "type": "sibling"}, {"name": "Anna", "type": "child"}]})

    assert [r.type for r in user.relatives] == [RelativeType.SIBLING, RelativeType.CHILD]
    assert user.relatives[1].id is None


@pytest.mark.parametrize(
    "raw",
    [
        {"first_name": "no id"},
        {"id": "abc"},
        {"id": True},
        {"id": 1, "counters": [1, 2]},
        {"id": 1, "schools": {"id": 1}},
        {"id": 1, "first_name": ["x"]},
        {"id": 1, "relatives": [{"type": "cousin"}]},
    ],
)
def test_shape_changes_fail_loudly(raw):
    with pytest.raises(MalformedResponseError):
        decode_user(raw)


def test_group_decoding():
    group = decode_group(
        {
            "id": 29689780,
            "name": "Art and Life ©",
            "screen_name": "art.and.life",
            "is_closed": 0,
            "type": "page",
            "photo": "http://cs11003.userapi.com/g29689780/e_1bea6489.jpg",
        }
    )

    assert group.id == 29689780
    assert group.is_closed is GroupPublicity.PUBLIC
    assert group.is_admin is False
    assert group.type is GroupType.PAGE
    assert group.photos.photo.endswith("e_1bea6489.jpg")
    assert group.photos.photo_big is None


def test_group_admin_and_closed():
    group = decode_group({"gid": 7, "is_closed": 1, "is_admin": 1, "type": "event"})

    assert group.id == 7
    assert group.is_closed is GroupPublicity.CLOSED
    assert group.is_admin is True


@pytest.mark.parametrize("raw", [{"id": 1, "type": "club"}, {"id": 1, "is_closed": 5}])
def test_unknown_group_tags_fail(raw):
    with pytest.raises(MalformedResponseError):
        decode_group(raw)


def test_bare_ids_become_stub_entities():
    groups = decode_list([1, 15, {"id": 134, "name": "x"}], decode_group_item)

    assert [g.id for g in groups] == [1, 15, 134]
    assert groups[0].name is None
    assert groups[2].name == "x"
    assert decode_user_item(42) == User(id=42)


def test_counted_list_with_zero_total():
    result = decode_counted_list([0], decode_user_item)

    assert result.total_count == 0
    assert result.items == ()


def test_counted_list_peels_off_total():
    result = decode_counted_list(
        [
            26953,
            {"uid": 449928, "first_name": "Маша"},
            {"uid": 70145254, "first_name": "Маша"},
            {"uid": 62899425, "first_name": "Masha"},
        ],
        decode_user_item,
    )

    assert result.total_count == 26953
    assert len(result) == 3
    assert [u.id for u in result.items] == [449928, 70145254, 62899425]


def test_counted_list_object_shape():
    result = decode_counted_list({"count": 2, "items": [{"id": 1}, 2]}, decode_user_item)

    assert result.total_count == 2
    assert [u.id for u in result.items] == [1, 2]


@pytest.mark.parametrize("payload", [[], {"items": []}, 5, ["x", {"id": 1}]])
def test_counted_list_rejects_bad_shapes(payload):
    with pytest.raises(MalformedResponseError):
        decode_counted_list(payload, decode_user_item)


def test_scalar_payloads():
    assert decode_int(2) == 2
    assert decode_flag(0) is False
    assert decode_flag(1) is True
    with pytest.raises(MalformedResponseError):
        decode_int({"value": 2})
    with pytest.raises(MalformedResponseError):
        decode_list({"id": 1}, decode_user_item)
