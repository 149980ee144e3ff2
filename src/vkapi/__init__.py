from vkapi.api import VkApi, load_config
from vkapi.application.users import UsersCategory
from vkapi.domain.config import Browser, ClientConfig, Session
from vkapi.domain.errors import (
    AccessDeniedError,
    AccessTokenInvalidError,
    ApiResponseError,
    InvalidArgumentError,
    MalformedResponseError,
    TransportError,
    UserAuthorizationFailError,
    VkApiError,
)
from vkapi.domain.schemas import (
    Education,
    Group,
    GroupPublicity,
    GroupType,
    NameCase,
    ProfileFields,
    School,
    Sex,
    User,
    VkCollection,
)
from vkapi.infrastructure.http_client import HttpClient

__all__ = [
    "AccessDeniedError",
    "AccessTokenInvalidError",
    "ApiResponseError",
    "Browser",
    "ClientConfig",
    "Education",
    "Group",
    "GroupPublicity",
    "GroupType",
    "HttpClient",
    "InvalidArgumentError",
    "MalformedResponseError",
    "NameCase",
    "ProfileFields",
    "School",
    "Session",
    "Sex",
    "TransportError",
    "User",
    "UserAuthorizationFailError",
    "UsersCategory",
    "VkApi",
    "VkApiError",
    "load_config",
]
