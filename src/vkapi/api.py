from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from vkapi.application.users import UsersCategory
from vkapi.domain.config import DEFAULT_BASE_URL, Browser, ClientConfig, Session
from vkapi.infrastructure.http_client import HttpClient


def load_config(path: str | Path) -> ClientConfig:
    """
    Load client settings from the `api:` section of a YAML file.

    `VK_ACCESS_TOKEN` and `VK_API_VERSION` in the environment take
    precedence over the file, so tokens need not be committed.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config root in {path} must be a mapping.")

    api_cfg = raw.get("api") or {}
    if not isinstance(api_cfg, dict):
        raise ValueError(f"The 'api' section in {path} must be a mapping.")

    version = os.getenv("VK_API_VERSION") or api_cfg.get("version")
    token = os.getenv("VK_ACCESS_TOKEN") or api_cfg.get("access_token")

    return ClientConfig(
        base_url=str(api_cfg.get("base_url") or DEFAULT_BASE_URL),
        api_version=str(version) if version is not None else None,
        timeout=float(api_cfg.get("timeout") or 10.0),
        access_token=str(token) if token else None,
    )


@dataclass
class VkApi:
    """
    Entry point: one session plus the method families bound to it.

        api = VkApi.from_config("config/vkapi.yaml")
        user = api.users.get(1, ProfileFields.FIRST_NAME | ProfileFields.LAST_NAME)
    """

    session: Session
    users: UsersCategory = field(init=False)

    def __post_init__(self) -> None:
        self.users = UsersCategory(session=self.session)

    @classmethod
    def create(
        cls,
        access_token: Optional[str] = None,
        api_version: Optional[str] = None,
        browser: Optional[Browser] = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> "VkApi":
        session = Session(
            browser=browser or HttpClient(),
            access_token=access_token,
            api_version=api_version,
            base_url=base_url,
        )
        return cls(session=session)

    @classmethod
    def from_config(cls, path: str | Path, browser: Optional[Browser] = None) -> "VkApi":
        cfg = load_config(path)
        return cls.create(
            access_token=cfg.access_token,
            api_version=cfg.api_version,
            browser=browser or HttpClient(timeout=cfg.timeout),
            base_url=cfg.base_url,
        )
