from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from vkapi.application.users import UsersCategory
from vkapi.domain.config import Session


class FakeBrowser:
    """
    Browser double: answers only URLs it was told about and records every call.
    """

    def __init__(self) -> None:
        self.responses: Dict[str, str] = {}
        self.calls: List[str] = []
        self.error: Optional[BaseException] = None

    def expect(self, url: str, body: Any) -> None:
        if not isinstance(body, str):
            body = json.dumps(body, ensure_ascii=False)
        self.responses[url] = body

    def fail_with(self, error: BaseException) -> None:
        self.error = error

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if url not in self.responses:
            raise AssertionError(f"Unexpected URL requested: {url}")
        return self.responses[url]


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def users(browser: FakeBrowser) -> UsersCategory:
    return UsersCategory(Session(browser=browser, access_token="token", api_version="5.9"))


@pytest.fixture
def unversioned_users(browser: FakeBrowser) -> UsersCategory:
    return UsersCategory(Session(browser=browser, access_token="token"))


@pytest.fixture
def anonymous_users(browser: FakeBrowser) -> UsersCategory:
    return UsersCategory(Session(browser=browser))
