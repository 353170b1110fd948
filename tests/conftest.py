"""Shared fixtures for pagefeed tests (no network required)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from pagefeed.core.connectivity import StaticConnectivityGate
from pagefeed.engines.pagination.engine import PaginationEngine
from pagefeed.engines.pagination.models import Result, Success
from pagefeed.engines.pagination.schemas import CharacterListResponse

API_ROOT = "https://api.test/api"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


def character_json(item_id: int) -> dict[str, Any]:
    return {
        "id": item_id,
        "name": f"Character {item_id}",
        "status": "Alive",
        "species": "Human",
        "gender": "Female",
        "image": f"{API_ROOT}/character/avatar/{item_id}.jpeg",
    }


def page_json(ids: list[int], *, has_next: bool = True, page: int = 1) -> dict[str, Any]:
    return {
        "info": {
            "count": 826,
            "pages": 42,
            "next": f"{API_ROOT}/character?page={page + 1}" if has_next else None,
            "prev": f"{API_ROOT}/character?page={page - 1}" if page > 1 else None,
        },
        "results": [character_json(i) for i in ids],
    }


class FakeSource:
    """Scripted page source.

    Each queued entry is either a ``Result`` to return or an exception to
    raise. When *hold* is set, every fetch waits on it before answering.
    """

    def __init__(self, entries: list[Any] | None = None) -> None:
        self.entries: list[Any] = list(entries or [])
        self.calls: list[int] = []
        self.hold: asyncio.Event | None = None
        self.on_fetch: Callable[[int], None] | None = None

    def push(self, *entries: Any) -> None:
        self.entries.extend(entries)

    async def fetch_page(self, page: int) -> Result[CharacterListResponse]:
        self.calls.append(page)
        if self.on_fetch is not None:
            self.on_fetch(page)
        if self.hold is not None:
            await self.hold.wait()
        entry = self.entries.pop(0)
        if isinstance(entry, BaseException):
            raise entry
        return entry


@pytest.fixture
def raw_page() -> Callable[..., CharacterListResponse]:
    """Factory: ``raw_page([1, 2], has_next=True)`` → validated wire response."""

    def _make(ids: list[int], *, has_next: bool = True, page: int = 1) -> CharacterListResponse:
        return CharacterListResponse.model_validate(page_json(ids, has_next=has_next, page=page))

    return _make


@pytest.fixture
def ok(raw_page) -> Callable[..., Success[CharacterListResponse]]:
    """Factory: ``ok([1, 2])`` → ``Success`` wrapping a raw page."""

    def _make(ids: list[int], *, has_next: bool = True) -> Success[CharacterListResponse]:
        return Success(raw_page(ids, has_next=has_next))

    return _make


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def gate() -> StaticConnectivityGate:
    return StaticConnectivityGate(available=True)


@pytest.fixture
def engine(source, gate) -> PaginationEngine:
    return PaginationEngine(source, gate)


@pytest.fixture
def body() -> Callable[..., dict[str, Any]]:
    """Factory for raw JSON bodies, for tests that go through HTTP."""
    return page_json
