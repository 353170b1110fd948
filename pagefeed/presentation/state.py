"""View states, one-shot view events and user actions for the item list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pagefeed.engines.pagination.models import Item

NETWORK_UNAVAILABLE = "network unavailable"
NO_MORE_ITEMS = "no more items"
DEFAULT_ERROR = "An unexpected error occurred"


# ── states ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Loading:
    """Nothing to show yet; the first page is on its way."""


@dataclass(frozen=True)
class Loaded:
    """Items are visible. ``has_more`` mirrors the last successful page."""

    items: tuple[Item, ...]
    has_more: bool


@dataclass(frozen=True)
class Error:
    """Blocking failure before any data was shown; offers retry."""

    message: str


ViewState = Union[Loading, Loaded, Error]


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ShowTransientError:
    message: str


ViewEvent = ShowTransientError


# ── actions ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LoadMore:
    pass


@dataclass(frozen=True)
class Retry:
    pass


Action = Union[LoadMore, Retry]
