"""Data models for the pagination engine.

Pure value types. No I/O. ``Result`` and ``Reason`` are closed sets of
variants; callers branch on them with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

FIRST_PAGE = 1


@dataclass(frozen=True)
class Item:
    """A single character record."""

    id: int
    name: str
    status: str
    species: str
    gender: str
    image_url: str


@dataclass(frozen=True)
class Page:
    """One page of items plus whether the server advertises another page."""

    items: tuple[Item, ...] = ()
    has_next_page: bool = False


@dataclass(frozen=True)
class EngineSnapshot:
    """Complete engine state; replaced as a whole on every transition."""

    cursor: int = FIRST_PAGE
    accumulated: tuple[Item, ...] = ()
    has_more: bool = True
    in_flight: bool = False


# ── reasons ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NoInternet:
    """Pre-flight connectivity check failed; no request was attempted."""


@dataclass(frozen=True)
class NoMorePages:
    """End of data: either already exhausted or the server sent an empty page."""


@dataclass(frozen=True)
class Unknown:
    """Transport, parsing or unexpected failure."""

    message: str = ""


Reason = Union[NoInternet, NoMorePages, Unknown]


# ── results ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    reason: Reason


Result = Union[Success[T], Failure]
