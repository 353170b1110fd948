"""Pagination engine: incremental page fetching with an append-only accumulator."""

from pagefeed.engines.pagination.api_client import RemoteSource
from pagefeed.engines.pagination.engine import PageSource, PaginationEngine
from pagefeed.engines.pagination.mapper import ResponseMapper
from pagefeed.engines.pagination.models import (
    EngineSnapshot,
    Failure,
    Item,
    NoInternet,
    NoMorePages,
    Page,
    Reason,
    Result,
    Success,
    Unknown,
)

__all__ = [
    "EngineSnapshot",
    "Failure",
    "Item",
    "NoInternet",
    "NoMorePages",
    "Page",
    "PageSource",
    "PaginationEngine",
    "Reason",
    "RemoteSource",
    "ResponseMapper",
    "Result",
    "Success",
    "Unknown",
]
