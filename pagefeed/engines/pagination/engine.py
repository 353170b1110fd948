"""Pagination engine: page cursor, accumulator and single-flight guard."""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol

import structlog

from pagefeed.core.connectivity import ConnectivityGate
from pagefeed.engines.pagination.mapper import ResponseMapper
from pagefeed.engines.pagination.models import (
    EngineSnapshot,
    Failure,
    NoInternet,
    NoMorePages,
    Page,
    Result,
    Success,
)
from pagefeed.engines.pagination.schemas import CharacterListResponse
from pagefeed.exceptions import EngineBusyError

log = structlog.get_logger("pagefeed.engine")


class PageSource(Protocol):
    async def fetch_page(self, page: int) -> Result[CharacterListResponse]: ...


class PaginationEngine:
    """Walk a paged endpoint one page at a time, accumulating items.

    All state lives in a single frozen :class:`EngineSnapshot` that is
    swapped as a whole, so readers never see a half-applied transition.
    Only a successful, non-empty fetch advances the cursor; every other
    outcome leaves cursor, items and ``has_more`` exactly as they were.
    """

    def __init__(
        self,
        source: PageSource,
        gate: ConnectivityGate,
        mapper: ResponseMapper | None = None,
    ) -> None:
        self._source = source
        self._gate = gate
        self._mapper = mapper or ResponseMapper()
        self._snapshot = EngineSnapshot()

    @property
    def snapshot(self) -> EngineSnapshot:
        return self._snapshot

    @property
    def in_flight(self) -> bool:
        return self._snapshot.in_flight

    @property
    def has_more(self) -> bool:
        return self._snapshot.has_more

    async def load_next(self) -> Result[Page] | None:
        """Fetch the page at the cursor.

        Returns ``None`` when a fetch is already in flight (the call is
        dropped, nothing is issued). Otherwise returns ``Success`` with the
        full accumulated list, or ``Failure`` with the reason.
        """
        if self._snapshot.in_flight:
            log.debug("engine.load_next_skipped", cursor=self._snapshot.cursor)
            return None

        if not self._snapshot.has_more:
            return Failure(NoMorePages())

        self._snapshot = replace(self._snapshot, in_flight=True)
        try:
            return await self._fetch(self._snapshot.cursor)
        finally:
            self._snapshot = replace(self._snapshot, in_flight=False)

    def reset(self) -> None:
        """Start over from page 1 with an empty accumulator."""
        if self._snapshot.in_flight:
            raise EngineBusyError("cannot reset while a page fetch is in flight")
        self._snapshot = EngineSnapshot()
        log.debug("engine.reset")

    async def _fetch(self, cursor: int) -> Result[Page]:
        if not self._gate.is_available():
            log.info("engine.no_internet", cursor=cursor)
            return Failure(NoInternet())

        result = await self._source.fetch_page(cursor)
        if isinstance(result, Failure):
            log.warning("engine.fetch_failed", cursor=cursor, reason=result.reason)
            return result

        page = self._mapper.to_page(result.value, cursor)

        # An empty page ends the session even if "next" is still advertised.
        if not page.items:
            self._snapshot = replace(self._snapshot, has_more=False)
            log.info("engine.no_more_pages", cursor=cursor)
            return Failure(NoMorePages())

        current = self._snapshot
        self._snapshot = replace(
            current,
            cursor=current.cursor + 1,
            accumulated=current.accumulated + page.items,
            has_more=page.has_next_page,
        )
        log.info(
            "engine.page_loaded",
            page=cursor,
            new_items=len(page.items),
            total_items=len(self._snapshot.accumulated),
            has_more=self._snapshot.has_more,
        )
        return Success(
            Page(items=self._snapshot.accumulated, has_next_page=self._snapshot.has_more)
        )
