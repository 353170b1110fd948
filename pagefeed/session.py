"""Session wiring: builds one engine + reducer pair and owns their lifetime."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from pagefeed.core.config import Settings
from pagefeed.core.connectivity import ConnectivityGate, RouteConnectivityGate
from pagefeed.engines.pagination.api_client import RemoteSource
from pagefeed.engines.pagination.engine import PaginationEngine
from pagefeed.presentation.reducer import PresentationReducer

logger = structlog.get_logger(__name__)


@dataclass
class FeedSession:
    """Everything one list screen needs; nothing is shared across sessions.

    Leaving the ``async with`` block cancels any pending page load (the
    engine keeps its data intact) and closes the HTTP client.
    """

    settings: Settings
    source: RemoteSource
    gate: ConnectivityGate
    engine: PaginationEngine
    reducer: PresentationReducer

    async def close(self) -> None:
        await self.reducer.aclose()
        await self.source.close()
        logger.info("session.closed", items=len(self.engine.snapshot.accumulated))

    async def __aenter__(self) -> FeedSession:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


def create_session(
    settings: Settings | None = None,
    *,
    gate: ConnectivityGate | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FeedSession:
    """Build a FeedSession from *settings* (default: ``Settings.from_env()``)."""
    settings = settings or Settings.from_env()
    if gate is None:
        gate = RouteConnectivityGate(settings.probe_address, port=settings.probe_port)
    source = RemoteSource(settings, transport=transport)
    engine = PaginationEngine(source, gate)
    reducer = PresentationReducer(engine)
    logger.info(
        "session.created",
        base_url=settings.base_url,
        items_path=settings.items_path,
    )
    return FeedSession(
        settings=settings,
        source=source,
        gate=gate,
        engine=engine,
        reducer=reducer,
    )
