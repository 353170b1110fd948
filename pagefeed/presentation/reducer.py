"""PresentationReducer: turns engine results and user actions into view state.

Routing rule: once items are visible, failures never replace them; they
become a one-shot ``ShowTransientError``. Only a failure while nothing has
been shown yet produces the blocking ``Error`` state.
"""

from __future__ import annotations

import asyncio

import structlog

from pagefeed.engines.pagination.engine import PaginationEngine
from pagefeed.engines.pagination.models import (
    NoInternet,
    NoMorePages,
    Page,
    Result,
    Success,
    Unknown,
)
from pagefeed.presentation.state import (
    DEFAULT_ERROR,
    NETWORK_UNAVAILABLE,
    NO_MORE_ITEMS,
    Action,
    Error,
    Loaded,
    LoadMore,
    Loading,
    Retry,
    ShowTransientError,
    ViewEvent,
    ViewState,
)
from pagefeed.presentation.streams import EventStream, StateStream

log = structlog.get_logger("pagefeed.presentation")


class PresentationReducer:
    """Long-lived state machine over :data:`ViewState`, starting at ``Loading``."""

    def __init__(self, engine: PaginationEngine) -> None:
        self._engine = engine
        self.state: StateStream[ViewState] = StateStream(Loading())
        self.events: EventStream[ViewEvent] = EventStream()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def current(self) -> ViewState:
        return self.state.value

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def start(self) -> None:
        """Kick off the first page load."""
        await self._load()

    async def aclose(self) -> None:
        """Cancel pending loads and close both streams."""
        # A task being cancelled may still schedule another action.
        while self._tasks:
            pending = list(self._tasks)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            self._tasks.difference_update(pending)
        await self.state.close()
        self.events.close()

    # ── actions ────────────────────────────────────────────────────────────

    async def dispatch(self, action: Action) -> None:
        """Handle a user action; guard violations are ignored."""
        if isinstance(action, LoadMore):
            if self._should_load_more():
                await self._load()
            else:
                self._ignored(action)
        elif isinstance(action, Retry):
            if isinstance(self.current, Error) and not self._engine.in_flight:
                await self.state.set(Loading())
                self._engine.reset()
                await self._load()
            else:
                self._ignored(action)
        else:
            raise TypeError(f"unsupported action: {action!r}")

    def send_action(self, action: Action) -> asyncio.Task[None]:
        """Fire-and-forget :meth:`dispatch`; the task is cancelled by :meth:`aclose`."""
        task = asyncio.create_task(
            self.dispatch(action), name=f"pagefeed-{type(action).__name__}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    # ── results ────────────────────────────────────────────────────────────

    async def reduce(self, result: Result[Page]) -> None:
        """Apply one engine result to the view state / event stream."""
        current = self.current

        if isinstance(result, Success):
            page = result.value
            await self._transition(Loaded(items=page.items, has_more=page.has_next_page))
            return

        reason = result.reason
        if isinstance(reason, NoMorePages):
            # Nothing to show yet means nothing to say either.
            if isinstance(current, Loaded):
                self._notify(NO_MORE_ITEMS)
            return

        if isinstance(reason, NoInternet):
            message = NETWORK_UNAVAILABLE
        elif isinstance(reason, Unknown):
            message = reason.message or DEFAULT_ERROR
        else:
            raise TypeError(f"unsupported failure reason: {reason!r}")

        if isinstance(current, Loaded):
            self._notify(message)
        else:
            await self._transition(Error(message))

    # ── internal ───────────────────────────────────────────────────────────

    def _should_load_more(self) -> bool:
        return (
            isinstance(self.current, Loaded)
            and self._engine.has_more
            and not self._engine.in_flight
        )

    async def _load(self) -> None:
        result = await self._engine.load_next()
        if result is None:
            return
        await self.reduce(result)

    async def _transition(self, new_state: ViewState) -> None:
        log.debug(
            "reducer.transition",
            old=type(self.current).__name__,
            new=type(new_state).__name__,
        )
        await self.state.set(new_state)

    def _notify(self, message: str) -> None:
        delivered = self.events.emit(ShowTransientError(message))
        log.info("reducer.transient_error", message=message, delivered=delivered)

    def _task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("reducer.action_failed", task=task.get_name(), exc_info=exc)

    def _ignored(self, action: Action) -> None:
        log.debug(
            "reducer.action_ignored",
            action=type(action).__name__,
            state=type(self.current).__name__,
            in_flight=self._engine.in_flight,
            has_more=self._engine.has_more,
        )
