"""Observable state and one-shot event streams for the presentation layer.

``StateStream`` always holds a value and replays the latest one to every new
subscriber. ``EventStream`` has no replay: an event reaches the subscribers
attached at emit time, once each, and is dropped when nobody listens.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

import structlog

from pagefeed.exceptions import StreamClosedError

log = structlog.get_logger("pagefeed.presentation")

T = TypeVar("T")

_CLOSED = object()


class StateStream(Generic[T]):
    """Conflated current-value holder; slow subscribers only see the latest."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._version = 0
        self._changed = asyncio.Condition()
        self._closed = False

    @property
    def value(self) -> T:
        return self._value

    async def set(self, value: T) -> None:
        if self._closed:
            raise StreamClosedError("state stream is closed")
        async with self._changed:
            self._value = value
            self._version += 1
            self._changed.notify_all()

    async def close(self) -> None:
        async with self._changed:
            self._closed = True
            self._changed.notify_all()

    async def subscribe(self) -> AsyncIterator[T]:
        """Yield the current value, then every later value until closed."""
        seen = self._version
        yield self._value
        while True:
            async with self._changed:
                await self._changed.wait_for(lambda: self._version != seen or self._closed)
                if self._version == seen:
                    return
                seen = self._version
                value = self._value
            yield value


class Subscription(Generic[T]):
    """A registered listener on an :class:`EventStream`.

    Registration happens at construction, so events emitted after
    ``subscribe()`` returns are never missed.
    """

    def __init__(self, stream: EventStream[T]) -> None:
        self._stream = stream
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _deliver(self, item: object) -> None:
        self._queue.put_nowait(item)

    def pending(self) -> int:
        """Number of delivered events not yet consumed."""
        # The close sentinel always sits last in the queue.
        return self._queue.qsize() - (1 if self._closed else 0)

    async def get(self) -> T:
        """Wait for the next event; raises StreamClosedError once closed."""
        try:
            return await self.__anext__()
        except StopAsyncIteration:
            raise StreamClosedError("subscription is closed") from None

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream._detach(self)
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> Subscription[T]:
        return self

    async def __anext__(self) -> T:
        item = await self._queue.get()
        if item is _CLOSED:
            # Sticky: later reads also end immediately.
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item  # type: ignore[return-value]

    async def __aenter__(self) -> Subscription[T]:
        return self

    async def __aexit__(self, *exc: object) -> None:
        self.close()


class EventStream(Generic[T]):
    """Multicast with replay depth zero."""

    def __init__(self) -> None:
        self._subscribers: list[Subscription[T]] = []
        self._closed = False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> Subscription[T]:
        subscription: Subscription[T] = Subscription(self)
        if self._closed:
            subscription.close()
        else:
            self._subscribers.append(subscription)
        return subscription

    def emit(self, event: T) -> int:
        """Deliver *event* to current subscribers; returns how many got it."""
        if self._closed:
            raise StreamClosedError("event stream is closed")
        if not self._subscribers:
            log.debug("events.dropped", dropped=repr(event))
        for subscription in self._subscribers:
            subscription._deliver(event)
        return len(self._subscribers)

    def close(self) -> None:
        self._closed = True
        for subscription in list(self._subscribers):
            subscription.close()

    def _detach(self, subscription: Subscription[T]) -> None:
        if subscription in self._subscribers:
            self._subscribers.remove(subscription)
