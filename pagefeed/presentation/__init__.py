"""Presentation layer: view state machine and observable streams."""

from pagefeed.presentation.reducer import PresentationReducer
from pagefeed.presentation.state import (
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
from pagefeed.presentation.streams import EventStream, StateStream, Subscription

__all__ = [
    "Action",
    "Error",
    "EventStream",
    "LoadMore",
    "Loaded",
    "Loading",
    "PresentationReducer",
    "Retry",
    "ShowTransientError",
    "StateStream",
    "Subscription",
    "ViewEvent",
    "ViewState",
]
