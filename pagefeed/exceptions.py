"""Custom exceptions for pagefeed.

Expected fetch outcomes (offline, end of data, transport failures) travel as
``Result`` values, not exceptions. These cover internal signalling and misuse.
"""


class PagefeedError(Exception):
    """Base exception for all pagefeed errors."""


class EngineBusyError(PagefeedError):
    """Raised when the engine is reset while a page fetch is still in flight."""


class StreamClosedError(PagefeedError):
    """Raised when publishing to a stream that has been closed."""
