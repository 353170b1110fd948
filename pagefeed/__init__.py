"""pagefeed: incremental paged-list loading with a presentation state machine."""

__version__ = "0.1.0"
