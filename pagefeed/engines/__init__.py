"""Engines: pure data-fetching components, no presentation concerns."""
