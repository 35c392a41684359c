"""Shared utilities."""

from tinytc.utils.location import DEFAULT_SOURCE, Location, Span

__all__ = ["DEFAULT_SOURCE", "Location", "Span"]
