"""Surface syntax: parsing source text into core terms."""

from tinytc.surface.parser import GRAMMAR, ParseError, error_at, parse

__all__ = ["GRAMMAR", "ParseError", "error_at", "parse"]
