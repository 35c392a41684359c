"""Source locations for error reporting."""
from dataclasses import dataclass

DEFAULT_SOURCE = "<stdin>"


@dataclass(frozen=True)
class Location:
    """Source code location. Lines are 1-based, columns 0-based."""

    line: int
    column: int
    file: str | None = None

    def __str__(self) -> str:
        return f"{self.file or DEFAULT_SOURCE}:{self.line}:{self.column + 1}"


@dataclass(frozen=True)
class Span:
    """Source span from start to end location.

    Rendered as ``file:line:col-line:col`` with 1-based columns, the format
    shared by parse errors and type diagnostics.
    """

    start: Location
    end: Location

    def __post_init__(self) -> None:
        if (self.end.line, self.end.column) < (self.start.line, self.start.column):
            from tinytc.core.errors import InternalError

            raise InternalError(f"span ends before it starts: {self.start}-{self.end}")

    @staticmethod
    def unknown() -> "Span":
        """Placeholder span for terms built without source text."""
        return _UNKNOWN

    @property
    def file(self) -> str:
        return self.start.file or DEFAULT_SOURCE

    def encloses(self, other: "Span") -> bool:
        """True when ``other`` lies within this span."""
        start = (self.start.line, self.start.column)
        end = (self.end.line, self.end.column)
        return start <= (other.start.line, other.start.column) and (other.end.line, other.end.column) <= end

    def __str__(self) -> str:
        s, e = self.start, self.end
        return f"{self.file}:{s.line}:{s.column + 1}-{e.line}:{e.column + 1}"


_UNKNOWN = Span(Location(0, 0), Location(0, 0))
