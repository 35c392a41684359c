"""Tests for source locations and spans."""

import pytest

from tinytc.core.errors import InternalError
from tinytc.utils.location import Location, Span


class TestSpan:
    def test_render(self):
        span = Span(Location(1, 0, "a.ts"), Location(2, 3, "a.ts"))
        assert str(span) == "a.ts:1:1-2:4"

    def test_empty_span_allowed(self):
        point = Location(4, 2)
        assert Span(point, point).file == "<stdin>"

    def test_unknown(self):
        assert str(Span.unknown()) == "<stdin>:0:1-0:1"

    def test_end_before_start_on_same_line(self):
        with pytest.raises(InternalError):
            Span(Location(1, 5), Location(1, 4))

    def test_end_on_earlier_line(self):
        with pytest.raises(InternalError):
            Span(Location(3, 0), Location(2, 9))

    def test_encloses(self):
        outer = Span(Location(1, 0), Location(3, 0))
        assert outer.encloses(Span(Location(1, 4), Location(2, 7)))
        assert not outer.encloses(Span(Location(2, 0), Location(3, 1)))
