"""Tests for the traversal engine."""

from collections.abc import Sequence

import pytest

from tinytc.core.ast import Add, Call, Const, FalseLit, Func, If, NumberLit, Seq, TrueLit, Var
from tinytc.core.errors import InternalError
from tinytc.core.fold import Child, children, fold, para
from tinytc.core.types import NUMBER, Param
from tinytc.utils.location import Location, Span


def span(start: int, end: int) -> Span:
    return Span(Location(1, start, "t.ts"), Location(1, end, "t.ts"))


class Size:
    """Counts nodes."""

    def true_lit(self, span):
        return 1

    def false_lit(self, span):
        return 1

    def number(self, n, span):
        return 1

    def add(self, left, right, span):
        return 1 + left + right

    def if_(self, cond, then, else_, span):
        return 1 + cond + then + else_

    def var(self, name, span):
        return 1

    def func(self, params, body, span):
        return 1 + body

    def call(self, callee, args: Sequence[int], span):
        return 1 + callee + sum(args)

    def seq(self, first, rest, span):
        return 1 + first + rest

    def const(self, name, init, rest, span):
        return 1 + init + rest


class Trace:
    """Records the order in which nodes are combined."""

    def __init__(self):
        self.order: list[str] = []

    def _visit(self, label):
        self.order.append(label)
        return label

    def true_lit(self, span):
        return self._visit("true")

    def false_lit(self, span):
        return self._visit("false")

    def number(self, n, span):
        return self._visit(str(n))

    def add(self, left, right, span):
        return self._visit("+")

    def if_(self, cond, then, else_, span):
        return self._visit("?")

    def var(self, name, span):
        return self._visit(name)

    def func(self, params, body, span):
        return self._visit("=>")

    def call(self, callee, args, span):
        return self._visit("()")

    def seq(self, first, rest, span):
        return self._visit(";")

    def const(self, name, init, rest, span):
        return self._visit(f"const {name}")


class Spans(Size):
    """Para algebra collecting the spans of every child it is handed."""

    def __init__(self):
        self.seen: list[Span] = []

    def add(self, left: Child, right: Child, span):
        self.seen.extend([left.span, right.span])
        return 1 + left.out + right.out

    def if_(self, cond: Child, then: Child, else_: Child, span):
        self.seen.extend([cond.span, then.span, else_.span])
        return 1 + cond.out + then.out + else_.out


class TestChildren:
    """Tests for direct sub-term enumeration."""

    def test_leaves(self):
        for leaf in (TrueLit(), FalseLit(), NumberLit(1), Var("x")):
            assert children(leaf) == ()

    def test_evaluation_order(self):
        c, t, e = TrueLit(), NumberLit(1), NumberLit(2)
        assert children(If(c, t, e)) == (c, t, e)
        call = Call(Var("f"), (NumberLit(1), NumberLit(2)))
        assert children(call) == (Var("f"), NumberLit(1), NumberLit(2))
        assert children(Const("x", NumberLit(1), Var("x"))) == (NumberLit(1), Var("x"))
        assert children(Func((Param("x", NUMBER),), Var("x"))) == (Var("x"),)

    def test_unknown_term(self):
        with pytest.raises(InternalError):
            children("not a term")  # type: ignore[arg-type]


class TestFold:
    """Tests for the catamorphism."""

    def test_counts_nodes(self):
        term = Seq(
            Const("f", Func((Param("x", NUMBER),), Add(Var("x"), NumberLit(1))), Call(Var("f"), (NumberLit(2),))),
            If(TrueLit(), FalseLit(), TrueLit()),
        )
        assert fold(Size(), term) == 13

    def test_post_order_left_to_right(self):
        term = Add(If(TrueLit(), NumberLit(1), NumberLit(2)), Call(Var("f"), (NumberLit(3), NumberLit(4))))
        trace = Trace()
        fold(trace, term)
        assert trace.order == ["true", "1", "2", "?", "f", "3", "4", "()", "+"]

    def test_nullary_call(self):
        trace = Trace()
        fold(trace, Call(Var("f"), ()))
        assert trace.order == ["f", "()"]

    def test_deep_right_nested(self, deep_add):
        assert fold(Size(), deep_add) == 2 * 20_000 + 1

    def test_deep_left_nested(self):
        term = NumberLit(0)
        for i in range(20_000):
            term = Add(term, NumberLit(i))
        assert fold(Size(), term) == 2 * 20_000 + 1


class TestPara:
    """Tests for the paramorphism."""

    def test_children_carry_their_spans(self):
        cond = TrueLit(span(0, 4))
        then = NumberLit(1, span(7, 8))
        else_ = NumberLit(2, span(11, 12))
        term = If(cond, then, else_, span(0, 12))
        alg = Spans()
        assert para(alg, term) == 4
        assert alg.seen == [span(0, 4), span(7, 8), span(11, 12)]

    def test_child_node_is_the_subterm(self):
        left, right = NumberLit(1), TrueLit()

        class Nodes(Size):
            def add(self, l: Child, r: Child, span):
                return (l.node, r.node)

        assert para(Nodes(), Add(left, right)) == (left, right)

    def test_deep_right_nested(self, deep_add):
        assert para(Spans(), deep_add) == 2 * 20_000 + 1
