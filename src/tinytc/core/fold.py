"""Structural recursion over terms.

``fold`` and ``para`` walk a term bottom-up and left to right, hand each
node's processed children to one method of an algebra, and return what the
algebra builds for the root. The walk keeps its own work stack, so term
depth is limited by memory rather than by the interpreter's recursion limit.

An algebra is any object with one method per term variant; the engine is
polymorphic over what those methods return. ``para`` additionally pairs every
child result with the child term it came from, for span-accurate
diagnostics.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from tinytc.core.ast import Add, Call, Const, FalseLit, Func, If, NumberLit, Seq, Term, TrueLit, Var
from tinytc.core.errors import InternalError
from tinytc.core.types import Param
from tinytc.utils.location import Span

R = TypeVar("R")


@dataclass(frozen=True)
class Child(Generic[R]):
    """A processed child together with the term it was computed from."""

    out: R
    node: Term

    @property
    def span(self) -> Span:
        return self.node.span


class Algebra(Protocol[R]):
    """Per-variant operations over already processed children."""

    def true_lit(self, span: Span) -> R: ...

    def false_lit(self, span: Span) -> R: ...

    def number(self, n: int, span: Span) -> R: ...

    def add(self, left: R, right: R, span: Span) -> R: ...

    def if_(self, cond: R, then: R, else_: R, span: Span) -> R: ...

    def var(self, name: str, span: Span) -> R: ...

    def func(self, params: tuple[Param, ...], body: R, span: Span) -> R: ...

    def call(self, callee: R, args: Sequence[R], span: Span) -> R: ...

    def seq(self, first: R, rest: R, span: Span) -> R: ...

    def const(self, name: str, init: R, rest: R, span: Span) -> R: ...


class ParaAlgebra(Protocol[R]):
    """Like ``Algebra``, but children arrive as ``Child(out, node)``."""

    def true_lit(self, span: Span) -> R: ...

    def false_lit(self, span: Span) -> R: ...

    def number(self, n: int, span: Span) -> R: ...

    def add(self, left: Child[R], right: Child[R], span: Span) -> R: ...

    def if_(self, cond: Child[R], then: Child[R], else_: Child[R], span: Span) -> R: ...

    def var(self, name: str, span: Span) -> R: ...

    def func(self, params: tuple[Param, ...], body: Child[R], span: Span) -> R: ...

    def call(self, callee: Child[R], args: Sequence[Child[R]], span: Span) -> R: ...

    def seq(self, first: Child[R], rest: Child[R], span: Span) -> R: ...

    def const(self, name: str, init: Child[R], rest: Child[R], span: Span) -> R: ...


def children(term: Term) -> tuple[Term, ...]:
    """Direct sub-terms of ``term`` in evaluation order."""
    match term:
        case TrueLit() | FalseLit() | NumberLit() | Var():
            return ()
        case Add(left, right):
            return (left, right)
        case If(cond, then, else_):
            return (cond, then, else_)
        case Func(_, body):
            return (body,)
        case Call(callee, args):
            return (callee, *args)
        case Seq(first, rest):
            return (first, rest)
        case Const(_, init, rest):
            return (init, rest)
        case _:
            raise InternalError(f"unknown term: {type(term).__name__}")


def _apply(alg, node: Term, kids: list) -> object:
    """Dispatch one node to its algebra method; ``kids`` in evaluation order."""
    match node:
        case TrueLit():
            return alg.true_lit(node.span)
        case FalseLit():
            return alg.false_lit(node.span)
        case NumberLit(n):
            return alg.number(n, node.span)
        case Add():
            return alg.add(kids[0], kids[1], node.span)
        case If():
            return alg.if_(kids[0], kids[1], kids[2], node.span)
        case Var(name):
            return alg.var(name, node.span)
        case Func(params):
            return alg.func(params, kids[0], node.span)
        case Call():
            return alg.call(kids[0], kids[1:], node.span)
        case Seq():
            return alg.seq(kids[0], kids[1], node.span)
        case Const(name):
            return alg.const(name, kids[0], kids[1], node.span)
        case _:
            raise InternalError(f"unknown term: {type(node).__name__}")


def _walk(term: Term, combine: Callable[[Term, list], R]) -> R:
    # Post-order walk. ``pending`` holds (node, expanded); ``done`` holds the
    # results of finished subtrees, the newest on top.
    pending: list[tuple[Term, bool]] = [(term, False)]
    done: list = []
    while pending:
        node, expanded = pending.pop()
        kids = children(node)
        if expanded or not kids:
            split = len(done) - len(kids)
            outs = done[split:]
            del done[split:]
            done.append(combine(node, outs))
        else:
            pending.append((node, True))
            pending.extend((kid, False) for kid in reversed(kids))
    if len(done) != 1:
        raise InternalError(f"walk finished with {len(done)} results")
    return done[0]


def fold(alg: Algebra[R], term: Term) -> R:
    """Catamorphism: process children, then combine with ``alg``."""
    return _walk(term, lambda node, outs: _apply(alg, node, outs))


def para(alg: ParaAlgebra[R], term: Term) -> R:
    """Paramorphism: like ``fold``, each child paired with its own term."""

    def combine(node: Term, outs: list) -> R:
        kids = children(node)
        return _apply(alg, node, [Child(out, kid) for out, kid in zip(outs, kids)])

    return _walk(term, combine)
