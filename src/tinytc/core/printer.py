"""Pretty printing of terms and types.

``PrettyPrinter`` is a second algebra over the same traversal as the type
checker. Its output is valid surface syntax: expressions are fully
parenthesized and sequences are wrapped wherever they appear inside an
expression, so printing and re-parsing gives back an equal term.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from tinytc.core.ast import Term
from tinytc.core.fold import fold
from tinytc.core.types import Param, Type
from tinytc.utils.location import Span


class Doc(NamedTuple):
    text: str
    sequence: bool = False


def _embed(doc: Doc) -> str:
    return f"({doc.text})" if doc.sequence else doc.text


class PrettyPrinter:
    def true_lit(self, span: Span) -> Doc:
        return Doc("true")

    def false_lit(self, span: Span) -> Doc:
        return Doc("false")

    def number(self, n: int, span: Span) -> Doc:
        return Doc(str(n))

    def add(self, left: Doc, right: Doc, span: Span) -> Doc:
        return Doc(f"({_embed(left)} + {_embed(right)})")

    def if_(self, cond: Doc, then: Doc, else_: Doc, span: Span) -> Doc:
        return Doc(f"({_embed(cond)} ? {_embed(then)} : {_embed(else_)})")

    def var(self, name: str, span: Span) -> Doc:
        return Doc(name)

    def func(self, params: tuple[Param, ...], body: Doc, span: Span) -> Doc:
        params_str = ", ".join(str(p) for p in params)
        return Doc(f"(({params_str}) => {_embed(body)})")

    def call(self, callee: Doc, args: Sequence[Doc], span: Span) -> Doc:
        return Doc(f"{_embed(callee)}({', '.join(_embed(a) for a in args)})")

    def seq(self, first: Doc, rest: Doc, span: Span) -> Doc:
        return Doc(f"{_embed(first)}; {rest.text}", sequence=True)

    def const(self, name: str, init: Doc, rest: Doc, span: Span) -> Doc:
        return Doc(f"const {name} = {_embed(init)}; {rest.text}", sequence=True)


_PRINTER = PrettyPrinter()


def pretty(term: Term) -> str:
    """Render ``term`` as surface syntax."""
    return fold(_PRINTER, term).text


def show_type(ty: Type) -> str:
    """Render a type the way it is written in annotations."""
    return str(ty)
