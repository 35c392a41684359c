"""Parser for the surface syntax.

Turns source text such as ``const f = (x: number) => x + 1; f(41)`` into
core terms annotated with source spans. Built on a Lark LALR grammar with
propagated positions; syntax errors are reported in the same
``file:line:col-line:col message`` format as type diagnostics.
"""

from __future__ import annotations

from functools import cache
from typing import NoReturn

from lark import Lark, Transformer_NonRecursive, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from loguru import logger

from tinytc.core.ast import Add, Call, Const, FalseLit, Func, If, NumberLit, Seq, Term, TrueLit, Var
from tinytc.core.types import BOOLEAN, NUMBER, FunctionType, Param
from tinytc.utils.location import DEFAULT_SOURCE, Location, Span

GRAMMAR = r"""
    start: program

    ?program: expr ";"?
            | expr ";" program                  -> seq
            | "const" NAME "=" expr ";" program  -> const

    ?expr: add "?" expr ":" expr               -> if_
         | "(" [params] ")" "=>" expr           -> func
         | add

    ?add: add "+" call                          -> add
        | call

    ?call: call "(" [args] ")"                  -> call
         | atom

    args: expr ("," expr)*

    ?atom: "true"                               -> true_lit
         | "false"                              -> false_lit
         | INT                                  -> number
         | NAME                                 -> var
         | "(" program ")"

    params: param ("," param)*
    param: NAME ":" type

    ?type: "boolean"                            -> boolean_type
         | "number"                             -> number_type
         | "(" [params] ")" "=>" type           -> function_type
         | "(" type ")"

    NAME: /(?!(true|false|const|boolean|number)\b)[A-Za-z_$][A-Za-z0-9_$]*/
    COMMENT: /\/\/[^\n]*/

    %import common.INT
    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


class ParseError(Exception):
    """Error during parsing."""

    def __init__(self, message: str, span: Span):
        super().__init__(f"{span} {message}")
        self.message = message
        self.span = span


def error_at(message: str, span: Span) -> NoReturn:
    """Raise a positioned error rendered like a type diagnostic."""
    raise ParseError(message, span)


@v_args(meta=True)
class TermBuilder(Transformer_NonRecursive):
    """Transform the Lark parse tree into spanned core terms."""

    def __init__(self, source_id: str):
        super().__init__()
        self.source_id = source_id

    def _span(self, meta) -> Span:
        if getattr(meta, "empty", True):
            return Span.unknown()
        return Span(
            Location(meta.line, meta.column - 1, self.source_id),
            Location(meta.end_line, meta.end_column - 1, self.source_id),
        )

    def start(self, meta, children):
        return children[0]

    def seq(self, meta, children):
        first, rest = children
        return Seq(first, rest, self._span(meta))

    def const(self, meta, children):
        name, init, rest = children
        return Const(str(name), init, rest, self._span(meta))

    def if_(self, meta, children):
        cond, then, else_ = children
        return If(cond, then, else_, self._span(meta))

    def func(self, meta, children):
        params, body = children
        return Func(tuple(params or ()), body, self._span(meta))

    def add(self, meta, children):
        left, right = children
        return Add(left, right, self._span(meta))

    def call(self, meta, children):
        callee, args = children
        return Call(callee, tuple(args or ()), self._span(meta))

    def args(self, meta, children):
        return list(children)

    def true_lit(self, meta, children):
        return TrueLit(self._span(meta))

    def false_lit(self, meta, children):
        return FalseLit(self._span(meta))

    def number(self, meta, children):
        (token,) = children
        return NumberLit(int(token), self._span(meta))

    def var(self, meta, children):
        (token,) = children
        return Var(str(token), self._span(meta))

    def params(self, meta, children):
        return list(children)

    def param(self, meta, children):
        name, ty = children
        return Param(str(name), ty)

    def boolean_type(self, meta, children):
        return BOOLEAN

    def number_type(self, meta, children):
        return NUMBER

    def function_type(self, meta, children):
        params, ret = children
        return FunctionType(tuple(params or ()), ret)


@cache
def _lark() -> Lark:
    return Lark(GRAMMAR, parser="lalr", lexer="basic", propagate_positions=True, maybe_placeholders=True)


def _point(line: int, column: int, source_id: str) -> Span:
    loc = Location(line, column, source_id)
    return Span(loc, loc)


def _end_of(source: str, source_id: str) -> Span:
    lines = source.split("\n")
    return _point(len(lines), len(lines[-1]), source_id)


def _convert(e: UnexpectedInput, source: str, source_id: str) -> ParseError:
    match e:
        case UnexpectedToken(token=token) if token.type == "$END":
            return ParseError("unexpected end of input", _end_of(source, source_id))
        case UnexpectedToken(token=token):
            start = Location(token.line, token.column - 1, source_id)
            end = Location(token.end_line or token.line, (token.end_column or token.column) - 1, source_id)
            return ParseError(f"unexpected token {str(token)!r}", Span(start, end))
        case UnexpectedCharacters():
            char = source[e.pos_in_stream] if 0 <= e.pos_in_stream < len(source) else ""
            start = Location(e.line, e.column - 1, source_id)
            return ParseError(f"unexpected character {char!r}", Span(start, Location(e.line, e.column, source_id)))
        case _:
            line, column = getattr(e, "line", -1), getattr(e, "column", -1)
            if line > 0:
                return ParseError("syntax error", _point(line, column - 1, source_id))
            return ParseError("syntax error", _end_of(source, source_id))


def parse(source: str, source_id: str | None = None) -> Term:
    """Parse surface syntax into a spanned term.

    Args:
        source: Program text.
        source_id: Name used in spans, ``<stdin>`` by default.

    Raises:
        ParseError: If the text is not a well-formed program.
    """
    source_id = source_id or DEFAULT_SOURCE
    try:
        tree = _lark().parse(source)
    except UnexpectedInput as e:
        error = _convert(e, source, source_id)
        logger.debug("parse.failed at={} message={}", error.span, error.message)
        raise error from e
    return TermBuilder(source_id).transform(tree)


__all__ = ["GRAMMAR", "ParseError", "TermBuilder", "error_at", "parse"]
