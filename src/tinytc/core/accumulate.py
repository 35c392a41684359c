"""Error-accumulating rules for the literal, ``+`` and conditional fragment.

Unlike the fail-fast rules, independent failures in sibling subtrees are all
kept: both operands of ``+`` and all three parts of a conditional are checked
and their diagnostics concatenated in evaluation order. Variables, functions,
calls, sequencing and bindings are outside this fragment and produce a
``NotImplemented`` diagnostic at their span.
"""

from __future__ import annotations

from collections.abc import Sequence

from tinytc.core.errors import Diagnostic, ErrorCode
from tinytc.core.fold import Child
from tinytc.core.result import Err, Ok, Result, err, errors_of, map2
from tinytc.core.types import BOOLEAN, NUMBER, BooleanType, NumberType, Param, Type, type_equal
from tinytc.utils.location import Span

Checked = Result[Type]


def _not_implemented(span: Span, what: str) -> Checked:
    return err(Diagnostic.at(ErrorCode.NOT_IMPLEMENTED, span, what))


def _number_operand(operand: Child[Checked]) -> Checked:
    match operand.out:
        case Ok(ty) if not isinstance(ty, NumberType):
            return err(Diagnostic.at(ErrorCode.RUNTIME_ADD_TYPE, operand.span))
        case out:
            return out


class AccumulatingRules:
    """Location-aware algebra from terms to ``Ok(type)`` or ``Err(diagnostics)``."""

    def true_lit(self, span: Span) -> Checked:
        return Ok(BOOLEAN)

    def false_lit(self, span: Span) -> Checked:
        return Ok(BOOLEAN)

    def number(self, n: int, span: Span) -> Checked:
        return Ok(NUMBER)

    def add(self, left: Child[Checked], right: Child[Checked], span: Span) -> Checked:
        return map2(_number_operand(left), _number_operand(right), lambda a, b: NUMBER)

    def if_(self, cond: Child[Checked], then: Child[Checked], else_: Child[Checked], span: Span) -> Checked:
        found = [*errors_of(cond.out), *errors_of(then.out), *errors_of(else_.out)]
        match cond.out:
            case Ok(ct) if not isinstance(ct, BooleanType):
                found.append(Diagnostic.at(ErrorCode.IF_COND_NOT_BOOLEAN, cond.span))
        match then.out, else_.out:
            case Ok(tt), Ok(et) if not type_equal(tt, et):
                found.append(Diagnostic.at(ErrorCode.IF_BRANCHES_MISMATCH, span))
        if found:
            return Err(tuple(found))
        return then.out

    def var(self, name: str, span: Span) -> Checked:
        return _not_implemented(span, "variable")

    def func(self, params: tuple[Param, ...], body: Child[Checked], span: Span) -> Checked:
        return _not_implemented(span, "function")

    def call(self, callee: Child[Checked], args: Sequence[Child[Checked]], span: Span) -> Checked:
        return _not_implemented(span, "call")

    def seq(self, first: Child[Checked], rest: Child[Checked], span: Span) -> Checked:
        return _not_implemented(span, "sequence")

    def const(self, name: str, init: Child[Checked], rest: Child[Checked], span: Span) -> Checked:
        return _not_implemented(span, "const")
