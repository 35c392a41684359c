"""Diagnostics and error types for the type checker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

from tinytc.utils.location import Span


class ErrorCode(str, Enum):
    """Kinds of diagnostics the checker can produce."""

    IF_COND_NOT_BOOLEAN = "IfCondNotBoolean"
    IF_BRANCHES_MISMATCH = "IfBranchesMismatch"
    RUNTIME_ADD_TYPE = "RuntimeAddType"
    UNKNOWN_VARIABLE = "UnknownVariable"
    FUNC_EXPECTED = "FuncExpected"
    ARG_COUNT_MISMATCH = "ArgCountMismatch"
    ARG_TYPE_MISMATCH = "ArgTypeMismatch"
    UNREACHABLE = "Unreachable"
    NOT_IMPLEMENTED = "NotImplemented"


MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.IF_COND_NOT_BOOLEAN: "boolean expected",
    ErrorCode.IF_BRANCHES_MISMATCH: "then and else have different types",
    ErrorCode.RUNTIME_ADD_TYPE: "number expected",
    ErrorCode.UNKNOWN_VARIABLE: "unknown variable",
    ErrorCode.FUNC_EXPECTED: "function expected",
    ErrorCode.ARG_COUNT_MISMATCH: "number of arguments mismatch",
    ErrorCode.ARG_TYPE_MISMATCH: "parameter type mismatch",
    ErrorCode.UNREACHABLE: "unreachable",
    ErrorCode.NOT_IMPLEMENTED: "not implemented yet",
}


@dataclass(frozen=True)
class Diagnostic:
    """A user-facing type error tied to a source span."""

    code: ErrorCode
    message: str
    span: Span

    @staticmethod
    def at(code: ErrorCode, span: Span, detail: str | None = None) -> "Diagnostic":
        """Build a diagnostic with the standard message for ``code``."""
        message = MESSAGES[code]
        if detail:
            message = f"{message}: {detail}"
        return Diagnostic(code, message, span)

    def __str__(self) -> str:
        return f"{self.span} {self.message}"


class TypeCheckError(Exception):
    """A program failed to type check.

    Carries one diagnostic under the fail-fast policy and one or more under
    the accumulating policy, in evaluation order.
    """

    diagnostics: tuple[Diagnostic, ...]

    def __init__(self, diagnostics: tuple[Diagnostic, ...] | list[Diagnostic] | Diagnostic):
        if isinstance(diagnostics, Diagnostic):
            diagnostics = (diagnostics,)
        diagnostics = tuple(diagnostics)
        if not diagnostics:
            raise InternalError("TypeCheckError needs at least one diagnostic")
        self.diagnostics = diagnostics
        super().__init__("\n".join(str(d) for d in diagnostics))

    @property
    def diagnostic(self) -> Diagnostic:
        """The first (under fail-fast, the only) diagnostic."""
        return self.diagnostics[0]

    @property
    def code(self) -> ErrorCode:
        return self.diagnostic.code

    @property
    def span(self) -> Span:
        return self.diagnostic.span


class InternalError(Exception):
    """The checker reached a state its own invariants rule out.

    Signals a bug in the engine, never a problem with the checked program.
    """

    code = ErrorCode.UNREACHABLE

    def __init__(self, detail: str = ""):
        message = MESSAGES[ErrorCode.UNREACHABLE]
        super().__init__(f"{message}: {detail}" if detail else message)


def report(code: ErrorCode, span: Span, detail: str | None = None) -> NoReturn:
    """Raise a ``TypeCheckError`` for ``code`` at ``span``.

    The raising counterpart of ``Diagnostic.at`` for code outside the checker
    (embedders, custom rules) that wants to fail fast with a checker-formatted
    diagnostic. ``ErrorCode.UNREACHABLE`` raises ``InternalError`` instead.
    """
    if code is ErrorCode.UNREACHABLE:
        raise InternalError(detail or str(span))
    raise TypeCheckError(Diagnostic.at(code, span, detail))
