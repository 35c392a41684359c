"""Check results: a value or a non-empty sequence of diagnostics."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from tinytc.core.errors import Diagnostic, InternalError, TypeCheckError

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


@dataclass(frozen=True)
class Ok(Generic[A]):
    value: A

    def unwrap(self) -> A:
        return self.value


@dataclass(frozen=True)
class Err:
    errors: tuple[Diagnostic, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise InternalError("Err needs at least one diagnostic")

    def unwrap(self):
        raise TypeCheckError(self.errors)


Result = Ok[A] | Err


def err(*diagnostics: Diagnostic) -> Err:
    return Err(tuple(diagnostics))


def errors_of(result: Result) -> tuple[Diagnostic, ...]:
    """Diagnostics of ``result``, empty for ``Ok``."""
    match result:
        case Err(errors):
            return errors
        case _:
            return ()


def map2(ra: Result[A], rb: Result[B], f: Callable[[A, B], C]) -> Result[C]:
    """Combine two results, concatenating errors when both failed."""
    match ra, rb:
        case Ok(a), Ok(b):
            return Ok(f(a, b))
        case Err(ea), Err(eb):
            return Err(ea + eb)
        case Err(), Ok():
            return ra
        case Ok(), Err():
            return rb
        case _:
            raise InternalError(f"map2 on non-results: {ra!r}, {rb!r}")
