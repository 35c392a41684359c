"""Core language AST.

Every node carries the source span it was parsed from. Spans are excluded
from equality so structurally identical programs compare equal regardless of
where they came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tinytc.core.types import Param
from tinytc.utils.location import Span


class Term:
    """Base class for terms."""

    span: Span


@dataclass(frozen=True)
class TrueLit(Term):
    """Boolean literal ``true``."""

    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class FalseLit(Term):
    """Boolean literal ``false``."""

    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class NumberLit(Term):
    """Integer literal."""

    n: int
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class Add(Term):
    """Addition: left + right."""

    left: Term
    right: Term
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class If(Term):
    """Conditional: cond ? then : else."""

    cond: Term
    then: Term
    else_: Term
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class Var(Term):
    """Variable reference by name."""

    name: str
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class Func(Term):
    """Function literal with annotated parameters: (x: T, ...) => body."""

    params: tuple[Param, ...]
    body: Term
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class Call(Term):
    """Function call: callee(arg, ...)."""

    callee: Term
    args: tuple[Term, ...]
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class Seq(Term):
    """Sequencing: first; rest. The value is that of ``rest``."""

    first: Term
    rest: Term
    span: Span = field(default_factory=Span.unknown, compare=False)


@dataclass(frozen=True)
class Const(Term):
    """Binding: const name = init; rest.

    ``name`` is visible only inside ``rest``.
    """

    name: str
    init: Term
    rest: Term
    span: Span = field(default_factory=Span.unknown, compare=False)
