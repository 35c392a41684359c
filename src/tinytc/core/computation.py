"""Suspended checking computations.

A ``Computation`` describes work that reads the type environment and either
produces a value or fails with a diagnostic. Nothing runs when a computation
is built; ``tinytc.core.driver`` executes it with an explicit continuation
stack, so composing computations never grows the native call stack.

The constructors map onto the environment-and-error contract directly:

- ``pure(a)``: succeed with ``a``
- ``fail(d)``: abort with diagnostic ``d``
- ``ask()``: read the current environment
- ``local(f, c)``: run ``c`` under ``f(env)``; the outer environment is
  restored afterwards
- ``c.bind(k)``: run ``c``, then the computation ``k`` builds from its value
- ``suspend(thunk)``: a yield boundary; the driver may hand control back
  to its host before calling ``thunk``
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tinytc.core.errors import Diagnostic

A = TypeVar("A")
B = TypeVar("B")


class Computation(Generic[A]):
    """Base class for suspended computations."""

    def bind(self, k: Callable[[A], Computation[B]]) -> Computation[B]:
        return Bind(self, k)

    def map(self, f: Callable[[A], B]) -> Computation[B]:
        return Bind(self, lambda a: Pure(f(a)))

    def then(self, other: Computation[B]) -> Computation[B]:
        """Run ``self`` for its failures only, then ``other``."""
        return Bind(self, lambda _: other)


@dataclass(frozen=True, eq=False)
class Pure(Computation[A]):
    value: A


@dataclass(frozen=True, eq=False)
class Fail(Computation[Any]):
    diagnostic: Diagnostic


@dataclass(frozen=True, eq=False)
class Ask(Computation[Any]):
    pass


@dataclass(frozen=True, eq=False)
class Local(Computation[A]):
    modify: Callable[[Any], Any]
    inner: Computation[A]


@dataclass(frozen=True, eq=False)
class Bind(Computation[B]):
    inner: Computation[Any]
    k: Callable[[Any], Computation[B]]


@dataclass(frozen=True, eq=False)
class Suspend(Computation[A]):
    thunk: Callable[[], Computation[A]]


_ASK = Ask()


def pure(value: A) -> Computation[A]:
    return Pure(value)


def fail(diagnostic: Diagnostic) -> Computation[Any]:
    return Fail(diagnostic)


def ask() -> Computation[Any]:
    return _ASK


def asks(f: Callable[[Any], A]) -> Computation[A]:
    """Read a projection of the environment."""
    return Bind(_ASK, lambda env: Pure(f(env)))


def local(modify: Callable[[Any], Any], inner: Computation[A]) -> Computation[A]:
    return Local(modify, inner)


def suspend(thunk: Callable[[], Computation[A]]) -> Computation[A]:
    return Suspend(thunk)


def descend(child: Computation[A]) -> Computation[A]:
    """Enter an already built child computation through a yield boundary."""
    return Suspend(lambda: child)


def sequence(computations: Sequence[Computation[A]]) -> Computation[list[A]]:
    """Run computations left to right, collecting their values.

    The first failure aborts the rest.
    """
    # Values collect on an immutable cons list, newest first.
    def step(index: int, acc: tuple[A, Any] | None) -> Computation[list[A]]:
        if index == len(computations):
            values: list[A] = []
            node = acc
            while node is not None:
                value, node = node
                values.append(value)
            values.reverse()
            return Pure(values)
        return Bind(computations[index], lambda value: step(index + 1, (value, acc)))

    return step(0, None)
