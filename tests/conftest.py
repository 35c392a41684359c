"""Test configuration and shared fixtures."""

import os

import pytest

from tinytc.core.ast import Add, Func, NumberLit, Term, Var
from tinytc.core.checker import TypeChecker
from tinytc.core.types import NUMBER, Param

DEEP = 20_000


def _add_chain(depth: int, last: Term | None = None) -> Term:
    """Right-nested ``1 + (1 + (... + last))`` with ``depth`` additions."""
    term: Term = last if last is not None else NumberLit(1)
    for _ in range(depth):
        term = Add(NumberLit(1), term)
    return term


@pytest.fixture
def add_chain():
    """Factory for right-nested addition chains, built without recursion."""
    return _add_chain


@pytest.fixture
def deep_add() -> Term:
    return _add_chain(DEEP)


@pytest.fixture
def checker() -> TypeChecker:
    return TypeChecker()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep ambient TINYTC_* variables from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("TINYTC_"):
            monkeypatch.delenv(key, raising=False)


def _func_chain(depth: int, body: Term | None = None) -> Term:
    """``(x{n-1}: number) => ... => (x0: number) => body`` with ``depth`` binders."""
    term: Term = body if body is not None else Var("x0")
    for i in range(depth):
        term = Func((Param(f"x{i}", NUMBER),), term)
    return term


@pytest.fixture
def func_chain():
    """Factory for nested single-parameter functions, built without recursion."""
    return _func_chain
