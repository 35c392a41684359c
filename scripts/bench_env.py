#!/usr/bin/env python3
"""Compare the two type environment strategies.

Measures extension and lookup cost as scope depth grows, and end-to-end
checking of nested ``const`` programs under each strategy.

Usage:
    python scripts/bench_env.py [--depth 2000] [--lookups 20000]
"""

from __future__ import annotations

import time

import typer
from rich.console import Console
from rich.table import Table

from tinytc.core.ast import Add, Const, NumberLit, Term, Var
from tinytc.core.checker import TypeChecker
from tinytc.core.env import empty_env
from tinytc.core.types import NUMBER

STRATEGIES = ("chain", "copy")

console = Console()


def nested_consts(depth: int) -> Term:
    """``const v0 = 1; const v1 = v0 + 1; ...; v{depth-1} + v0``."""
    term: Term = Add(Var(f"v{depth - 1}"), Var("v0"))
    for i in reversed(range(depth)):
        init = NumberLit(1) if i == 0 else Add(Var(f"v{i - 1}"), NumberLit(1))
        term = Const(f"v{i}", init, term)
    return term


def bench_extend(strategy: str, depth: int) -> tuple[float, object]:
    start = time.perf_counter()
    env = empty_env(strategy)  # type: ignore[arg-type]
    for i in range(depth):
        env = env.extend([(f"v{i}", NUMBER)])
    return time.perf_counter() - start, env


def bench_lookup(env, depth: int, lookups: int) -> float:
    names = [f"v{i % depth}" for i in range(lookups)]
    start = time.perf_counter()
    for name in names:
        env.lookup(name)
    return time.perf_counter() - start


def bench_check(strategy: str, term: Term) -> float:
    checker = TypeChecker(env_strategy=strategy)  # type: ignore[arg-type]
    start = time.perf_counter()
    checker.check(term)
    return time.perf_counter() - start


def main(
    depth: int = typer.Option(2000, help="Number of nested scopes"),
    lookups: int = typer.Option(20000, help="Lookups per strategy"),
) -> None:
    table = Table(title=f"Environment strategies (depth={depth})")
    table.add_column("strategy")
    table.add_column("extend (ms)", justify="right")
    table.add_column("lookup (ms)", justify="right")
    table.add_column("check (ms)", justify="right")

    program = nested_consts(depth)
    for strategy in STRATEGIES:
        extend_time, env = bench_extend(strategy, depth)
        lookup_time = bench_lookup(env, depth, lookups)
        check_time = bench_check(strategy, program)
        table.add_row(
            strategy,
            f"{extend_time * 1000:.2f}",
            f"{lookup_time * 1000:.2f}",
            f"{check_time * 1000:.2f}",
        )

    console.print(table)


if __name__ == "__main__":
    typer.run(main)
