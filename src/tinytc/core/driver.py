"""Stack-safe execution of suspended computations.

Both drivers are loops over an explicit, heap-allocated continuation stack:
a ``Bind`` pushes its continuation, a ``Local`` pushes the environment to
restore, and a finished value pops frames until one yields more work. Native
stack depth therefore stays constant however deeply the computation nests.

Every ``Suspend`` is a yield boundary. ``run`` offers it to an optional
``on_yield`` callback; ``run_async`` awaits ``asyncio.sleep(0)`` so the host
event loop regains control between layers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from tinytc.core.computation import Ask, Bind, Computation, Fail, Local, Pure, Suspend
from tinytc.core.errors import InternalError
from tinytc.core.result import Err, Ok, Result


@dataclass(frozen=True)
class _Restore:
    env: Any


@dataclass
class RunStats:
    """Counters for one driver run."""

    steps: int = 0
    yields: int = 0
    max_stack: int = 0


class _Machine:
    """One resumable execution; each ``step`` handles a single layer."""

    def __init__(self, computation: Computation[Any], env: Any):
        self.current: Computation[Any] = computation
        self.env = env
        self.stack: list[Callable[[Any], Computation[Any]] | _Restore] = []
        self.stats = RunStats()
        self.outcome: Result | None = None

    def step(self) -> bool:
        """Advance one layer. Returns True when the step crossed a yield boundary."""
        self.stats.steps += 1
        match self.current:
            case Pure(value):
                self._resume(value)
            case Fail(diagnostic):
                self.outcome = Err((diagnostic,))
            case Ask():
                self._resume(self.env)
            case Local(modify, inner):
                self.stack.append(_Restore(self.env))
                self.env = modify(self.env)
                self.current = inner
            case Bind(inner, k):
                self.stack.append(k)
                self.current = inner
            case Suspend(thunk):
                self.stats.yields += 1
                self.current = thunk()
                return True
            case other:
                raise InternalError(f"not a computation: {other!r}")
        if len(self.stack) > self.stats.max_stack:
            self.stats.max_stack = len(self.stack)
        return False

    def _resume(self, value: Any) -> None:
        while self.stack:
            frame = self.stack.pop()
            if isinstance(frame, _Restore):
                self.env = frame.env
                continue
            self.current = frame(value)
            return
        self.outcome = Ok(value)


def run(
    computation: Computation[Any],
    env: Any,
    *,
    yield_interval: int = 1,
    on_yield: Callable[[RunStats], None] | None = None,
) -> Result:
    """Run ``computation`` to completion under ``env``.

    Args:
        computation: The suspended computation to execute.
        env: Initial environment, visible through ``ask``.
        yield_interval: Call ``on_yield`` on every n-th yield boundary.
        on_yield: Host callback invoked at yield boundaries.

    Returns:
        ``Ok(value)`` or ``Err(diagnostics)``.
    """
    if yield_interval < 1:
        raise ValueError("yield_interval must be at least 1")
    machine = _Machine(computation, env)
    while machine.outcome is None:
        if machine.step() and on_yield is not None and machine.stats.yields % yield_interval == 0:
            on_yield(machine.stats)
    logger.trace(
        "driver.done steps={} yields={} max_stack={}",
        machine.stats.steps,
        machine.stats.yields,
        machine.stats.max_stack,
    )
    return machine.outcome


async def run_async(
    computation: Computation[Any],
    env: Any,
    *,
    yield_interval: int = 1,
    on_yield: Callable[[RunStats], None] | None = None,
) -> Result:
    """Like ``run``, but hands control to the event loop at yield boundaries."""
    if yield_interval < 1:
        raise ValueError("yield_interval must be at least 1")
    machine = _Machine(computation, env)
    while machine.outcome is None:
        if machine.step() and machine.stats.yields % yield_interval == 0:
            if on_yield is not None:
                on_yield(machine.stats)
            await asyncio.sleep(0)
    logger.trace(
        "driver.done steps={} yields={} max_stack={}",
        machine.stats.steps,
        machine.stats.yields,
        machine.stats.max_stack,
    )
    return machine.outcome
