"""Typer CLI entrypoints."""

from __future__ import annotations

import asyncio
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from tinytc.config import CheckerSettings, load_settings
from tinytc.core.checker import TypeChecker
from tinytc.core.errors import TypeCheckError
from tinytc.core.printer import pretty, show_type
from tinytc.logging_utils import checking_source, configure_logging
from tinytc.surface.parser import ParseError, parse

app = typer.Typer(name="tinytc", help="Type checker for a tiny TypeScript-like language", add_completion=False)


class PolicyOption(str, Enum):
    fail_fast = "fail-fast"
    accumulate = "accumulate"


def _read_source(path: Path | None, expr: str | None, settings: CheckerSettings) -> tuple[str, str]:
    if expr is not None:
        return expr, settings.source_id
    if path is None or str(path) == "-":
        return sys.stdin.read(), settings.source_id
    return path.read_text(encoding="utf-8"), str(path)


@app.command()
def check(
    path: Annotated[Path | None, typer.Argument(help="Source file, '-' or omitted for stdin")] = None,
    expr: Annotated[str | None, typer.Option("--expr", "-e", help="Check this program text instead of a file")] = None,
    policy: Annotated[PolicyOption | None, typer.Option("--policy")] = None,
    use_async: Annotated[bool, typer.Option("--async", help="Run on an asyncio event loop")] = False,
) -> None:
    """Type check a program and print its type."""

    configure_logging(profile="cli")
    settings = load_settings(policy=policy.value if policy else None)
    source, source_id = _read_source(path, expr, settings)
    checker = TypeChecker.from_settings(settings)
    with checking_source(source_id):
        logger.info("check.start policy={} async={}", settings.policy, use_async)
        try:
            term = parse(source, source_id)
            if use_async:
                ty = asyncio.run(checker.check_async(term))
            else:
                ty = checker.check(term)
        except (ParseError, TypeCheckError) as e:
            logger.info("check.failed")
            typer.echo(str(e), err=True)
            raise typer.Exit(1) from e
    typer.echo(show_type(ty))


@app.command()
def fmt(
    path: Annotated[Path | None, typer.Argument(help="Source file, '-' or omitted for stdin")] = None,
    expr: Annotated[str | None, typer.Option("--expr", "-e", help="Format this program text instead of a file")] = None,
) -> None:
    """Print a program in normalized, fully parenthesized form."""

    configure_logging(profile="cli")
    settings = load_settings()
    source, source_id = _read_source(path, expr, settings)
    try:
        term = parse(source, source_id)
    except ParseError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e
    typer.echo(pretty(term))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
