"""Runtime logging helpers.

All modules log through loguru. ``configure_logging`` installs one sink per
process: plain stderr for library use, a rich handler for the CLI. Every
record carries ``extra["source"]``, the id of the program being checked, set
with ``checking_source``.
"""

from __future__ import annotations

import inspect
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

from tinytc.utils.location import DEFAULT_SOURCE

LogProfile = Literal["default", "cli"]
LogFilter = dict[str | None, str | int | bool]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "cli": "{extra[source]} | {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[source]} | {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None
_CURRENT_SOURCE: ContextVar[str] = ContextVar("tinytc_source", default=DEFAULT_SOURCE)


@contextmanager
def checking_source(source_id: str) -> Iterator[None]:
    """Tag log records emitted inside the block with ``source_id``."""
    token = _CURRENT_SOURCE.set(source_id)
    try:
        yield
    finally:
        _CURRENT_SOURCE.reset(token)


def current_source() -> str:
    return _CURRENT_SOURCE.get()


def _inject_source(record: Any) -> None:
    record["extra"].setdefault("source", _CURRENT_SOURCE.get())


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def parse_log_filter(value: str | None = None) -> tuple[str, LogFilter]:
    """Parse a TINYTC_LOG_FILTER value (read from the environment by default).

    Format: "level" or "level,module1=level,module2=false"
    Examples:
        - "info" - global INFO level
        - "debug,tinytc.core=trace" - global DEBUG, tinytc.core at TRACE
        - "info,tinytc.surface=false" - global INFO, parser logs disabled

    Returns:
        (global_level, module_filter_dict)
    """
    raw = value if value is not None else os.getenv("TINYTC_LOG_FILTER", "info")
    global_level = "info"
    modules: LogFilter = {}
    for part in filter(None, (p.strip() for p in raw.lower().split(","))):
        module, sep, level = part.partition("=")
        if not sep:
            global_level = part
        elif level.strip() == "false":
            modules[module.strip()] = False
        else:
            modules[module.strip()] = level.strip().upper()
    return global_level, modules


def _sink(profile: LogProfile) -> Any:
    if profile == "cli":
        return RichHandler(
            console=Console(stderr=True),
            show_level=True,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
    return sys.stderr


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging (lark included) to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure process-level logging once per profile.

    Log levels controlled by TINYTC_LOG_FILTER:
    - "info" - global INFO level
    - "debug,tinytc.core=debug" - global DEBUG with tinytc.core at DEBUG
    - "info,tinytc.surface=false" - global INFO, tinytc.surface disabled
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter()

    logger.remove()
    logger.configure(patcher=_inject_source)
    logger.add(
        _sink(profile),
        level=global_level.upper(),
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )

    _setup_stdlib_intercept()

    _CONFIGURED_PROFILE = profile
