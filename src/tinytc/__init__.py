"""tinytc - a type checker for a tiny TypeScript-like expression language."""

from tinytc.config import CheckerSettings, load_settings
from tinytc.core import (
    BOOLEAN,
    NUMBER,
    Diagnostic,
    ErrorCode,
    FlatTypeEnv,
    Term,
    Type,
    TypeChecker,
    TypeCheckError,
    TypeEnv,
    pretty,
    show_type,
    typecheck,
)
from tinytc.surface import ParseError, parse

__version__ = "0.1.0"

__all__ = [
    "BOOLEAN",
    "NUMBER",
    "CheckerSettings",
    "Diagnostic",
    "ErrorCode",
    "FlatTypeEnv",
    "ParseError",
    "Term",
    "Type",
    "TypeCheckError",
    "TypeChecker",
    "TypeEnv",
    "load_settings",
    "parse",
    "pretty",
    "show_type",
    "typecheck",
]
