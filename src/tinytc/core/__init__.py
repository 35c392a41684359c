"""Core language: AST, types, environments and the type checker."""

from tinytc.core.accumulate import AccumulatingRules
from tinytc.core.ast import (
    Add,
    Call,
    Const,
    FalseLit,
    Func,
    If,
    NumberLit,
    Seq,
    Term,
    TrueLit,
    Var,
)
from tinytc.core.checker import TypeChecker, TypeRules, typecheck
from tinytc.core.env import FlatTypeEnv, TypeEnv, empty_env
from tinytc.core.errors import (
    Diagnostic,
    ErrorCode,
    InternalError,
    TypeCheckError,
    report,
)
from tinytc.core.fold import Algebra, Child, ParaAlgebra, children, fold, para
from tinytc.core.printer import PrettyPrinter, pretty, show_type
from tinytc.core.result import Err, Ok, Result
from tinytc.core.types import (
    BOOLEAN,
    NUMBER,
    BooleanType,
    FunctionType,
    NumberType,
    Param,
    Type,
    function_type,
    type_equal,
)

__all__ = [
    # AST
    "Term",
    "TrueLit",
    "FalseLit",
    "NumberLit",
    "Add",
    "If",
    "Var",
    "Func",
    "Call",
    "Seq",
    "Const",
    # Types
    "Type",
    "BooleanType",
    "NumberType",
    "FunctionType",
    "Param",
    "BOOLEAN",
    "NUMBER",
    "function_type",
    "type_equal",
    # Environments
    "TypeEnv",
    "FlatTypeEnv",
    "empty_env",
    # Traversal
    "Algebra",
    "ParaAlgebra",
    "Child",
    "children",
    "fold",
    "para",
    # Errors
    "Diagnostic",
    "ErrorCode",
    "InternalError",
    "TypeCheckError",
    "report",
    "Ok",
    "Err",
    "Result",
    # Type Checker
    "TypeChecker",
    "TypeRules",
    "AccumulatingRules",
    "typecheck",
    # Printing
    "PrettyPrinter",
    "pretty",
    "show_type",
]
