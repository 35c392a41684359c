"""Type representations.

Function types can nest arbitrarily deep, so rendering, equality and hashing
walk them with an explicit stack instead of recursing.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class Type:
    """Base class for types."""

    pass


@dataclass(frozen=True)
class BooleanType(Type):
    """The type of ``true`` and ``false``."""

    def __str__(self) -> str:
        return "boolean"


@dataclass(frozen=True)
class NumberType(Type):
    """The type of integer literals and sums."""

    def __str__(self) -> str:
        return "number"


@dataclass(frozen=True)
class Param:
    """Annotated parameter ``name: type``.

    The name is kept for display only; it is excluded from comparison so two
    function types that differ only in parameter names are equal.
    """

    name: str = field(compare=False)
    type: Type

    def __str__(self) -> str:
        return f"{self.name}: {render_type(self.type)}"


@dataclass(frozen=True)
class FunctionType(Type):
    """Function type: (p1: T1, ..., pn: Tn) => R."""

    params: tuple[Param, ...]
    ret: Type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunctionType):
            return NotImplemented
        return type_equal(self, other)

    def __hash__(self) -> int:
        return hash(_shape(self))

    def __str__(self) -> str:
        return render_type(self)


BOOLEAN = BooleanType()
NUMBER = NumberType()


def render_type(ty: Type) -> str:
    """Render a type in surface syntax without recursing."""
    parts: list[str] = []
    stack: list[Type | str] = [ty]
    while stack:
        item = stack.pop()
        match item:
            case str():
                parts.append(item)
            case FunctionType(params, ret):
                stack.append(ret)
                stack.append(") => ")
                for index in range(len(params) - 1, -1, -1):
                    stack.append(params[index].type)
                    stack.append(f"{params[index].name}: ")
                    if index:
                        stack.append(", ")
                stack.append("(")
            case _:
                parts.append(str(item))
    return "".join(parts)


def _shape(ty: Type) -> tuple[object, ...]:
    # Pre-order tokens: class name for base types, arity for functions.
    tokens: list[object] = []
    stack: list[Type] = [ty]
    while stack:
        item = stack.pop()
        match item:
            case FunctionType(params, ret):
                tokens.append(len(params))
                stack.append(ret)
                stack.extend(p.type for p in reversed(params))
            case _:
                tokens.append(type(item).__name__)
    return tuple(tokens)


def type_equal(a: Type, b: Type) -> bool:
    """Structural type equality, ignoring parameter names.

    Terminates because types are finite trees.
    """
    pending: list[tuple[Type, Type]] = [(a, b)]
    while pending:
        match pending.pop():
            case (BooleanType(), BooleanType()) | (NumberType(), NumberType()):
                continue
            case FunctionType(a_params, a_ret), FunctionType(b_params, b_ret):
                if len(a_params) != len(b_params):
                    return False
                pending.append((a_ret, b_ret))
                pending.extend((pa.type, pb.type) for pa, pb in zip(reversed(a_params), reversed(b_params)))
            case _:
                return False
    return True


def function_type(params: list[tuple[str, Type]] | tuple[tuple[str, Type], ...], ret: Type) -> FunctionType:
    """Build a function type from ``(name, type)`` pairs."""
    return FunctionType(tuple(Param(name, ty) for name, ty in params), ret)
