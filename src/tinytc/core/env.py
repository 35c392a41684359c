"""Type environments.

Two persistent strategies share one contract: ``extend`` returns a new
environment and never changes the receiver, so a parent handed to one
subtree is unaffected by extensions made while checking a sibling.

- ``TypeEnv`` links each scope to its parent. Extension costs the size of
  the new bindings; lookup walks the chain.
- ``FlatTypeEnv`` copies the parent into a fresh read-only mapping.
  Extension costs the size of the whole environment; lookup is one probe.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Literal

from tinytc.core.types import Type

EnvStrategy = Literal["chain", "copy"]

Bindings = Iterable[tuple[str, Type]]


class TypeEnv:
    """Parent-linked scope chain."""

    __slots__ = ("_scope", "_parent", "_depth")

    def __init__(self, scope: dict[str, Type] | None = None, parent: TypeEnv | None = None):
        self._scope = MappingProxyType(dict(scope or {}))
        self._parent = parent
        self._depth = 0 if parent is None else parent._depth + 1

    @classmethod
    def empty(cls) -> TypeEnv:
        """Create an empty environment."""
        return cls()

    @classmethod
    def of(cls, bindings: Bindings) -> TypeEnv:
        """Create a top-level environment from ``(name, type)`` pairs."""
        return cls.empty().extend(bindings)

    def extend(self, bindings: Bindings) -> TypeEnv:
        """Return a child scope; later bindings shadow earlier ones."""
        scope = dict(bindings)
        if not scope:
            return self
        return TypeEnv(scope, self)

    def lookup(self, name: str) -> Type | None:
        env: TypeEnv | None = self
        while env is not None:
            ty = env._scope.get(name)
            if ty is not None:
                return ty
            env = env._parent
        return None

    @property
    def depth(self) -> int:
        """Number of scopes above the root."""
        return self._depth

    def names(self) -> set[str]:
        return set(self.to_dict())

    def to_dict(self) -> dict[str, Type]:
        """Flatten the visible bindings, innermost winning."""
        chain: list[TypeEnv] = []
        env: TypeEnv | None = self
        while env is not None:
            chain.append(env)
            env = env._parent
        result: dict[str, Type] = {}
        for scope in reversed(chain):
            result.update(scope._scope)
        return result

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __str__(self) -> str:
        items = ", ".join(f"{k}: {v}" for k, v in self.to_dict().items())
        return f"TypeEnv({items})"


class FlatTypeEnv:
    """Copy-on-extend environment backed by a read-only mapping."""

    __slots__ = ("_bindings",)

    def __init__(self, bindings: dict[str, Type] | None = None):
        self._bindings = MappingProxyType(dict(bindings or {}))

    @classmethod
    def empty(cls) -> FlatTypeEnv:
        return cls()

    @classmethod
    def of(cls, bindings: Bindings) -> FlatTypeEnv:
        return cls.empty().extend(bindings)

    def extend(self, bindings: Bindings) -> FlatTypeEnv:
        new = dict(self._bindings)
        new.update(bindings)
        return FlatTypeEnv(new)

    def lookup(self, name: str) -> Type | None:
        return self._bindings.get(name)

    def names(self) -> set[str]:
        return set(self._bindings)

    def to_dict(self) -> dict[str, Type]:
        return dict(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __str__(self) -> str:
        items = ", ".join(f"{k}: {v}" for k, v in self._bindings.items())
        return f"FlatTypeEnv({items})"


Env = TypeEnv | FlatTypeEnv


def empty_env(strategy: EnvStrategy = "chain") -> Env:
    """Empty environment for the given strategy."""
    match strategy:
        case "chain":
            return TypeEnv.empty()
        case "copy":
            return FlatTypeEnv.empty()
        case _:
            raise ValueError(f"Unknown environment strategy: {strategy}")
