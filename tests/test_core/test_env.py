"""Tests for persistent type environments."""

import pytest

from tinytc.core.env import FlatTypeEnv, TypeEnv, empty_env
from tinytc.core.types import BOOLEAN, NUMBER, function_type


@pytest.fixture(params=["chain", "copy"])
def empty(request):
    return empty_env(request.param)


class TestEnvContract:
    """Both strategies share one contract."""

    def test_empty_lookup(self, empty):
        assert empty.lookup("x") is None
        assert "x" not in empty
        assert empty.names() == set()

    def test_extend_and_lookup(self, empty):
        env = empty.extend([("x", NUMBER), ("b", BOOLEAN)])
        assert env.lookup("x") == NUMBER
        assert env.lookup("b") == BOOLEAN
        assert "x" in env
        assert env.names() == {"x", "b"}

    def test_extend_does_not_mutate_receiver(self, empty):
        parent = empty.extend([("x", NUMBER)])
        child = parent.extend([("y", BOOLEAN)])
        assert child.lookup("y") == BOOLEAN
        assert parent.lookup("y") is None
        assert empty.lookup("x") is None

    def test_siblings_isolated(self, empty):
        parent = empty.extend([("x", NUMBER)])
        left = parent.extend([("a", NUMBER)])
        right = parent.extend([("b", BOOLEAN)])
        assert left.lookup("b") is None
        assert right.lookup("a") is None
        assert left.lookup("x") == right.lookup("x") == NUMBER

    def test_shadowing(self, empty):
        outer = empty.extend([("x", NUMBER)])
        inner = outer.extend([("x", BOOLEAN)])
        assert inner.lookup("x") == BOOLEAN
        assert outer.lookup("x") == NUMBER

    def test_later_binding_wins_within_one_extend(self, empty):
        env = empty.extend([("x", NUMBER), ("x", BOOLEAN)])
        assert env.lookup("x") == BOOLEAN

    def test_to_dict_innermost_wins(self, empty):
        f = function_type([("n", NUMBER)], NUMBER)
        env = empty.extend([("x", NUMBER), ("f", f)]).extend([("x", BOOLEAN)])
        assert env.to_dict() == {"x": BOOLEAN, "f": f}
        assert sorted(env) == ["f", "x"]

    def test_deep_chain_lookup(self, empty):
        env = empty
        for i in range(2_000):
            env = env.extend([(f"v{i}", NUMBER)])
        assert env.lookup("v0") == NUMBER
        assert env.lookup("v1999") == NUMBER
        assert env.lookup("missing") is None


class TestTypeEnv:
    """Tests specific to the parent-linked chain."""

    def test_empty_extend_returns_self(self):
        env = TypeEnv.of([("x", NUMBER)])
        assert env.extend([]) is env

    def test_depth(self):
        env = TypeEnv.empty()
        assert env.depth == 0
        env = env.extend([("x", NUMBER)]).extend([("y", NUMBER)])
        assert env.depth == 2

    def test_str(self):
        env = TypeEnv.of([("x", NUMBER)])
        assert str(env) == "TypeEnv(x: number)"


class TestFlatTypeEnv:
    def test_of(self):
        env = FlatTypeEnv.of([("x", NUMBER)])
        assert env.lookup("x") == NUMBER
        assert str(env) == "FlatTypeEnv(x: number)"


def test_empty_env_rejects_unknown_strategy():
    with pytest.raises(ValueError, match="Unknown environment strategy"):
        empty_env("persistent")  # type: ignore[arg-type]
