"""Tests for diagnostics and error types."""

import pytest

from tinytc.core.ast import Add, NumberLit, TrueLit
from tinytc.core.checker import typecheck
from tinytc.core.errors import MESSAGES, Diagnostic, ErrorCode, InternalError, TypeCheckError, report
from tinytc.core.result import Err, Ok, err, errors_of, map2
from tinytc.utils.location import Location, Span


@pytest.fixture
def span() -> Span:
    return Span(Location(1, 0, "test.ts"), Location(1, 4, "test.ts"))


class TestDiagnostic:
    def test_render(self, span):
        diagnostic = Diagnostic.at(ErrorCode.RUNTIME_ADD_TYPE, span)
        assert str(diagnostic) == "test.ts:1:1-1:5 number expected"

    def test_detail(self, span):
        diagnostic = Diagnostic.at(ErrorCode.UNKNOWN_VARIABLE, span, "y")
        assert diagnostic.message == "unknown variable: y"

    def test_default_source(self):
        span = Span(Location(2, 3), Location(4, 0))
        assert str(Diagnostic.at(ErrorCode.FUNC_EXPECTED, span)) == "<stdin>:2:4-4:1 function expected"

    def test_every_code_has_a_message(self):
        assert set(MESSAGES) == set(ErrorCode)


class TestTypeCheckError:
    def test_single(self, span):
        error = TypeCheckError(Diagnostic.at(ErrorCode.IF_COND_NOT_BOOLEAN, span))
        assert error.code is ErrorCode.IF_COND_NOT_BOOLEAN
        assert error.span == span
        assert str(error) == "test.ts:1:1-1:5 boolean expected"

    def test_many(self, span):
        first = Diagnostic.at(ErrorCode.RUNTIME_ADD_TYPE, span)
        second = Diagnostic.at(ErrorCode.IF_BRANCHES_MISMATCH, span)
        error = TypeCheckError([first, second])
        assert error.diagnostic == first
        assert error.diagnostics == (first, second)
        assert len(str(error).splitlines()) == 2

    def test_empty_is_internal_error(self):
        with pytest.raises(InternalError):
            TypeCheckError(())


class TestReport:
    def test_raises_diagnostic(self, span):
        with pytest.raises(TypeCheckError) as exc_info:
            report(ErrorCode.ARG_COUNT_MISMATCH, span)
        assert str(exc_info.value) == "test.ts:1:1-1:5 number of arguments mismatch"

    def test_matches_checker_diagnostic(self, span):
        with pytest.raises(TypeCheckError) as checked:
            typecheck(Add(TrueLit(span), NumberLit(1)))
        with pytest.raises(TypeCheckError) as reported:
            report(ErrorCode.RUNTIME_ADD_TYPE, span)
        assert reported.value.diagnostics == checked.value.diagnostics

    def test_unreachable_is_internal(self, span):
        with pytest.raises(InternalError) as exc_info:
            report(ErrorCode.UNREACHABLE, span, "impossible branch")
        assert exc_info.value.code is ErrorCode.UNREACHABLE
        assert not isinstance(exc_info.value, TypeCheckError)
        assert "unreachable" in str(exc_info.value)


class TestResult:
    def test_err_requires_diagnostics(self):
        with pytest.raises(InternalError):
            Err(())

    def test_unwrap(self, span):
        assert Ok(1).unwrap() == 1
        with pytest.raises(TypeCheckError):
            err(Diagnostic.at(ErrorCode.RUNTIME_ADD_TYPE, span)).unwrap()

    def test_errors_of(self, span):
        d = Diagnostic.at(ErrorCode.RUNTIME_ADD_TYPE, span)
        assert errors_of(Ok(1)) == ()
        assert errors_of(err(d)) == (d,)

    def test_map2(self, span):
        a = Diagnostic.at(ErrorCode.RUNTIME_ADD_TYPE, span)
        b = Diagnostic.at(ErrorCode.IF_COND_NOT_BOOLEAN, span)
        assert map2(Ok(1), Ok(2), lambda x, y: x + y) == Ok(3)
        assert map2(err(a), Ok(2), lambda x, y: x + y) == err(a)
        assert map2(Ok(1), err(b), lambda x, y: x + y) == err(b)
        assert map2(err(a), err(b), lambda x, y: x + y) == err(a, b)
