"""Type checker for the core language.

``TypeRules`` gives the typing rule for each term variant. Folding a term
with it (via ``para``) yields a suspended computation that reads the type
environment; ``TypeChecker`` runs that computation on the stack-safe driver.

Each rule enters its children through a yield boundary, left to right, and
checks all of them before applying its own rule, so the first diagnostic in
evaluation order is the one reported.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from tinytc.config import CheckerSettings, Policy
from tinytc.core.accumulate import AccumulatingRules
from tinytc.core.ast import Term
from tinytc.core.computation import Computation, asks, descend, fail, local, pure, sequence
from tinytc.core.driver import RunStats, run, run_async
from tinytc.core.env import Env, EnvStrategy, FlatTypeEnv, TypeEnv, empty_env
from tinytc.core.errors import Diagnostic, ErrorCode, TypeCheckError
from tinytc.core.fold import Child, para
from tinytc.core.result import Err, Ok, Result
from tinytc.core.types import BOOLEAN, NUMBER, BooleanType, FunctionType, NumberType, Param, Type, type_equal
from tinytc.utils.location import Span

Check = Computation[Type]


def _error(code: ErrorCode, span: Span, detail: str | None = None) -> Check:
    return fail(Diagnostic.at(code, span, detail))


class TypeRules:
    """Fail-fast typing rules as a location-aware algebra over computations."""

    def true_lit(self, span: Span) -> Check:
        return pure(BOOLEAN)

    def false_lit(self, span: Span) -> Check:
        return pure(BOOLEAN)

    def number(self, n: int, span: Span) -> Check:
        return pure(NUMBER)

    def add(self, left: Child[Check], right: Child[Check], span: Span) -> Check:
        def rule(lt: Type, rt: Type) -> Check:
            if not isinstance(lt, NumberType):
                return _error(ErrorCode.RUNTIME_ADD_TYPE, left.span)
            if not isinstance(rt, NumberType):
                return _error(ErrorCode.RUNTIME_ADD_TYPE, right.span)
            return pure(NUMBER)

        return descend(left.out).bind(lambda lt: descend(right.out).bind(lambda rt: rule(lt, rt)))

    def if_(self, cond: Child[Check], then: Child[Check], else_: Child[Check], span: Span) -> Check:
        def rule(ct: Type, tt: Type, et: Type) -> Check:
            if not isinstance(ct, BooleanType):
                return _error(ErrorCode.IF_COND_NOT_BOOLEAN, cond.span)
            if not type_equal(tt, et):
                return _error(ErrorCode.IF_BRANCHES_MISMATCH, span)
            return pure(tt)

        return descend(cond.out).bind(
            lambda ct: descend(then.out).bind(
                lambda tt: descend(else_.out).bind(lambda et: rule(ct, tt, et))
            )
        )

    def var(self, name: str, span: Span) -> Check:
        def look(ty: Type | None) -> Check:
            if ty is None:
                return _error(ErrorCode.UNKNOWN_VARIABLE, span, name)
            return pure(ty)

        return asks(lambda env: env.lookup(name)).bind(look)

    def func(self, params: tuple[Param, ...], body: Child[Check], span: Span) -> Check:
        bindings = [(p.name, p.type) for p in params]
        checked = local(lambda env: env.extend(bindings), descend(body.out))
        return checked.map(lambda ret: FunctionType(params, ret))

    def call(self, callee: Child[Check], args: Sequence[Child[Check]], span: Span) -> Check:
        def rule(fty: Type, arg_types: list[Type]) -> Check:
            if not isinstance(fty, FunctionType):
                return _error(ErrorCode.FUNC_EXPECTED, callee.span)
            if len(fty.params) != len(arg_types):
                return _error(ErrorCode.ARG_COUNT_MISMATCH, span)
            for param, arg, arg_type in zip(fty.params, args, arg_types):
                if not type_equal(param.type, arg_type):
                    return _error(ErrorCode.ARG_TYPE_MISMATCH, arg.span)
            return pure(fty.ret)

        arg_checks = sequence([descend(arg.out) for arg in args])
        return descend(callee.out).bind(lambda fty: arg_checks.bind(lambda arg_types: rule(fty, arg_types)))

    def seq(self, first: Child[Check], rest: Child[Check], span: Span) -> Check:
        return descend(first.out).then(descend(rest.out))

    def const(self, name: str, init: Child[Check], rest: Child[Check], span: Span) -> Check:
        def bind_rest(init_type: Type) -> Check:
            return local(lambda env: env.extend([(name, init_type)]), descend(rest.out))

        return descend(init.out).bind(bind_rest)


EnvLike = Env | Mapping[str, Type]


class TypeChecker:
    """Type checker with a fixed diagnostic policy.

    Args:
        policy: ``"fail-fast"`` reports the first error in evaluation order
            for the full language. ``"accumulate"`` collects independent
            errors, and handles only literals, ``+`` and conditionals.
        yield_interval: Yield to the host every n-th descent into a child.
        env_strategy: Representation of fresh environments.
    """

    def __init__(
        self,
        policy: Policy = "fail-fast",
        yield_interval: int = 1,
        env_strategy: EnvStrategy = "chain",
    ):
        if policy not in ("fail-fast", "accumulate"):
            raise ValueError(f"Unknown policy: {policy}")
        if yield_interval < 1:
            raise ValueError("yield_interval must be at least 1")
        self.policy = policy
        self.yield_interval = yield_interval
        self.env_strategy = env_strategy
        self.rules = TypeRules()
        self.accumulating_rules = AccumulatingRules()
        self.last_stats: RunStats | None = None

    @classmethod
    def from_settings(cls, settings: CheckerSettings | None = None) -> TypeChecker:
        settings = settings or CheckerSettings()
        return cls(
            policy=settings.policy,
            yield_interval=settings.yield_interval,
            env_strategy=settings.env_strategy,
        )

    def empty_env(self) -> Env:
        return empty_env(self.env_strategy)

    def _env(self, env: EnvLike | None) -> Env:
        if env is None:
            return self.empty_env()
        if isinstance(env, (TypeEnv, FlatTypeEnv)):
            return env
        return self.empty_env().extend(env.items())

    def build(self, term: Term) -> Check:
        """Fold ``term`` into its (not yet executed) checking computation."""
        return para(self.rules, term)

    def _record(self, stats: RunStats) -> None:
        self.last_stats = stats

    def result(self, term: Term, env: EnvLike | None = None) -> Result:
        """Check ``term`` and return ``Ok(type)`` or ``Err(diagnostics)``."""
        logger.debug("typecheck.start policy={} term={}", self.policy, type(term).__name__)
        self.last_stats = None
        if self.policy == "accumulate":
            outcome = para(self.accumulating_rules, term)
        else:
            outcome = run(self.build(term), self._env(env), yield_interval=self.yield_interval, on_yield=self._record)
        self._log(outcome)
        return outcome

    async def result_async(self, term: Term, env: EnvLike | None = None) -> Result:
        """Like ``result``, yielding to the running event loop while checking."""
        logger.debug("typecheck.start policy={} term={} async=True", self.policy, type(term).__name__)
        self.last_stats = None
        if self.policy == "accumulate":
            outcome = para(self.accumulating_rules, term)
        else:
            outcome = await run_async(
                self.build(term), self._env(env), yield_interval=self.yield_interval, on_yield=self._record
            )
        self._log(outcome)
        return outcome

    def check(self, term: Term, env: EnvLike | None = None) -> Type:
        """Return the type of ``term``.

        Raises:
            TypeCheckError: If the term is ill-typed.
        """
        return self._unwrap(self.result(term, env))

    async def check_async(self, term: Term, env: EnvLike | None = None) -> Type:
        return self._unwrap(await self.result_async(term, env))

    @staticmethod
    def _unwrap(outcome: Result) -> Type:
        match outcome:
            case Ok(ty):
                return ty
            case Err(errors):
                raise TypeCheckError(errors)

    @staticmethod
    def _log(outcome: Any) -> None:
        match outcome:
            case Ok(ty):
                logger.debug("typecheck.done type={}", type(ty).__name__)
            case Err(errors):
                for diagnostic in errors:
                    logger.debug("typecheck.failed code={} at={}", diagnostic.code.value, diagnostic.span)


def typecheck(term: Term, env: EnvLike | None = None, *, settings: CheckerSettings | None = None) -> Type:
    """Type check ``term`` under ``env`` (empty by default).

    Raises:
        TypeCheckError: Carrying the diagnostic(s) for an ill-typed term.
    """
    return TypeChecker.from_settings(settings).check(term, env)
