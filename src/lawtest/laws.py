# src/lawtest/laws.py
"""Law checkers: randomized verification of algebraic laws.

Each checker draws fresh operands from a generator for every trial and
stops at the first counterexample, raising LawViolation with the literal
operand and result values. No shrinking is attempted.

Every checker accepts:
    eq:     equality predicate for values without a usable ``==``
            (default: operator.eq)
    config: LawConfig with trial count and timeout (default: 100 trials, 5s)

Usage:
    from lawtest import check_associative, int_gen

    def test_addition_is_associative() -> None:
        check_associative(lambda a, b: a + b, int_gen(-1000, 1000))
"""

from __future__ import annotations

import operator
import time
from collections.abc import Callable
from dataclasses import dataclass

from lawtest.config import LawConfig, default_config
from lawtest.errors import CheckTimeoutError, LawViolation
from lawtest.generators import Generator, seed_of
from lawtest.logging import get_logger

logger = get_logger(__name__)

type BinaryOp[T] = Callable[[T, T], T]
type UnaryOp[T] = Callable[[T], T]
type Equality[T] = Callable[[T, T], bool]


@dataclass(frozen=True, slots=True)
class LawResult:
    """Outcome of a passing check.

    Attributes:
        law: Name of the verified law.
        trials: Number of trials that held.
        elapsed_s: Wall-clock duration of the check in seconds.
    """

    law: str
    trials: int
    elapsed_s: float


class Deadline:
    """Cooperative deadline for a single check.

    Checked between trials; a trial already running is never interrupted.
    """

    def __init__(
        self,
        law: str,
        timeout_seconds: float,
        *,
        time_func: Callable[[], float] | None = None,
    ) -> None:
        self._law = law
        self._timeout_seconds = timeout_seconds
        self._time_func = time_func if time_func is not None else time.monotonic
        self._start = self._time_func()

    def elapsed(self) -> float:
        """Seconds since the deadline was created."""
        return self._time_func() - self._start

    def remaining(self) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, self._timeout_seconds - self.elapsed())

    def expired(self) -> bool:
        return self.elapsed() >= self._timeout_seconds

    def check(self, completed: int) -> None:
        """Raise CheckTimeoutError if the deadline has passed.

        Args:
            completed: Trials finished so far, reported in the error.
        """
        if self.expired():
            raise self.timeout_error(completed)

    def timeout_error(self, completed: int) -> CheckTimeoutError:
        logger.warning(
            "check_timeout",
            law=self._law,
            timeout_seconds=self._timeout_seconds,
            completed_trials=completed,
        )
        return CheckTimeoutError(self._law, self._timeout_seconds, completed)


def resolve_config(config: LawConfig | None) -> LawConfig:
    return config if config is not None else default_config()


def run_trials(law: str, config: LawConfig | None, trial: Callable[[int], None]) -> LawResult:
    """Run ``trial(i)`` for each trial index until done, violated, or timed out.

    The trial callable raises LawViolation to signal a counterexample.
    """
    cfg = resolve_config(config)
    deadline = Deadline(law, cfg.timeout_seconds)

    for i in range(cfg.test_cases):
        deadline.check(completed=i)
        trial(i)

    result = LawResult(law=law, trials=cfg.test_cases, elapsed_s=deadline.elapsed())
    logger.info("law_holds", law=law, trials=result.trials, elapsed_s=round(result.elapsed_s, 6))
    return result


def check_associative[T](
    op: BinaryOp[T],
    gen: Generator[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check (a ∘ b) ∘ c == a ∘ (b ∘ c) for random a, b, c.

    Example:
        check_associative(lambda a, b: a + b, int_gen(-100, 100))

    Raises:
        LawViolation: On the first (a, b, c) where the two groupings differ.
        CheckTimeoutError: If the check exceeds config.timeout_seconds.
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        a, b, c = gen(), gen(), gen()
        left = op(op(a, b), c)
        right = op(a, op(b, c))
        if not equal(left, right):
            raise LawViolation(
                "associativity",
                "(a∘b)∘c != a∘(b∘c)",
                operands={"a": a, "b": b, "c": c},
                results={"left": left, "right": right},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("associativity", config, trial)


def check_commutative[T](
    op: BinaryOp[T],
    gen: Generator[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check a ∘ b == b ∘ a for random a, b.

    Subtraction and matrix multiplication are the usual non-examples.
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        a, b = gen(), gen()
        left = op(a, b)
        right = op(b, a)
        if not equal(left, right):
            raise LawViolation(
                "commutativity",
                "a∘b != b∘a",
                operands={"a": a, "b": b},
                results={"a∘b": left, "b∘a": right},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("commutativity", config, trial)


def check_identity[T](
    op: BinaryOp[T],
    identity: T,
    gen: Generator[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check a ∘ e == a and e ∘ a == a for random a and candidate identity e.

    Common identities: 0 for addition, 1 for multiplication, "" for string
    concatenation, False for ``or``.
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        a = gen()

        left_result = op(a, identity)
        if not equal(left_result, a):
            raise LawViolation(
                "identity",
                "a∘e != a (left identity)",
                operands={"a": a, "e": identity},
                results={"a∘e": left_result},
                trial=i,
                seed=seed_of(gen),
            )

        right_result = op(identity, a)
        if not equal(right_result, a):
            raise LawViolation(
                "identity",
                "e∘a != a (right identity)",
                operands={"e": identity, "a": a},
                results={"e∘a": right_result},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("identity", config, trial)


def check_inverse[T](
    op: BinaryOp[T],
    inverse: UnaryOp[T],
    identity: T,
    gen: Generator[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check a ∘ a⁻¹ == e and a⁻¹ ∘ a == e for random a.

    Example:
        check_inverse(lambda a, b: a + b, lambda a: -a, 0, int_gen(-100, 100))
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        a = gen()
        a_inv = inverse(a)

        left_result = op(a, a_inv)
        if not equal(left_result, identity):
            raise LawViolation(
                "inverse",
                "a∘a⁻¹ != e (left inverse)",
                operands={"a": a, "a⁻¹": a_inv, "e": identity},
                results={"a∘a⁻¹": left_result},
                trial=i,
                seed=seed_of(gen),
            )

        right_result = op(a_inv, a)
        if not equal(right_result, identity):
            raise LawViolation(
                "inverse",
                "a⁻¹∘a != e (right inverse)",
                operands={"a⁻¹": a_inv, "a": a, "e": identity},
                results={"a⁻¹∘a": right_result},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("inverse", config, trial)


def check_closure[T](
    op: BinaryOp[T],
    gen: Generator[T],
    *,
    config: LawConfig | None = None,
) -> LawResult:
    """Check that a ∘ b has exactly the runtime type of a.

    Subclasses count as a different type: ``int`` operands producing a
    ``bool`` violate closure.
    """

    def trial(i: int) -> None:
        a, b = gen(), gen()
        result = op(a, b)
        if type(result) is not type(a):
            raise LawViolation(
                "closure",
                "operation changed type",
                operands={"a": a, "b": b},
                results={
                    "result": result,
                    "input type": type(a).__name__,
                    "result type": type(result).__name__,
                },
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("closure", config, trial)


def check_idempotent[T](
    op: UnaryOp[T],
    gen: Generator[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check f(f(x)) == f(x) for random x.

    Typical idempotent operations: abs, str.strip, deduplication, cache warming.
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        x = gen()
        fx = op(x)
        ffx = op(fx)
        if not equal(fx, ffx):
            raise LawViolation(
                "idempotence",
                "f(f(x)) != f(x)",
                operands={"x": x},
                results={"f(x)": fx, "f(f(x))": ffx},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("idempotence", config, trial)
