# src/lawtest/equivalence.py
"""Behavioral parity between two implementations of the same function.

Typical use is proving that an optimized rewrite (iterative, accumulator
based, cached) returns exactly what the reference implementation returns:

    def factorial(n: int) -> int:
        return 1 if n <= 1 else n * factorial(n - 1)

    def factorial_acc(n: int, acc: int = 1) -> int:
        return acc if n <= 1 else factorial_acc(n - 1, n * acc)

    check_equivalent(factorial, factorial_acc, int_gen(1, 15))
"""

from __future__ import annotations

import operator
from collections.abc import Callable

from lawtest.config import LawConfig
from lawtest.errors import LawViolation
from lawtest.generators import Generator, seed_of
from lawtest.laws import Equality, LawResult, run_trials


def check_equivalent[T, R](
    f1: Callable[[T], R],
    f2: Callable[[T], R],
    gen: Generator[T],
    *,
    eq: Equality[R] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check f1(x) == f2(x) for random inputs x.

    Args:
        f1: Reference implementation.
        f2: Candidate implementation.
        gen: Generator of inputs.
        eq: Equality on outputs, for result types without a usable ``==``.
        config: Trial count and timeout.

    Raises:
        LawViolation: With the first differing input and both outputs.
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        x = gen()
        result1 = f1(x)
        result2 = f2(x)
        if not equal(result1, result2):
            raise LawViolation(
                "equivalence",
                "f1(x) != f2(x)",
                operands={"input": x},
                results={"f1(input)": result1, "f2(input)": result2},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("equivalence", config, trial)
