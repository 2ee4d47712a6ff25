# src/lawtest/structures.py
"""Capability protocols and structure verifiers.

Implement one of the protocols below on a plain class and verify every law
of that structure in one call:

    class IntAddMod:
        def __init__(self, modulus: int) -> None:
            self.modulus = modulus
            self._gen = int_gen(0, modulus - 1)

        def op(self, a: int, b: int) -> int:
            return (a + b) % self.modulus

        def identity(self) -> int:
            return 0

        def inverse(self, a: int) -> int:
            return (self.modulus - a) % self.modulus

        def gen(self) -> int:
            return self._gen()

    check_group(IntAddMod(12))

A structure that also exposes an integer ``seed`` attribute (for example
the seed of the generator behind ``gen``) gets it printed in every
violation, ready for replay.

Each verifier is a sequential dispatch to the law checkers. Monoid reuses
the semigroup sub-checks and Group reuses the monoid sub-checks, so a
structure is only ever checked against the laws it declares. All sub-checks
run even after one fails; failures are reported together, each under its
own name, in a StructureViolation.
"""

from __future__ import annotations

import operator
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from lawtest.config import LawConfig
from lawtest.errors import CheckTimeoutError, LawViolation, StructureViolation
from lawtest.generators import Generator, seed_of
from lawtest.laws import (
    Equality,
    LawResult,
    check_associative,
    check_closure,
    check_idempotent,
    check_identity,
    check_inverse,
    run_trials,
)
from lawtest.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Capability Protocols
# =============================================================================


@runtime_checkable
class Semigroup[T](Protocol):
    """Associative binary operation closed over T."""

    def op(self, a: T, b: T) -> T:
        """The semigroup operation a ∘ b."""
        ...

    def gen(self) -> T:
        """Draw a random element."""
        ...


@runtime_checkable
class Monoid[T](Protocol):
    """Semigroup with an identity element."""

    def op(self, a: T, b: T) -> T:
        """The monoid operation a ∘ b."""
        ...

    def identity(self) -> T:
        """The element e with a ∘ e == e ∘ a == a."""
        ...

    def gen(self) -> T:
        """Draw a random element."""
        ...


@runtime_checkable
class Group[T](Protocol):
    """Monoid where every element has an inverse."""

    def op(self, a: T, b: T) -> T:
        """The group operation a ∘ b."""
        ...

    def identity(self) -> T:
        """The element e with a ∘ e == e ∘ a == a."""
        ...

    def inverse(self, a: T) -> T:
        """The element a⁻¹ with a ∘ a⁻¹ == a⁻¹ ∘ a == e."""
        ...

    def gen(self) -> T:
        """Draw a random element."""
        ...


@runtime_checkable
class IdempotentOp[T](Protocol):
    """Unary operation with f(f(x)) == f(x)."""

    def apply(self, x: T) -> T:
        ...

    def gen(self) -> T:
        ...


@runtime_checkable
class Homomorphism[T, U](Protocol):
    """Map between two groups that preserves operation and identity."""

    def map(self, x: T) -> U:
        """Image of x in the target group."""
        ...

    def source_group(self) -> Group[T]:
        ...

    def target_group(self) -> Group[U]:
        ...


# =============================================================================
# Verification
# =============================================================================

type SubCheck = tuple[str, Callable[[], LawResult]]


class _StructureGen[T]:
    """A structure's ``gen`` method tagged with the structure's seed.

    Structures may expose an integer ``seed`` attribute; violations then
    print it for replay like the built-in generators do.
    """

    def __init__(self, draw: Generator[T], seed: int | None) -> None:
        self._draw = draw
        self.seed = seed

    def __call__(self) -> T:
        return self._draw()


def _gen_of[T](structure: Semigroup[T] | IdempotentOp[T]) -> _StructureGen[T]:
    seed = getattr(structure, "seed", None)
    return _StructureGen(structure.gen, seed if isinstance(seed, int) else None)


@dataclass(frozen=True, slots=True)
class StructureReport:
    """Results of a structure verification where every sub-check held.

    Attributes:
        structure: Structure kind ("semigroup", "monoid", ...).
        results: LawResult per sub-check name, in execution order.
    """

    structure: str
    results: dict[str, LawResult]


def _verify(structure: str, subchecks: list[SubCheck]) -> StructureReport:
    results: dict[str, LawResult] = {}
    failures: dict[str, AssertionError] = {}

    for name, run in subchecks:
        try:
            results[name] = run()
        except (LawViolation, CheckTimeoutError) as e:
            failures[name] = e

    if failures:
        raise StructureViolation(structure, failures)

    logger.info("structure_verified", structure=structure, subchecks=list(results))
    return StructureReport(structure=structure, results=results)


def _semigroup_laws[T](s: Semigroup[T], eq: Equality[T] | None, config: LawConfig | None) -> list[SubCheck]:
    return [
        ("Associativity", lambda: check_associative(s.op, _gen_of(s), eq=eq, config=config)),
    ]


def _monoid_laws[T](m: Monoid[T], eq: Equality[T] | None, config: LawConfig | None) -> list[SubCheck]:
    return [
        *_semigroup_laws(m, eq, config),
        ("Identity", lambda: check_identity(m.op, m.identity(), _gen_of(m), eq=eq, config=config)),
    ]


def _group_laws[T](g: Group[T], eq: Equality[T] | None, config: LawConfig | None) -> list[SubCheck]:
    return [
        *_monoid_laws(g, eq, config),
        ("Inverse", lambda: check_inverse(g.op, g.inverse, g.identity(), _gen_of(g), eq=eq, config=config)),
    ]


def _closure[T](s: Semigroup[T], config: LawConfig | None) -> SubCheck:
    return ("Closure", lambda: check_closure(s.op, _gen_of(s), config=config))


def check_semigroup[T](
    s: Semigroup[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> StructureReport:
    """Verify Associativity and Closure.

    Raises:
        StructureViolation: If any sub-check failed.
    """
    return _verify("semigroup", [*_semigroup_laws(s, eq, config), _closure(s, config)])


def check_monoid[T](
    m: Monoid[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> StructureReport:
    """Verify Associativity, Identity and Closure."""
    return _verify("monoid", [*_monoid_laws(m, eq, config), _closure(m, config)])


def check_group[T](
    g: Group[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> StructureReport:
    """Verify Associativity, Identity, Inverse and Closure."""
    return _verify("group", [*_group_laws(g, eq, config), _closure(g, config)])


def check_idempotent_op[T](
    o: IdempotentOp[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> StructureReport:
    """Verify Idempotence of ``o.apply`` over ``o.gen``."""
    return _verify(
        "idempotent op",
        [("Idempotence", lambda: check_idempotent(o.apply, _gen_of(o), eq=eq, config=config))],
    )


def check_homomorphism[T, U](
    h: Homomorphism[T, U],
    *,
    eq: Equality[U] | None = None,
    config: LawConfig | None = None,
) -> StructureReport:
    """Verify that ``h.map`` preserves the operation and the identity.

    PreservesOperation: h(a ∘ b) == h(a) ∘' h(b) for random a, b drawn from
    the source group. PreservesIdentity: h(e) == e'.

    Args:
        h: The homomorphism.
        eq: Equality on target-group values.
        config: Trial count and timeout for PreservesOperation.
    """
    equal = eq if eq is not None else operator.eq
    source = h.source_group()
    target = h.target_group()
    source_gen = _gen_of(source)

    def preserves_operation() -> LawResult:
        def trial(i: int) -> None:
            a, b = source_gen(), source_gen()
            h_ab = h.map(source.op(a, b))
            ha_hb = target.op(h.map(a), h.map(b))
            if not equal(h_ab, ha_hb):
                raise LawViolation(
                    "homomorphism",
                    "h(a∘b) != h(a)∘h(b)",
                    operands={"a": a, "b": b},
                    results={"h(a∘b)": h_ab, "h(a)∘h(b)": ha_hb},
                    trial=i,
                    seed=seed_of(source_gen),
                )

        return run_trials("homomorphism", config, trial)

    def preserves_identity() -> LawResult:
        start = time.monotonic()
        source_identity = source.identity()
        target_identity = target.identity()
        mapped_identity = h.map(source_identity)
        if not equal(mapped_identity, target_identity):
            raise LawViolation(
                "homomorphism identity",
                "h(e_src) != e_tgt",
                operands={"e_src": source_identity, "e_tgt": target_identity},
                results={"h(e_src)": mapped_identity},
                trial=0,
            )
        return LawResult(law="homomorphism identity", trials=1, elapsed_s=time.monotonic() - start)

    return _verify(
        "homomorphism",
        [("PreservesOperation", preserves_operation), ("PreservesIdentity", preserves_identity)],
    )


def expect_group_failure[T](
    g: Group[T],
    expected_failure: str,
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> StructureViolation:
    """Assert that ``g`` is NOT a group.

    Used to prove that a deliberately broken implementation is caught.

    Args:
        g: The candidate group.
        expected_failure: Human description of the expected defect, used in
            the failure message when the group unexpectedly passes.

    Returns:
        The StructureViolation raised by check_group.

    Raises:
        AssertionError: If every group law held.
    """
    try:
        check_group(g, eq=eq, config=config)
    except StructureViolation as e:
        logger.info(
            "expected_failure_detected",
            expected_failure=expected_failure,
            failed_subchecks=list(e.failures),
        )
        return e
    raise AssertionError(f"Expected group verification to fail with '{expected_failure}', but it passed")
