# src/lawtest/__init__.py
"""lawtest: property-based testing of algebraic laws.

Instead of hand-picking examples, declare the laws an operation must obey
and let lawtest check them against hundreds of random inputs:

    from lawtest import check_associative, check_identity, int_gen

    def test_addition() -> None:
        add = lambda a, b: a + b
        gen = int_gen(-100, 100)
        check_associative(add, gen)
        check_identity(add, 0, gen)

Modules:
- laws: associativity, commutativity, identity, inverse, closure, idempotence
- structures: Semigroup/Monoid/Group/Homomorphism protocols and verifiers
- concurrency: parallel safety, parallel associativity, immutability
- equivalence: parity between a reference and an optimized implementation
- generators: seedable random generators
- config: LawConfig and YAML presets
- logging: structlog configuration for checker events

Failures raise AssertionError subclasses carrying the counterexample, so
they show up as ordinary test failures under pytest or unittest.
"""

from lawtest.concurrency import (
    WorkerOutcome,
    check_immutable_op,
    check_parallel_associativity,
    check_parallel_safe,
)
from lawtest.config import (
    LawConfig,
    default_config,
    list_presets,
    load_config,
    load_preset,
)
from lawtest.equivalence import check_equivalent
from lawtest.errors import (
    CheckTimeoutError,
    ConcurrencyViolation,
    GeneratorConfigError,
    LawtestError,
    LawViolation,
    StructureViolation,
)
from lawtest.generators import (
    Generator,
    SeededGenerator,
    bool_gen,
    float_gen,
    int_gen,
    seed_of,
    string_gen,
)
from lawtest.laws import (
    BinaryOp,
    Equality,
    LawResult,
    UnaryOp,
    check_associative,
    check_closure,
    check_commutative,
    check_idempotent,
    check_identity,
    check_inverse,
)
from lawtest.logging import configure_logging, get_logger
from lawtest.structures import (
    Group,
    Homomorphism,
    IdempotentOp,
    Monoid,
    Semigroup,
    StructureReport,
    check_group,
    check_homomorphism,
    check_idempotent_op,
    check_monoid,
    check_semigroup,
    expect_group_failure,
)

__version__ = "0.1.0"

__all__ = [
    "BinaryOp",
    "CheckTimeoutError",
    "ConcurrencyViolation",
    "Equality",
    "Generator",
    "GeneratorConfigError",
    "Group",
    "Homomorphism",
    "IdempotentOp",
    "LawConfig",
    "LawResult",
    "LawViolation",
    "LawtestError",
    "Monoid",
    "SeededGenerator",
    "Semigroup",
    "StructureReport",
    "StructureViolation",
    "UnaryOp",
    "WorkerOutcome",
    "__version__",
    "bool_gen",
    "check_associative",
    "check_closure",
    "check_commutative",
    "check_equivalent",
    "check_group",
    "check_homomorphism",
    "check_idempotent",
    "check_idempotent_op",
    "check_identity",
    "check_immutable_op",
    "check_inverse",
    "check_monoid",
    "check_parallel_associativity",
    "check_parallel_safe",
    "check_semigroup",
    "configure_logging",
    "default_config",
    "expect_group_failure",
    "float_gen",
    "get_logger",
    "int_gen",
    "list_presets",
    "load_config",
    "load_preset",
    "seed_of",
    "string_gen",
]
