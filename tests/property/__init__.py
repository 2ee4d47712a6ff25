"""Property-based tests for lawtest.

Properties here must hold for every generated configuration, not just
the handful of examples in tests/unit:

- Built-in generators respect their bounds and replay from a seed
- Modular addition is a group for every modulus
- Violations carry operands that reproduce the failure
"""
