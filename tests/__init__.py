"""lawtest test suite."""
