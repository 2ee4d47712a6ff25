"""Unit tests for lawtest modules."""
