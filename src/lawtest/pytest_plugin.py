# src/lawtest/pytest_plugin.py
"""pytest integration for lawtest.

Registered through the ``pytest11`` entry point, so installing lawtest
makes these available in every test session:

Options:
    --lawtest-preset=NAME    Base LawConfig on a preset (quick, standard, thorough)
    --lawtest-trials=N       Override test_cases
    --lawtest-timeout=SECS   Override timeout_seconds
    --lawtest-seed=N         Session seed for generators built from ``lawtest_seed``
    --lawtest-log-format=F   Configure lawtest logging as "console" or "json"
    --lawtest-log-level=L    Level for lawtest logging (DEBUG, INFO, WARNING, ERROR)

Fixtures:
    law_config     LawConfig built from the options above
    lawtest_seed   Integer seed; random per session unless --lawtest-seed is given

The session seed is printed in the report header so a failing run can be
replayed with ``--lawtest-seed``.

Usage:
    def test_concat_monoid(law_config: LawConfig, lawtest_seed: int) -> None:
        check_monoid(StringConcat(seed=lawtest_seed), config=law_config)
"""

from __future__ import annotations

import random
from typing import Any

import pytest

from lawtest.config import LawConfig, load_config
from lawtest.logging import LOG_FORMATS, LOG_LEVELS, configure_logging

_SEED_KEY = pytest.StashKey[int]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add lawtest command-line options."""
    group = parser.getgroup("lawtest", "algebraic law checking")
    group.addoption("--lawtest-preset", default=None, help="LawConfig preset name")
    group.addoption("--lawtest-trials", type=int, default=None, help="Random trials per law check")
    group.addoption("--lawtest-timeout", type=float, default=None, help="Timeout per law check in seconds")
    group.addoption("--lawtest-seed", type=int, default=None, help="Seed for lawtest_seed fixture")
    group.addoption("--lawtest-log-format", choices=LOG_FORMATS, default=None, help="Log output format")
    group.addoption(
        "--lawtest-log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level for checker events",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Fix the session seed and, if asked, configure logging before collection."""
    seed = config.getoption("--lawtest-seed")
    config.stash[_SEED_KEY] = seed if seed is not None else random.SystemRandom().randrange(2**32)

    log_format = config.getoption("--lawtest-log-format")
    log_level = config.getoption("--lawtest-log-level")
    if log_format is not None or log_level is not None:
        configure_logging(log_format=log_format or "console", level=log_level or "INFO")


def pytest_report_header(config: pytest.Config) -> str:
    return f"lawtest: seed={config.stash[_SEED_KEY]} (replay with --lawtest-seed={config.stash[_SEED_KEY]})"


@pytest.fixture
def law_config(pytestconfig: pytest.Config) -> LawConfig:
    """LawConfig assembled from --lawtest-* options."""
    overrides: dict[str, Any] = {}
    trials = pytestconfig.getoption("--lawtest-trials")
    if trials is not None:
        overrides["test_cases"] = trials
    timeout = pytestconfig.getoption("--lawtest-timeout")
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    return load_config(preset=pytestconfig.getoption("--lawtest-preset"), overrides=overrides)


@pytest.fixture
def lawtest_seed(pytestconfig: pytest.Config) -> int:
    """Session-wide generator seed."""
    return pytestconfig.stash[_SEED_KEY]
