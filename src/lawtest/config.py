# src/lawtest/config.py
"""Checker configuration: trial count, timeout and preset loading.

LawConfig is the only configuration a checker reads. It is frozen, so a
config built once can be shared between checks without one check changing
another's parameters.

Configuration can also be layered from YAML (lowest to highest precedence):

1. LawConfig defaults (100 trials, 5 second timeout)
2. A named preset from ``presets/`` (quick, standard, thorough)
3. A user YAML file
4. Explicit overrides (e.g. from pytest command-line options)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_TEST_CASES = 100
DEFAULT_TIMEOUT_SECONDS = 5.0

PRESETS_DIR = Path(__file__).parent / "presets"


class LawConfig(BaseModel):
    """Parameters for a single checker invocation.

    Attributes:
        test_cases: Number of independent random trials (must be > 0)
        timeout_seconds: Deadline for the whole check in seconds (must be > 0)
        preset_name: Preset the config was loaded from, if any
    """

    model_config = {"frozen": True, "extra": "forbid"}

    test_cases: int = Field(
        default=DEFAULT_TEST_CASES,
        gt=0,
        description="Number of random trials per check",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Maximum wall-clock time per check in seconds",
    )
    preset_name: str | None = Field(
        default=None,
        description="Preset this configuration was loaded from",
    )


def default_config() -> LawConfig:
    """Return a LawConfig with the default 100 trials and 5 second timeout."""
    return LawConfig()


def _read_mapping(path: Path, source: str) -> dict[str, Any]:
    """Parse a YAML file that must hold a mapping; an empty file is ``{}``.

    Raises:
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping.
    """
    with path.open() as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{source} must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def list_presets(presets_dir: Path = PRESETS_DIR) -> list[str]:
    """Names of the ``*.yaml`` presets in ``presets_dir``, sorted."""
    return sorted(p.stem for p in presets_dir.glob("*.yaml")) if presets_dir.is_dir() else []


def load_preset(preset_name: str, presets_dir: Path = PRESETS_DIR) -> dict[str, Any]:
    """Raw LawConfig fields stored in preset ``preset_name``.

    Raises:
        FileNotFoundError: If no such preset exists (lists the available ones).
        ValueError: If the preset is not a YAML mapping.
    """
    path = presets_dir / f"{preset_name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Preset '{preset_name}' not found. Available presets: {list_presets(presets_dir)}"
        )
    return _read_mapping(path, f"Preset '{preset_name}'")


def load_config(
    *,
    preset: str | None = None,
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
    presets_dir: Path = PRESETS_DIR,
) -> LawConfig:
    """Build a LawConfig from a preset, a YAML file and explicit overrides.

    Later sources win field by field: overrides, then config_file, then
    preset, then the LawConfig defaults.

    Raises:
        FileNotFoundError: If preset or config_file not found.
        ValueError: If a YAML source is not a mapping.
        pydantic.ValidationError: If the combined fields fail validation.
    """
    preset_fields = load_preset(preset, presets_dir) if preset is not None else {}

    file_fields: dict[str, Any] = {}
    if config_file is not None:
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        file_fields = _read_mapping(config_file, f"Config file {config_file}")

    return LawConfig(**{**preset_fields, **file_fields, **(overrides or {}), "preset_name": preset})
