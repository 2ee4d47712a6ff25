# src/lawtest/errors.py
"""Exception taxonomy for lawtest.

Three kinds of failure surface from the harness:

- Configuration errors (GeneratorConfigError) are raised while building a
  generator, before any value is produced.
- Law violations (LawViolation, StructureViolation) carry a counterexample.
  They subclass AssertionError so pytest and unittest report them as
  ordinary test failures.
- Timeouts (CheckTimeoutError) fire when a check runs past its deadline.
"""

from __future__ import annotations

from typing import Any


class LawtestError(Exception):
    """Base class for harness errors that are not law violations."""


class GeneratorConfigError(LawtestError, ValueError):
    """Raised when a built-in generator is constructed with invalid bounds."""


def _format_values(values: dict[str, Any]) -> str:
    return ", ".join(f"{name}={value!r}" for name, value in values.items())


class LawViolation(AssertionError):
    """A counterexample that falsifies a law.

    Attributes:
        law: Name of the violated law (e.g. "associativity").
        description: The equation that failed, e.g. "(a∘b)∘c != a∘(b∘c)".
        operands: Generated inputs, keyed by their name in the equation.
        results: Computed values that were compared.
        trial: Zero-based index of the failing trial.
        seed: Seed of the generator that produced the operands, if known.
    """

    def __init__(
        self,
        law: str,
        description: str,
        *,
        operands: dict[str, Any],
        results: dict[str, Any],
        trial: int,
        seed: int | None = None,
    ) -> None:
        self.law = law
        self.description = description
        self.operands = operands
        self.results = results
        self.trial = trial
        self.seed = seed
        super().__init__(self._render())

    def _render(self) -> str:
        lines = [
            f"{self.law} failed at trial {self.trial}: {self.description}",
            f"  {_format_values(self.operands)}",
        ]
        if self.results:
            lines.append(f"  {_format_values(self.results)}")
        if self.seed is not None:
            lines.append(f"  replay with generator seed={self.seed}")
        return "\n".join(lines)


class StructureViolation(AssertionError):
    """One or more sub-checks of a structure verification failed.

    Attributes:
        structure: Structure kind ("semigroup", "monoid", "group", ...).
        failures: Failed sub-checks by name, in the order they ran.
    """

    def __init__(self, structure: str, failures: dict[str, AssertionError]) -> None:
        self.structure = structure
        self.failures = failures
        details = "\n".join(f"[{name}] {error}" for name, error in failures.items())
        super().__init__(f"{structure} verification failed ({', '.join(failures)}):\n{details}")


class ConcurrencyViolation(AssertionError):
    """A concurrency checker observed counterexamples or worker faults.

    Attributes:
        law: Name of the concurrency check.
        violations: Counterexamples collected from workers (bounded).
        faults: Descriptions of exceptions raised inside workers.
    """

    def __init__(self, law: str, violations: list[LawViolation], faults: list[str]) -> None:
        self.law = law
        self.violations = violations
        self.faults = faults
        lines = [f"{law} failed under concurrency: {len(violations)} violation(s), {len(faults)} worker fault(s)"]
        lines.extend(str(v) for v in violations)
        lines.extend(f"  fault: {fault}" for fault in faults)
        super().__init__("\n".join(lines))


class CheckTimeoutError(AssertionError):
    """A check did not finish within LawConfig.timeout_seconds.

    Attributes:
        law: Name of the check that timed out.
        timeout_seconds: The configured deadline.
        completed_trials: Trials (or workers) that finished before the deadline.
    """

    def __init__(self, law: str, timeout_seconds: float, completed_trials: int) -> None:
        self.law = law
        self.timeout_seconds = timeout_seconds
        self.completed_trials = completed_trials
        super().__init__(f"{law} exceeded timeout of {timeout_seconds}s after {completed_trials} completed trial(s)")
