# src/lawtest/concurrency.py
"""Concurrency checkers: laws that must keep holding under parallel load.

Workers run on a ThreadPoolExecutor sized to the requested worker count.
Each worker returns an explicit WorkerOutcome rather than letting an
exception escape, so one faulting worker never aborts its siblings. The
harness takes no locks on caller data: any corruption observed here comes
from the operation under test.

These checks are a coarse signal. They make races likely, not certain,
and are no substitute for a dedicated race detector.

Timeout:
    LawConfig.timeout_seconds bounds the wait for all workers. On expiry
    a shared cancel event is set (workers stop between operations), pending
    work is cancelled, and CheckTimeoutError is raised. An operation that
    never returns keeps its thread alive until it does.
"""

from __future__ import annotations

import copy
import operator
import queue
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Literal

from lawtest.config import LawConfig
from lawtest.errors import ConcurrencyViolation, LawViolation
from lawtest.generators import Generator, seed_of
from lawtest.laws import (
    BinaryOp,
    Deadline,
    Equality,
    LawResult,
    check_associative,
    resolve_config,
    run_trials,
)
from lawtest.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WORKERS = 10

# Bounded failure volume for parallel associativity reports
MAX_REPORTED_VIOLATIONS = 3


@dataclass(frozen=True, slots=True)
class WorkerOutcome:
    """What a single worker observed.

    Attributes:
        worker_id: Index of the worker (0-based).
        status: "ok", "fault" (the operation raised) or "timed_out" (cancelled).
        completed: Operations the worker finished.
        mismatches: Results that disagreed with the sequential expectation.
        error: "ExceptionType: message" for faults.
    """

    worker_id: int
    status: Literal["ok", "fault", "timed_out"]
    completed: int = 0
    mismatches: int = 0
    error: str | None = None


@dataclass(frozen=True, slots=True)
class _AssociativityCase:
    a: Any
    b: Any
    c: Any
    left: Any
    right: Any


def _validate_workers(workers: int) -> None:
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")


def _run_workers(
    task: Callable[[int], WorkerOutcome],
    workers: int,
    deadline: Deadline,
    cancel: threading.Event,
) -> list[WorkerOutcome]:
    """Run ``task(worker_id)`` on ``workers`` threads and join them.

    Raises:
        CheckTimeoutError: If not every worker finished before the deadline.
    """
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lawtest-worker")
    try:
        futures = [executor.submit(task, worker_id) for worker_id in range(workers)]
        done, not_done = wait(futures, timeout=deadline.remaining())
        if not_done:
            cancel.set()
            raise deadline.timeout_error(completed=len(done))
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def _describe_fault(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


def check_parallel_safe[T](
    op: BinaryOp[T],
    gen: Generator[T],
    workers: int = DEFAULT_WORKERS,
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> bool:
    """Run ``op`` concurrently over a shared, read-only pool of inputs.

    ``config.test_cases`` values are generated up front. Every worker then
    applies ``op`` to each adjacent pair of the pool. Without ``eq`` only
    faults (exceptions) count; with ``eq`` every worker result is also
    compared against the result computed sequentially before the workers
    start. A fault while computing that baseline also makes the op unsafe.

    Args:
        op: Operation under test.
        gen: Generator for the input pool.
        workers: Number of concurrent workers (>= 1).
        eq: Optional equality used to compare concurrent and sequential results.
        config: Pool size and timeout.

    Returns:
        True if no worker faulted or disagreed with the sequential result.

    Raises:
        ValueError: If workers < 1.
        CheckTimeoutError: If the workers do not finish before the deadline.
    """
    _validate_workers(workers)
    cfg = resolve_config(config)
    deadline = Deadline("parallel safety", cfg.timeout_seconds)

    inputs = tuple(gen() for _ in range(cfg.test_cases))
    expected: tuple[T, ...] | None = None
    if eq is not None:
        try:
            expected = tuple(op(inputs[i], inputs[i + 1]) for i in range(len(inputs) - 1))
        except Exception as e:
            # Baseline runs on the calling thread; worker_id=None marks it
            logger.warning("parallel_fault", worker_id=None, error=_describe_fault(e))
            logger.warning("parallel_unsafe", workers=workers)
            return False

    cancel = threading.Event()

    def worker(worker_id: int) -> WorkerOutcome:
        completed = 0
        mismatches = 0
        try:
            for i in range(len(inputs) - 1):
                if cancel.is_set():
                    return WorkerOutcome(worker_id, "timed_out", completed, mismatches)
                result = op(inputs[i], inputs[i + 1])
                if expected is not None and eq is not None and not eq(result, expected[i]):
                    mismatches += 1
                completed += 1
        except Exception as e:
            return WorkerOutcome(worker_id, "fault", completed, mismatches, _describe_fault(e))
        return WorkerOutcome(worker_id, "ok", completed, mismatches)

    outcomes = _run_workers(worker, workers, deadline, cancel)

    unsafe = False
    for outcome in outcomes:
        if outcome.status == "fault":
            unsafe = True
            logger.warning("parallel_fault", worker_id=outcome.worker_id, error=outcome.error)
        if outcome.mismatches:
            unsafe = True
            logger.warning(
                "parallel_mismatch",
                worker_id=outcome.worker_id,
                mismatches=outcome.mismatches,
                completed=outcome.completed,
            )

    if unsafe:
        logger.warning("parallel_unsafe", workers=workers)
        return False

    logger.info("parallel_safe", workers=workers, pool_size=len(inputs))
    return True


def check_parallel_associativity[T](
    op: BinaryOp[T],
    gen: Generator[T],
    workers: int = DEFAULT_WORKERS,
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check associativity sequentially, then again under concurrent load.

    Trials are split across workers (at least one per worker). Each worker
    draws its own a, b, c, computes both groupings and queues the tuple; a
    single collector drains the queue once every worker has finished.

    Raises:
        LawViolation: If the sequential check fails.
        ConcurrencyViolation: With up to MAX_REPORTED_VIOLATIONS distinct
            counterexamples and any worker faults from the concurrent phase.
        CheckTimeoutError: If the two phases together exceed the deadline.
    """
    _validate_workers(workers)
    cfg = resolve_config(config)
    equal = eq if eq is not None else operator.eq

    # One deadline spans both phases
    deadline = Deadline("parallel associativity", cfg.timeout_seconds)
    check_associative(op, gen, eq=eq, config=cfg)
    deadline.check(completed=0)

    cases_per_worker = max(1, cfg.test_cases // workers)
    results: queue.Queue[_AssociativityCase] = queue.Queue()
    cancel = threading.Event()

    def worker(worker_id: int) -> WorkerOutcome:
        completed = 0
        try:
            for _ in range(cases_per_worker):
                if cancel.is_set():
                    return WorkerOutcome(worker_id, "timed_out", completed)
                a, b, c = gen(), gen(), gen()
                left = op(op(a, b), c)
                right = op(a, op(b, c))
                results.put(_AssociativityCase(a, b, c, left, right))
                completed += 1
        except Exception as e:
            return WorkerOutcome(worker_id, "fault", completed, error=_describe_fault(e))
        return WorkerOutcome(worker_id, "ok", completed)

    outcomes = _run_workers(worker, workers, deadline, cancel)

    violations: list[LawViolation] = []
    seen: set[str] = set()
    index = 0
    while len(violations) < MAX_REPORTED_VIOLATIONS:
        try:
            case = results.get_nowait()
        except queue.Empty:
            break
        if not equal(case.left, case.right):
            key = repr((case.a, case.b, case.c))
            if key not in seen:
                seen.add(key)
                violations.append(
                    LawViolation(
                        "associativity",
                        "(a∘b)∘c != a∘(b∘c) under concurrency",
                        operands={"a": case.a, "b": case.b, "c": case.c},
                        results={"left": case.left, "right": case.right},
                        trial=index,
                        seed=seed_of(gen),
                    )
                )
        index += 1

    faults = [
        f"worker {outcome.worker_id}: {outcome.error}" for outcome in outcomes if outcome.status == "fault"
    ]
    if violations or faults:
        raise ConcurrencyViolation("parallel associativity", violations, faults)

    trials = sum(outcome.completed for outcome in outcomes)
    result = LawResult(law="parallel associativity", trials=trials, elapsed_s=deadline.elapsed())
    logger.info("law_holds", law=result.law, trials=trials, workers=workers)
    return result


def check_immutable_op[T](
    op: BinaryOp[T],
    gen: Generator[T],
    *,
    eq: Equality[T] | None = None,
    config: LawConfig | None = None,
) -> LawResult:
    """Check that ``op(a, b)`` leaves both arguments unchanged.

    Arguments are deep-copied before the call and compared afterwards with
    ``eq``. A mutation that ``eq`` cannot see goes undetected.

    Raises:
        LawViolation: Naming the mutated argument with before/after values.
    """
    equal = eq if eq is not None else operator.eq

    def trial(i: int) -> None:
        a, b = gen(), gen()
        a_before = copy.deepcopy(a)
        b_before = copy.deepcopy(b)

        op(a, b)

        if not equal(a, a_before):
            raise LawViolation(
                "immutability",
                "operation mutated first argument",
                operands={"a": a_before, "b": b_before},
                results={"a after": a},
                trial=i,
                seed=seed_of(gen),
            )
        if not equal(b, b_before):
            raise LawViolation(
                "immutability",
                "operation mutated second argument",
                operands={"a": a_before, "b": b_before},
                results={"b after": b},
                trial=i,
                seed=seed_of(gen),
            )

    return run_trials("immutability", config, trial)
