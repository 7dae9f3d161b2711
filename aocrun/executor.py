"""Part executor: parse then solve each declared part, one at a time."""
from __future__ import annotations

import logging
import operator
import threading
import time
from typing import Any, Callable, Iterable, List

import psutil

from .errors import ConfigurationError, HarnessError, InputFormatError, PartTimeoutError, SolverError
from .models import DEFAULT_SOLUTION, ExecutionRecord, Outcome, PartState, Role
from .registry import PuzzleBindings, register

logger = logging.getLogger(__name__)


def _rss_mb() -> float | None:
    try:
        return psutil.Process().memory_info().rss / (1024 * 1024)
    except psutil.Error:
        return None


def _call(
    func: Callable[..., Any],
    args: tuple,
    timeout: float | None,
    phase: str,
    abandoned: List[threading.Thread] | None = None,
) -> Any:
    """Call `func`, on a daemon thread when a timeout is set.

    A thread that overruns cannot be stopped; it is appended to `abandoned`
    and keeps running, so the caller must not start more work on the same
    puzzle instance while it is alive.
    """
    if not timeout:
        return func(*args)

    box: dict[str, Any] = {}

    def _target():
        try:
            box["value"] = func(*args)
        except BaseException as exc:  # re-raised on the calling thread
            box["error"] = exc

    worker = threading.Thread(target=_target, name=f"aocrun-{phase}", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        if abandoned is not None:
            abandoned.append(worker)
        raise PartTimeoutError(phase, timeout)
    if "error" in box:
        raise box["error"]
    return box.get("value")


def _as_harness_error(exc: Exception, fallback: type[HarnessError]) -> HarnessError:
    if isinstance(exc, HarnessError):
        return exc
    wrapped = fallback(f"{type(exc).__name__}: {exc}")
    wrapped.__cause__ = exc
    return wrapped


def to_result(value: Any) -> int:
    if value is None:
        raise SolverError("solver returned no result")
    if isinstance(value, bool):
        raise SolverError("solver returned a boolean, expected an integer")
    if isinstance(value, int):
        return int(value)
    try:
        return operator.index(value)
    except TypeError:
        raise SolverError(f"solver returned non-integral {type(value).__name__}: {value!r}") from None


def run_part(
    puzzle: Any,
    bindings: PuzzleBindings,
    part: int,
    solution: str = DEFAULT_SOLUTION,
    timeout: float | None = None,
    abandoned: List[threading.Thread] | None = None,
) -> ExecutionRecord:
    solver_binding = bindings.lookup(part, Role.SOLVER, solution)
    parse = bindings.resolve(puzzle, part, Role.PARSER, solution)
    solve = solver_binding.bind(puzzle)

    state = PartState.PENDING
    parse_time = solve_time = 0.0

    def _failed(exc: Exception, fallback: type[HarnessError]) -> ExecutionRecord:
        if isinstance(exc, ConfigurationError):
            raise exc
        error = _as_harness_error(exc, fallback)
        logger.warning("%r part %d failed while %s: %s", puzzle, part, state.value, error)
        return ExecutionRecord(
            part=part,
            result=None,
            parse_time=parse_time,
            solve_time=solve_time,
            outcome=Outcome.failed(error),
            state=PartState.FAILED,
            solution=solution,
            max_rss_mb=_rss_mb(),
        )

    state = PartState.PARSING
    logger.debug("%r part %d %s", puzzle, part, state.value)
    start = time.perf_counter()
    try:
        parsed = _call(parse, (), timeout, "parser", abandoned)
    except Exception as exc:
        parse_time = time.perf_counter() - start
        return _failed(exc, InputFormatError)
    parse_time = time.perf_counter() - start

    state = PartState.SOLVING
    logger.debug("%r part %d %s (parsed in %.6fs)", puzzle, part, state.value, parse_time)
    args = (parsed,) if solver_binding.takes_state else ()
    start = time.perf_counter()
    try:
        result = to_result(_call(solve, args, timeout, "solver", abandoned))
    except Exception as exc:
        solve_time = time.perf_counter() - start
        return _failed(exc, SolverError)
    solve_time = time.perf_counter() - start

    logger.debug("%r part %d solved in %.6fs: %d", puzzle, part, solve_time, result)
    return ExecutionRecord(
        part=part,
        result=result,
        parse_time=parse_time,
        solve_time=solve_time,
        outcome=Outcome.success(),
        state=PartState.REPORTED,
        solution=solution,
        max_rss_mb=_rss_mb(),
    )


def select_parts(bindings: PuzzleBindings, parts: Iterable[int] | None, solution: str = DEFAULT_SOLUTION) -> List[int]:
    declared = bindings.parts(solution)
    if parts is None:
        return declared
    selected = sorted(set(parts))
    for part in selected:
        if part not in declared:
            raise ConfigurationError(
                f"missing binding: {bindings.puzzle_type.__name__} has no solver for part {part} ({solution})"
            )
    return selected


def run(
    puzzle: Any,
    parts: Iterable[int] | None = None,
    solution: str = DEFAULT_SOLUTION,
    timeout: float | None = None,
) -> List[ExecutionRecord]:
    bindings = register(type(puzzle))
    abandoned: List[threading.Thread] = []
    records = []
    for part in select_parts(bindings, parts, solution):
        if any(worker.is_alive() for worker in abandoned):
            # an overrun phase may still be mutating this instance
            error = PartTimeoutError("earlier part", timeout or 0)
            logger.warning("%r part %d not started: %s", puzzle, part, error)
            records.append(
                ExecutionRecord(
                    part=part,
                    result=None,
                    parse_time=0.0,
                    solve_time=0.0,
                    outcome=Outcome.failed(error),
                    state=PartState.FAILED,
                    solution=solution,
                    max_rss_mb=_rss_mb(),
                )
            )
            continue
        records.append(run_part(puzzle, bindings, part, solution=solution, timeout=timeout, abandoned=abandoned))
    return records
