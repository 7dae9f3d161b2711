"""Benchmark mode: repeat parts on fresh instances and summarize timings."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .executor import run, select_parts
from .models import DEFAULT_SOLUTION, ExecutionRecord
from .registry import register
from .stats import summarize_times

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkSummary:
    part: int
    solution: str
    cycles: int
    records: List[ExecutionRecord] = field(default_factory=list)

    @property
    def failures(self) -> List[ExecutionRecord]:
        return [r for r in self.records if not r.outcome.ok]

    @property
    def results(self) -> List[int]:
        return sorted({r.result for r in self.records if r.outcome.ok})

    @property
    def deterministic(self) -> bool:
        return len(self.results) <= 1

    @property
    def status(self) -> str:
        if self.failures:
            return "failed"
        if not self.deterministic:
            return "nondeterministic"
        return "ok"

    @property
    def result(self) -> int | None:
        results = self.results
        return results[0] if len(results) == 1 else None

    def parse_stats(self) -> Dict[str, Any]:
        return summarize_times([r.parse_time for r in self.records if r.outcome.ok])

    def solve_stats(self) -> Dict[str, Any]:
        return summarize_times([r.solve_time for r in self.records if r.outcome.ok])


def benchmark(
    puzzle_type: type,
    variant: str = "",
    cycles: int = 10,
    parts: Iterable[int] | None = None,
    solution: str = DEFAULT_SOLUTION,
    source=None,
    timeout: float | None = None,
) -> List[BenchmarkSummary]:
    if cycles < 1:
        raise ValueError("cycles must be at least 1")
    selected = select_parts(register(puzzle_type), parts, solution)
    summaries = {part: BenchmarkSummary(part, solution, cycles) for part in selected}
    for cycle in range(cycles):
        logger.debug("benchmark %s%s cycle %d/%d", puzzle_type.canonical_name(), variant, cycle + 1, cycles)
        puzzle = puzzle_type(variant, source=source)
        for record in run(puzzle, parts=selected, solution=solution, timeout=timeout):
            summaries[record.part].records.append(record)
    return [summaries[part] for part in selected]
