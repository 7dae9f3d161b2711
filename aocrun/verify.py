"""Regression checks of puzzle answers against a golden table."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Tuple

from .catalog import get_puzzle
from .errors import ConfigurationError
from .executor import run
from .models import DEFAULT_SOLUTION, GoldenExpectation, Verification
from .registry import register
from .utils import load_yaml_or_json

logger = logging.getLogger(__name__)

CaseKey = Tuple[str, str, int, str]


def _case_from_dict(row: Dict[str, Any]) -> GoldenExpectation:
    try:
        return GoldenExpectation(
            puzzle=str(row["puzzle"]).lower(),
            variant=str(row.get("variant") or ""),
            part=int(row["part"]),
            expected=int(row["expected"]),
            solution=str(row.get("solution") or DEFAULT_SOLUTION),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid golden row {row!r}: {exc}") from exc


class GoldenTable:
    def __init__(self, cases: Iterable[GoldenExpectation]):
        self._cases: Dict[CaseKey, GoldenExpectation] = {}
        for case in cases:
            key = (case.puzzle, case.variant, case.part, case.solution)
            if key in self._cases:
                raise ConfigurationError(f"Duplicate golden row for {key}")
            self._cases[key] = case

    @classmethod
    def load(cls, path: Path) -> "GoldenTable":
        if not path.exists():
            raise ConfigurationError(f"Golden table not found: {path}")
        try:
            data = load_yaml_or_json(path)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        rows = data.get("cases") or []
        if not isinstance(rows, list):
            raise ConfigurationError(f"'cases' must be a list in {path}")
        return cls(_case_from_dict(row) for row in rows)

    def __iter__(self) -> Iterator[GoldenExpectation]:
        return iter(self._cases.values())

    def __len__(self) -> int:
        return len(self._cases)

    def expectation(self, puzzle: str, variant: str, part: int, solution: str = DEFAULT_SOLUTION) -> GoldenExpectation:
        case = self._cases.get((puzzle, variant, part, solution))
        if case is None:
            raise ConfigurationError(
                f"No golden expectation for {puzzle} variant {variant!r} part {part} ({solution})"
            )
        return case


class VerificationRunner:
    def __init__(
        self,
        golden: GoldenTable,
        source=None,
        timeout: float | None = None,
        lookup: Callable[[str], type] = get_puzzle,
    ):
        self.golden = golden
        self.source = source
        self.timeout = timeout
        self.lookup = lookup

    def verify(self, puzzle_type: type, variant: str, part: int, solution: str = DEFAULT_SOLUTION) -> Verification:
        case = self.golden.expectation(puzzle_type.canonical_name(), variant, part, solution)
        puzzle = puzzle_type(variant, source=self.source)
        [record] = run(puzzle, parts=[part], solution=solution, timeout=self.timeout)
        verification = Verification(case, record)
        if not verification.passed:
            logger.info(
                "%s%s part %d: expected %d, got %s (%s)",
                case.puzzle,
                case.variant,
                case.part,
                case.expected,
                record.result,
                record.outcome.describe(),
            )
        return verification

    def verify_case(self, case: GoldenExpectation) -> Verification:
        return self.verify(self.lookup(case.puzzle), case.variant, case.part, case.solution)

    def verify_all(self, cases: Iterable[GoldenExpectation] | None = None, jobs: int = 1) -> List[Verification]:
        cases = list(self.golden if cases is None else cases)
        # resolve every puzzle type up front so a bad table fails before anything runs
        for case in cases:
            register(self.lookup(case.puzzle))

        if jobs <= 1:
            return [self.verify_case(case) for case in cases]

        results: List[Verification | None] = [None] * len(cases)
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = {executor.submit(self.verify_case, case): i for i, case in enumerate(cases)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return [r for r in results if r is not None]
