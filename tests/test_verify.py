from pathlib import Path

import pytest

from aocrun.errors import ConfigurationError
from aocrun.inputs import MemoryLineSource
from aocrun.models import GoldenExpectation
from aocrun.puzzles.day01 import Day01
from aocrun.puzzles.day02 import Day02
from aocrun.puzzles.day03 import Day03
from aocrun.verify import GoldenTable, VerificationRunner


def _table(*rows):
    return GoldenTable(GoldenExpectation(*row) for row in rows)


def test_verify_pass(source):
    runner = VerificationRunner(_table(("day02", "_sample", 1, 8)), source=source)
    result = runner.verify(Day02, "_sample", 1)
    assert result.passed
    assert result.status == "pass"
    assert result.actual == 8


def test_verify_sample_gear_ratios(source):
    runner = VerificationRunner(_table(("day03", "_sample", 2, 467835)), source=source)
    assert runner.verify(Day03, "_sample", 2).passed


def test_off_by_one_is_mismatch():
    source = MemoryLineSource({"day01.txt": ["5xx3"]})
    runner = VerificationRunner(_table(("day01", "", 1, 54)), source=source)
    result = runner.verify(Day01, "", 1)
    assert not result.passed
    assert result.status == "mismatch"
    assert result.actual == 53
    assert result.expected == 54


def test_failed_part_is_reported_as_mismatch(source):
    runner = VerificationRunner(_table(("day02", "_gone", 1, 8)), source=source)
    result = runner.verify(Day02, "_gone", 1)
    assert result.status == "mismatch"
    assert result.actual is None
    assert result.record.outcome.error_type == "InputNotFoundError"


def test_missing_expectation_is_configuration_error(source):
    runner = VerificationRunner(_table(("day02", "_sample", 1, 8)), source=source)
    with pytest.raises(ConfigurationError, match="No golden expectation"):
        runner.verify(Day02, "_sample", 2)


def test_verify_all_keeps_table_order(source):
    table = _table(
        ("day02", "_sample", 2, 2286),
        ("day02", "_sample", 1, 9),
        ("day03", "_sample", 1, 4361),
        ("day06", "_sample", 1, 288),
    )
    runner = VerificationRunner(table, source=source)
    sequential = runner.verify_all()
    parallel = runner.verify_all(jobs=3)
    assert [v.status for v in sequential] == ["pass", "mismatch", "pass", "pass"]
    assert [(v.case, v.actual) for v in parallel] == [(v.case, v.actual) for v in sequential]


def test_verify_all_unknown_puzzle(source):
    runner = VerificationRunner(_table(("day42", "", 1, 1)), source=source)
    with pytest.raises(ConfigurationError, match="Unknown puzzle"):
        runner.verify_all()


def test_load_golden_file(tmp_path: Path):
    path = tmp_path / "golden.yaml"
    path.write_text(
        "cases:\n"
        "  - {puzzle: Day02, variant: _sample, part: 1, expected: 8}\n"
        "  - {puzzle: day06, part: 2, expected: 42250895}\n",
        encoding="utf-8",
    )
    table = GoldenTable.load(path)
    assert len(table) == 2
    assert table.expectation("day02", "_sample", 1).expected == 8
    assert table.expectation("day06", "", 2).expected == 42250895


def test_load_golden_errors(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        GoldenTable.load(tmp_path / "absent.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("cases:\n  - {puzzle: day02, part: one, expected: 8}\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        GoldenTable.load(bad)

    dup = tmp_path / "dup.json"
    dup.write_text(
        '{"cases": [{"puzzle": "day02", "part": 1, "expected": 1},'
        ' {"puzzle": "day02", "part": 1, "expected": 2}]}',
        encoding="utf-8",
    )
    with pytest.raises(ConfigurationError, match="Duplicate"):
        GoldenTable.load(dup)


def test_repository_golden_samples_pass(source, golden_path):
    table = GoldenTable.load(golden_path)
    samples = [case for case in table if case.variant]
    assert samples
    results = VerificationRunner(table, source=source).verify_all(samples, jobs=2)
    assert all(v.passed for v in results), [v.case for v in results if not v.passed]
