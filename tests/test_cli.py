from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from aocrun.cli import app


runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch, inputs_dir: Path, golden_path: Path) -> Path:
    config = {
        "paths": {"inputs_dir": str(inputs_dir), "golden_path": str(golden_path)},
        "defaults": {"jobs": 2},
    }
    (tmp_path / "config.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_run_sample(workdir):
    result = runner.invoke(app, ["run", "day02", "--variant", "_sample"])
    assert result.exit_code == 0, result.output
    assert "PART 1" in result.output
    assert ": 8" in result.output
    assert ": 2286" in result.output


def test_run_by_day_number_markdown(workdir):
    result = runner.invoke(app, ["run", "6", "-v", "_sample", "--parts", "2", "--format", "markdown"])
    assert result.exit_code == 0, result.output
    assert "| 2 | 71503 |" in result.output
    assert "| 1 |" not in result.output


def test_run_missing_input_exits_nonzero(workdir):
    result = runner.invoke(app, ["run", "day01", "--variant", "_missing"])
    assert result.exit_code == 1
    assert "InputNotFoundError" in result.output
    assert "2 of 2 parts failed" in result.output


def test_run_unknown_puzzle(workdir):
    result = runner.invoke(app, ["run", "day42"])
    assert result.exit_code == 2


def test_run_unknown_part(workdir):
    result = runner.invoke(app, ["run", "day02", "-v", "_sample", "--parts", "5"])
    assert result.exit_code == 2


def test_regress_samples(workdir):
    result = runner.invoke(app, ["regress", "--skip-missing", "--variants", "_sample,_small1,_small2"])
    assert result.exit_code == 0, result.output
    assert "8/8 passed" in result.output


def test_regress_reports_mismatch(workdir):
    golden = workdir / "golden.yaml"
    golden.write_text(
        "cases:\n"
        "  - {puzzle: day02, variant: _sample, part: 1, expected: 8}\n"
        "  - {puzzle: day02, variant: _sample, part: 2, expected: 2287}\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["regress", "--golden", str(golden)])
    assert result.exit_code == 1
    assert "PASS day02_sample part 1" in result.output
    assert "FAIL day02_sample part 2: expected 2287, got 2286" in result.output
    assert "1/2 passed, 1 failed" in result.output


def test_regress_skip_missing_counts_rows(workdir):
    golden = workdir / "golden.yaml"
    golden.write_text(
        "cases:\n"
        "  - {puzzle: day02, variant: _sample, part: 1, expected: 8}\n"
        "  - {puzzle: day02, variant: _nowhere, part: 1, expected: 8}\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["regress", "--golden", str(golden), "--skip-missing"])
    assert result.exit_code == 0, result.output
    assert "1 skipped" in result.output


def test_bench(workdir):
    result = runner.invoke(app, ["bench", "day03", "-v", "_sample", "--cycles", "2"])
    assert result.exit_code == 0, result.output
    assert "PART 1 x2 ok result 4361" in result.output
    assert "PART 2 x2 ok result 467835" in result.output


def test_list(workdir):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0, result.output
    assert "day02: Cube Conundrum parts=1,2" in result.output


def test_init_writes_config(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    data = yaml.safe_load((tmp_path / "config.yaml").read_text(encoding="utf-8"))
    assert data["inputs"]["pattern"] == "{name}{variant}.txt"
    assert (tmp_path / "inputs").is_dir()
