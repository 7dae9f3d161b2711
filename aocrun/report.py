from __future__ import annotations

from pathlib import Path
from typing import Any, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .bench import BenchmarkSummary
from .models import ExecutionRecord, Verification
from .stats import format_duration

TEMPLATE_DIR = Path(__file__).parent / "templates"
FORMATS = {"text": "txt", "markdown": "md"}


def _env(template_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["duration"] = format_duration
    return env


def _template_name(kind: str, fmt: str) -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Format must be one of {', '.join(FORMATS)}")
    return f"{kind}.{FORMATS[fmt]}"


def render_run(
    puzzle: Any,
    records: List[ExecutionRecord],
    input_size: int | None = None,
    fmt: str = "text",
    template_dir: Path = TEMPLATE_DIR,
) -> str:
    template = _env(template_dir).get_template(_template_name("run", fmt))
    return template.render(
        puzzle=puzzle,
        name=puzzle.canonical_name(),
        records=records,
        input_size=input_size,
        failed=sum(1 for r in records if not r.outcome.ok),
    )


def render_regression(
    verifications: List[Verification],
    skipped: int = 0,
    fmt: str = "text",
    template_dir: Path = TEMPLATE_DIR,
) -> str:
    template = _env(template_dir).get_template(_template_name("regress", fmt))
    passed = sum(1 for v in verifications if v.passed)
    return template.render(
        verifications=verifications,
        total=len(verifications),
        passed=passed,
        mismatched=len(verifications) - passed,
        skipped=skipped,
    )


def render_benchmark(
    puzzle_type: type,
    variant: str,
    summaries: List[BenchmarkSummary],
    template_dir: Path = TEMPLATE_DIR,
) -> str:
    template = _env(template_dir).get_template("bench.txt")
    return template.render(name=puzzle_type.canonical_name(), variant=variant, summaries=summaries)
