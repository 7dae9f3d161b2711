from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .bench import benchmark
from .catalog import available_puzzles, get_puzzle
from .config import load_config, write_default_config
from .errors import ConfigurationError, InputNotFoundError
from .executor import run
from .inputs import FileLineSource, has_input
from .registry import register
from .report import render_benchmark, render_regression, render_run
from .utils import ensure_dir, parse_list, parse_parts
from .verify import GoldenTable, VerificationRunner

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True)


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")):
    setup_logging(debug)


def _puzzle_type(name: str) -> type:
    try:
        puzzle_type = get_puzzle(name)
        register(puzzle_type)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc))
    return puzzle_type


def _parts(value: str) -> list[int] | None:
    try:
        return parse_parts(value)
    except ValueError:
        raise typer.BadParameter(f"Parts must be a comma list of integers, got {value!r}")


@app.command()
def init(force: bool = typer.Option(False, "--force", help="Overwrite existing files")):
    config = load_config()
    ensure_dir(config.inputs_dir)
    cfg_path = Path.cwd() / "config.yaml"
    if force or not cfg_path.exists():
        write_default_config(cfg_path)
    typer.echo(f"Initialized aocrun in {config.base_dir}")


@app.command("list")
def list_puzzles():
    config = load_config()
    source = FileLineSource.from_config(config)
    for name, puzzle_type in available_puzzles().items():
        bindings = register(puzzle_type)
        parts = ",".join(str(p) for p in bindings.parts())
        production = "yes" if has_input(source, name) else "no"
        typer.echo(f"{name}: {puzzle_type.title} parts={parts} production-input={production}")


@app.command("run")
def run_puzzle(
    puzzle: str = typer.Argument(..., help="Puzzle name (day02) or day number"),
    variant: str = typer.Option("", "--variant", "-v", help="Input suffix, empty for production"),
    parts: str = typer.Option("", "--parts", help="Comma list of parts, default all"),
    solution: str = typer.Option("default", "--solution"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds per phase"),
    fmt: Optional[str] = typer.Option(None, "--format", help="text or markdown"),
):
    config = load_config()
    puzzle_type = _puzzle_type(puzzle)
    source = FileLineSource.from_config(config)
    instance = puzzle_type(variant, source=source)

    input_size = None
    try:
        input_size = len(instance.text())
    except InputNotFoundError as exc:
        logger.warning("%s", exc)

    try:
        records = run(
            instance,
            parts=_parts(parts),
            solution=solution,
            timeout=timeout if timeout is not None else config.default_timeout,
        )
        output = render_run(instance, records, input_size=input_size, fmt=fmt or config.default_format)
    except (ConfigurationError, ValueError) as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(output)
    if any(not r.outcome.ok for r in records):
        raise typer.Exit(code=1)


@app.command()
def regress(
    golden: Optional[Path] = typer.Option(None, "--golden", help="Golden table (YAML/JSON)"),
    puzzles: str = typer.Option("", "--puzzles", help="Comma list of puzzle names"),
    variants: Optional[str] = typer.Option(None, "--variants", help="Comma list of variants, '' for production"),
    skip_missing: bool = typer.Option(False, "--skip-missing", help="Skip rows whose input file is absent"),
    jobs: Optional[int] = typer.Option(None, "--jobs"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds per phase"),
    fmt: Optional[str] = typer.Option(None, "--format", help="text or markdown"),
):
    config = load_config()
    source = FileLineSource.from_config(config)
    try:
        table = GoldenTable.load(golden or config.golden_path)
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc))

    cases = list(table)
    selected = {p.lower() for p in parse_list(puzzles)}
    if selected:
        cases = [c for c in cases if c.puzzle in selected]
    if variants is not None:
        wanted = {v.strip() for v in variants.split(",")}
        cases = [c for c in cases if c.variant in wanted]

    skipped = 0
    if skip_missing:
        present = [c for c in cases if has_input(source, c.puzzle, c.variant)]
        skipped = len(cases) - len(present)
        cases = present

    runner = VerificationRunner(
        table,
        source=source,
        timeout=timeout if timeout is not None else config.default_timeout,
    )
    try:
        verifications = runner.verify_all(cases, jobs=jobs if jobs is not None else config.default_jobs)
        output = render_regression(verifications, skipped=skipped, fmt=fmt or config.default_format)
    except (ConfigurationError, ValueError) as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(output)
    if any(not v.passed for v in verifications):
        raise typer.Exit(code=1)


@app.command()
def bench(
    puzzle: str = typer.Argument(..., help="Puzzle name (day02) or day number"),
    variant: str = typer.Option("", "--variant", "-v"),
    cycles: Optional[int] = typer.Option(None, "--cycles"),
    parts: str = typer.Option("", "--parts", help="Comma list of parts, default all"),
    solution: str = typer.Option("default", "--solution"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds per phase"),
):
    config = load_config()
    puzzle_type = _puzzle_type(puzzle)
    try:
        summaries = benchmark(
            puzzle_type,
            variant,
            cycles=cycles if cycles is not None else config.default_cycles,
            parts=_parts(parts),
            solution=solution,
            source=FileLineSource.from_config(config),
            timeout=timeout if timeout is not None else config.default_timeout,
        )
    except (ConfigurationError, ValueError) as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(render_benchmark(puzzle_type, variant, summaries))
    if any(s.status != "ok" for s in summaries):
        raise typer.Exit(code=1)
