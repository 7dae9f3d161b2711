"""Line sources: resolve a puzzle name plus input variant to its lines.

Every ``open`` returns a :class:`LineSequence`, which re-reads its backing
data on each iteration, so a parser, a later solver and a verification re-run
can each traverse the same input from the start.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Sequence

from .errors import ConfigurationError, InputNotFoundError
from .utils import open_input

KeyResolver = Callable[[str, str], str]

DEFAULT_PATTERN = "{name}{variant}.txt"
VARIANT_RE = re.compile(r"^[\w.\-]*$")


def pattern_resolver(pattern: str = DEFAULT_PATTERN, **fields) -> KeyResolver:
    def resolve(name: str, variant: str) -> str:
        return pattern.format(name=name, variant=variant, **fields)

    return resolve


default_resolver = pattern_resolver()


def _check_request(name: str, variant: str) -> None:
    if not name:
        raise ConfigurationError("Input name must not be empty")
    if not VARIANT_RE.match(variant):
        raise InputNotFoundError(name, variant)


class LineSequence:
    def __init__(self, opener: Callable[[], Iterable[str]], strip: bool = True, origin: str = ""):
        self._opener = opener
        self._strip = strip
        self.origin = origin

    def __iter__(self) -> Iterator[str]:
        for line in self._opener():
            yield line.strip() if self._strip else line.rstrip("\r\n")

    def list(self) -> list[str]:
        return list(self)

    def text(self) -> str:
        return "\n".join(self)

    def __repr__(self) -> str:
        return f"LineSequence({self.origin!r})"


class FileLineSource:
    def __init__(self, inputs_dir: Path, resolver: KeyResolver | None = None):
        self.inputs_dir = Path(inputs_dir)
        self.resolver = resolver or default_resolver

    @classmethod
    def from_config(cls, config) -> "FileLineSource":
        return cls(config.inputs_dir, pattern_resolver(config.input_pattern))

    def locate(self, name: str, variant: str = "") -> Path:
        _check_request(name, variant)
        path = self.inputs_dir / self.resolver(name, variant)
        if path.is_file():
            return path
        compressed = path.with_name(path.name + ".gz")
        if compressed.is_file():
            return compressed
        raise InputNotFoundError(name, variant, str(path))

    def open(self, name: str, variant: str = "") -> LineSequence:
        path = self.locate(name, variant)

        def _lines() -> Iterator[str]:
            with open_input(path) as f:
                yield from f

        return LineSequence(_lines, origin=str(path))


class MemoryLineSource:
    """Inputs held in memory, keyed the same way files are."""

    def __init__(self, inputs: Mapping[str, Sequence[str] | str], resolver: KeyResolver | None = None):
        self.resolver = resolver or default_resolver
        self._inputs = {
            key: tuple(value.splitlines()) if isinstance(value, str) else tuple(value)
            for key, value in inputs.items()
        }

    def open(self, name: str, variant: str = "") -> LineSequence:
        _check_request(name, variant)
        key = self.resolver(name, variant)
        if key not in self._inputs:
            raise InputNotFoundError(name, variant, key)
        lines = self._inputs[key]
        return LineSequence(lambda: iter(lines), origin=key)


class FixedLineSource:
    def __init__(self, lines: Sequence[str] | str):
        self._lines = tuple(lines.splitlines()) if isinstance(lines, str) else tuple(lines)

    def open(self, name: str, variant: str = "") -> LineSequence:
        _check_request(name, variant)
        return LineSequence(lambda: iter(self._lines), origin="<inline>")


def has_input(source, name: str, variant: str = "") -> bool:
    try:
        source.open(name, variant)
    except InputNotFoundError:
        return False
    return True
