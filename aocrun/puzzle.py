from __future__ import annotations

import re
from typing import Sequence

from .config import load_config
from .errors import ConfigurationError
from .inputs import FileLineSource, FixedLineSource, LineSequence

_DAY_RE = re.compile(r"^Day(\d+)", re.IGNORECASE)


class Puzzle:
    """Base class for one puzzle instance: an input variant plus parsed state.

    Subclasses tag methods with ``@parser(n)`` / ``@solver(n)``. A parser may
    return the parsed state for its part; a solver declaring one argument
    receives it, a solver declaring none reads whatever it needs itself.
    """

    year: int = 2023
    title: str = ""
    name: str | None = None

    def __init__(self, variant: str = "", lines: Sequence[str] | str | None = None, source=None):
        if lines is not None and (variant or source is not None):
            raise ConfigurationError("give either an input variant or input lines, not both")
        self.variant = variant
        if lines is not None:
            self.source = FixedLineSource(lines)
        elif source is not None:
            self.source = source
        else:
            self.source = FileLineSource.from_config(load_config())

    @classmethod
    def canonical_name(cls) -> str:
        if cls.name:
            return cls.name
        match = _DAY_RE.match(cls.__name__)
        if match:
            return f"day{int(match.group(1)):02d}"
        return cls.__name__.lower()

    @classmethod
    def day(cls) -> int | None:
        match = re.search(r"(\d+)$", cls.canonical_name())
        return int(match.group(1)) if match else None

    def lines(self) -> LineSequence:
        return self.source.open(self.canonical_name(), self.variant)

    def text(self) -> str:
        return self.lines().text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(variant={self.variant!r})"
