from __future__ import annotations

import importlib
import inspect
import pkgutil
from functools import lru_cache
from typing import Dict

from . import puzzles
from .errors import ConfigurationError
from .puzzle import Puzzle


@lru_cache(maxsize=None)
def available_puzzles() -> Dict[str, type]:
    found: Dict[str, type] = {}
    for module_info in pkgutil.iter_modules(puzzles.__path__):
        module = importlib.import_module(f"{puzzles.__name__}.{module_info.name}")
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if issubclass(obj, Puzzle) and obj is not Puzzle and obj.__module__ == module.__name__:
                name = obj.canonical_name()
                if name in found:
                    raise ConfigurationError(f"Puzzle name {name!r} is declared twice")
                found[name] = obj
    return dict(sorted(found.items()))


def get_puzzle(name: str) -> type:
    catalog = available_puzzles()
    key = name.strip().lower()
    if key in catalog:
        return catalog[key]
    if key.isdigit():
        for puzzle_type in catalog.values():
            if puzzle_type.day() == int(key):
                return puzzle_type
    raise ConfigurationError(f"Unknown puzzle {name!r}; known: {', '.join(catalog) or 'none'}")
