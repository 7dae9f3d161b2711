"""Binding registry: which method parses and which solves each puzzle part.

Puzzle methods are tagged with :func:`parser` and :func:`solver`. The first
:func:`register` call for a puzzle type scans it once and caches the table;
structural problems (duplicates, a parser without a solver, bad signatures)
raise :class:`ConfigurationError` there rather than when a part runs.
"""
from __future__ import annotations

import inspect
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from .errors import ConfigurationError
from .models import DEFAULT_SOLUTION, Role

_MARKER = "__aocrun_bindings__"

BindingKey = Tuple[int, Role, str]


def _tag(role: Role, part: int, solution: str):
    if not isinstance(part, int) or isinstance(part, bool) or part < 1:
        raise ConfigurationError(f"Part number must be a positive integer, got {part!r}")
    if not solution:
        raise ConfigurationError("Solution name must not be empty")

    def decorate(func):
        func.__dict__.setdefault(_MARKER, []).append((part, role, solution))
        return func

    return decorate


def parser(part: int, solution: str = DEFAULT_SOLUTION):
    return _tag(Role.PARSER, part, solution)


def solver(part: int, solution: str = DEFAULT_SOLUTION):
    return _tag(Role.SOLVER, part, solution)


def _noop() -> None:
    return None


@dataclass(frozen=True)
class Binding:
    part: int
    role: Role
    solution: str
    func: Callable[..., Any]
    takes_state: bool

    def bind(self, instance: Any) -> Callable[..., Any]:
        return self.func.__get__(instance, type(instance))


class PuzzleBindings:
    def __init__(self, puzzle_type: type, table: Dict[BindingKey, Binding]):
        self.puzzle_type = puzzle_type
        self._table = table

    def solutions(self) -> List[str]:
        return sorted({key[2] for key in self._table})

    def parts(self, solution: str = DEFAULT_SOLUTION) -> List[int]:
        return sorted(
            part
            for part, role, name in self._table
            if role is Role.SOLVER and name == solution
        )

    def lookup(self, part: int, role: Role, solution: str = DEFAULT_SOLUTION) -> Binding | None:
        binding = self._table.get((part, role, solution))
        if binding is None and role is Role.SOLVER:
            raise ConfigurationError(
                f"missing binding: {self.puzzle_type.__name__} has no solver for part {part} ({solution})"
            )
        return binding

    def resolve(self, instance: Any, part: int, role: Role, solution: str = DEFAULT_SOLUTION) -> Callable[..., Any]:
        binding = self.lookup(part, role, solution)
        if binding is None:
            return _noop
        return binding.bind(instance)


def _positional_count(func: Callable[..., Any]) -> int:
    params = list(inspect.signature(func).parameters.values())[1:]
    return sum(
        1
        for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    )


def _scan(puzzle_type: type) -> PuzzleBindings:
    table: Dict[BindingKey, Binding] = {}
    seen: set[str] = set()
    for klass in puzzle_type.__mro__:
        for attr_name, attr in vars(klass).items():
            if attr_name in seen:
                continue
            seen.add(attr_name)
            tags = getattr(attr, _MARKER, None)
            if not tags or not callable(attr):
                continue
            arity = _positional_count(attr)
            for part, role, solution in tags:
                key = (part, role, solution)
                if key in table:
                    raise ConfigurationError(
                        f"{puzzle_type.__name__}: duplicate {role.value} for part {part} ({solution}): "
                        f"{table[key].func.__name__} and {attr.__name__}"
                    )
                if role is Role.PARSER and arity != 0:
                    raise ConfigurationError(f"{puzzle_type.__name__}.{attr.__name__}: parsers take no arguments")
                if role is Role.SOLVER and arity > 1:
                    raise ConfigurationError(
                        f"{puzzle_type.__name__}.{attr.__name__}: solvers take at most the parsed state"
                    )
                table[key] = Binding(part, role, solution, attr, takes_state=role is Role.SOLVER and arity == 1)

    for part, role, solution in table:
        if role is Role.PARSER and (part, Role.SOLVER, solution) not in table:
            raise ConfigurationError(
                f"{puzzle_type.__name__}: parser for part {part} ({solution}) has no matching solver"
            )
        if role is Role.SOLVER and table[(part, role, solution)].takes_state and (part, Role.PARSER, solution) not in table:
            raise ConfigurationError(
                f"{puzzle_type.__name__}: solver for part {part} ({solution}) takes parsed state "
                f"but the part has no parser"
            )
    if not table:
        raise ConfigurationError(f"{puzzle_type.__name__} declares no solver bindings")
    return PuzzleBindings(puzzle_type, table)


_REGISTRY: Dict[type, PuzzleBindings] = {}
_LOCK = threading.Lock()


def register(puzzle_type: type) -> PuzzleBindings:
    with _LOCK:
        bindings = _REGISTRY.get(puzzle_type)
        if bindings is None:
            bindings = _scan(puzzle_type)
            _REGISTRY[puzzle_type] = bindings
        return bindings
