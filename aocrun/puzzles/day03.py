from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterator, List, Tuple

from ..errors import InputFormatError
from ..puzzle import Puzzle
from ..registry import parser, solver

Number = Tuple[int, int, int, int]  # row, start, end (exclusive), value


def _is_symbol(ch: str) -> bool:
    return ch != "." and not ch.isdigit()


def numbers(grid: List[str]) -> Iterator[Number]:
    for row, line in enumerate(grid):
        col = 0
        width = len(line)
        while col < width:
            if not line[col].isdigit():
                col += 1
                continue
            start = col
            while col < width and line[col].isdigit():
                col += 1
            yield row, start, col, int(line[start:col])


def neighbours(grid: List[str], row: int, start: int, end: int) -> Iterator[Tuple[int, int, str]]:
    width = len(grid[row])
    lo, hi = max(0, start - 1), min(width, end + 1)
    for r in (row - 1, row + 1):
        if 0 <= r < len(grid):
            for c in range(lo, hi):
                yield r, c, grid[r][c]
    if start > 0:
        yield row, start - 1, grid[row][start - 1]
    if end < width:
        yield row, end, grid[row][end]


class Day03(Puzzle):
    title = "Gear Ratios"

    @parser(1)
    @parser(2)
    def schematic(self) -> List[str]:
        grid = [line for line in self.lines() if line]
        if not grid:
            raise InputFormatError("empty engine schematic")
        width = len(grid[0])
        for row, line in enumerate(grid):
            if len(line) != width:
                raise InputFormatError(f"row {row} has width {len(line)}, expected {width}")
        return grid

    @solver(1)
    def part_numbers(self, grid: List[str]):
        return sum(
            value
            for row, start, end, value in numbers(grid)
            if any(_is_symbol(ch) for _, _, ch in neighbours(grid, row, start, end))
        )

    @solver(2)
    def gear_ratios(self, grid: List[str]):
        gears: Dict[Tuple[int, int], List[int]] = defaultdict(list)
        for row, start, end, value in numbers(grid):
            for r, c, ch in neighbours(grid, row, start, end):
                if ch == "*":
                    gears[(r, c)].append(value)
        return sum(parts[0] * parts[1] for parts in gears.values() if len(parts) == 2)
