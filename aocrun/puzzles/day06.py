from __future__ import annotations

from math import isqrt, prod
from typing import List, Tuple

from ..errors import InputFormatError
from ..parsers import labeled_ints, require_lines
from ..puzzle import Puzzle
from ..registry import parser, solver

Race = Tuple[int, int]  # time, record distance


def ways_to_win(time: int, distance: int) -> int:
    """Count hold times ``x`` in ``[0, time]`` with ``x * (time - x) > distance``.

    The winning holds form a range symmetric around ``time / 2``; its lower
    end is found from the integer square root of the discriminant and nudged
    to the exact boundary, so large races never lose precision.
    """
    delta = time * time - 4 * distance
    if delta <= 0:
        return 0
    half = time // 2
    low = max(0, (time - isqrt(delta)) // 2)
    while low <= half and low * (time - low) <= distance:
        low += 1
    if low > half:
        return 0
    while low > 0 and (low - 1) * (time - low + 1) > distance:
        low -= 1
    return time - 2 * low + 1


class Day06(Puzzle):
    title = "Wait For It"

    def _table(self) -> Tuple[str, str]:
        lines = require_lines([line for line in self.lines() if line], 2, "race table")
        return lines[0], lines[1]

    @parser(1)
    def races(self) -> List[Race]:
        times_line, dists_line = self._table()
        times = labeled_ints(times_line, "Time")
        dists = labeled_ints(dists_line, "Distance")
        if len(times) != len(dists):
            raise InputFormatError(f"{len(times)} times but {len(dists)} distances")
        return list(zip(times, dists))

    @solver(1)
    def margin_of_error(self, races: List[Race]):
        return prod(ways_to_win(time, dist) for time, dist in races)

    @parser(2)
    def single_race(self) -> Race:
        times_line, dists_line = self._table()
        time = int("".join(str(n) for n in labeled_ints(times_line, "Time")))
        dist = int("".join(str(n) for n in labeled_ints(dists_line, "Distance")))
        return time, dist

    @solver(2)
    def long_race(self, race: Race):
        return ways_to_win(*race)
