from __future__ import annotations

import re

from ..errors import SolverError
from ..puzzle import Puzzle
from ..registry import solver

SPELT_DIGITS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
}

# lookahead so overlapping words ("eightwo") both count
SPELT_RE = re.compile(r"(?=(\d|" + "|".join(SPELT_DIGITS) + "))")


def _digit(token: str) -> int:
    return int(token) if token.isdigit() else SPELT_DIGITS[token]


class Day01(Puzzle):
    title = "Trebuchet?!"

    @solver(1)
    def digits_only(self):
        total = 0
        for line in self.lines():
            digits = [int(ch) for ch in line if ch.isdigit()]
            if digits:
                total += digits[0] * 10 + digits[-1]
        return total

    @solver(2)
    def digits_and_words(self):
        total = 0
        for lineno, line in enumerate(self.lines(), 1):
            digits = [_digit(token) for token in SPELT_RE.findall(line)]
            if not digits:
                raise SolverError(f"line {lineno} has no digit: {line!r}")
            total += digits[0] * 10 + digits[-1]
        return total
