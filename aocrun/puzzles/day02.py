from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Dict, List

from ..errors import InputFormatError
from ..parsers import split_label
from ..puzzle import Puzzle
from ..registry import parser, solver

COLORS = ("red", "green", "blue")
BAG_LIMITS = {"red": 12, "green": 13, "blue": 14}


@dataclass
class Game:
    id: int
    draws: List[Dict[str, int]]

    def max_counts(self) -> Dict[str, int]:
        return {color: max((draw.get(color, 0) for draw in self.draws), default=0) for color in COLORS}


def parse_game(line: str) -> Game:
    label, rest = split_label(line)
    word, _, number = label.partition(" ")
    if word != "Game" or not number.isdigit():
        raise InputFormatError(f"Expected 'Game <id>', got {label!r}")
    draws = []
    for draw_text in rest.split(";"):
        draw: Dict[str, int] = {}
        for cube in draw_text.split(","):
            count, _, color = cube.strip().partition(" ")
            if color not in COLORS or not count.isdigit():
                raise InputFormatError(f"Bad cube count {cube.strip()!r} in game {number}")
            draw[color] = int(count)
        draws.append(draw)
    return Game(int(number), draws)


class Day02(Puzzle):
    title = "Cube Conundrum"

    @parser(1)
    @parser(2)
    def games(self) -> List[Game]:
        return [parse_game(line) for line in self.lines() if line]

    @solver(1)
    def possible_games(self, games: List[Game]):
        return sum(
            game.id
            for game in games
            if all(count <= BAG_LIMITS[color] for color, count in game.max_counts().items())
        )

    @solver(2)
    def minimum_power(self, games: List[Game]):
        return sum(prod(game.max_counts().values()) for game in games)
