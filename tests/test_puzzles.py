import pytest

from aocrun.errors import InputFormatError
from aocrun.executor import run
from aocrun.inputs import has_input
from aocrun.puzzles.day01 import Day01
from aocrun.puzzles.day02 import Day02, parse_game
from aocrun.puzzles.day03 import Day03
from aocrun.puzzles.day06 import Day06, ways_to_win

SAMPLES = [
    (Day01, "_small1", 1, 142),
    (Day01, "_small2", 2, 281),
    (Day02, "_sample", 1, 8),
    (Day02, "_sample", 2, 2286),
    (Day03, "_sample", 1, 4361),
    (Day03, "_sample", 2, 467835),
    (Day06, "_sample", 1, 288),
    (Day06, "_sample", 2, 71503),
]

PRODUCTION = [
    (Day01, 1, 54634),
    (Day01, 2, 53855),
    (Day02, 1, 2169),
    (Day02, 2, 60948),
    (Day03, 1, 531932),
    (Day03, 2, 73646890),
    (Day06, 1, 449820),
    (Day06, 2, 42250895),
]


@pytest.mark.parametrize("puzzle_type,variant,part,expected", SAMPLES)
def test_samples(source, puzzle_type, variant, part, expected):
    [record] = run(puzzle_type(variant, source=source), parts=[part])
    assert record.outcome.ok, record.outcome.describe()
    assert record.result == expected


@pytest.mark.parametrize("puzzle_type,part,expected", PRODUCTION)
def test_production(source, puzzle_type, part, expected):
    if not has_input(source, puzzle_type.canonical_name()):
        pytest.skip("production input not present")
    [record] = run(puzzle_type("", source=source), parts=[part])
    assert record.result == expected


def test_day01_first_part_ignores_lines_without_digits():
    [record] = run(Day01(lines=["abc", "a1b"]), parts=[1])
    assert record.result == 11


def test_day01_overlapping_words():
    [record] = run(Day01(lines=["eightwo", "oneight"]), parts=[2])
    assert record.result == 82 + 18


def test_day01_second_part_needs_a_digit():
    [record] = run(Day01(lines=["xyz"]), parts=[2])
    assert record.outcome.error_type == "SolverError"


def test_parse_game():
    game = parse_game("Game 12: 3 blue, 4 red; 2 green")
    assert game.id == 12
    assert game.draws == [{"blue": 3, "red": 4}, {"green": 2}]
    assert game.max_counts() == {"red": 4, "green": 2, "blue": 3}


@pytest.mark.parametrize("line", ["Game x: 1 red", "Round 1: 1 red", "Game 1: 1 purple", "Game 1 1 red"])
def test_parse_game_rejects_bad_lines(line):
    with pytest.raises(InputFormatError):
        parse_game(line)


def test_day03_ragged_grid_is_input_error():
    [record] = run(Day03(lines=["12.", "*"]), parts=[1])
    assert record.outcome.error_type == "InputFormatError"


def test_day06_needs_two_lines():
    [record] = run(Day06(lines=["Time: 7"]), parts=[1])
    assert record.outcome.error_type == "InputFormatError"


@pytest.mark.parametrize(
    "time,distance,expected",
    [
        (7, 9, 4),
        (15, 40, 8),
        (30, 200, 9),
        (3, 2, 0),
        (4, 4, 0),
        (4, 3, 1),
        (71530, 940200, 71503),
    ],
)
def test_ways_to_win(time, distance, expected):
    assert ways_to_win(time, distance) == expected


def test_ways_to_win_matches_brute_force():
    for time in range(0, 40):
        for distance in range(0, 420, 7):
            brute = sum(1 for x in range(time + 1) if x * (time - x) > distance)
            assert ways_to_win(time, distance) == brute, (time, distance)


def test_ways_to_win_large_race_is_exact():
    time = 10**12 + 7
    distance = (time // 2) * (time - time // 2) - 1
    assert ways_to_win(time, distance) == 2
