from __future__ import annotations

import re
from typing import Tuple

from .errors import InputFormatError

INT_RE = re.compile(r"-?\d+")


def parse_ints(text: str) -> list[int]:
    return [int(token) for token in INT_RE.findall(text)]


def split_label(line: str, sep: str = ":") -> Tuple[str, str]:
    label, found, rest = line.partition(sep)
    if not found:
        raise InputFormatError(f"Expected {sep!r} in line {line!r}")
    return label.strip(), rest.strip()


def labeled_ints(line: str, label: str) -> list[int]:
    found, rest = split_label(line)
    if found != label:
        raise InputFormatError(f"Expected label {label!r}, got {found!r}")
    values = parse_ints(rest)
    if not values:
        raise InputFormatError(f"No numbers after {label!r} in line {line!r}")
    return values


def require_lines(lines: list[str], count: int, what: str) -> list[str]:
    if len(lines) < count:
        raise InputFormatError(f"Expected at least {count} lines for {what}, got {len(lines)}")
    return lines
