from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import PartTimeoutError

DEFAULT_SOLUTION = "default"


class Role(str, Enum):
    PARSER = "parser"
    SOLVER = "solver"


class PartState(str, Enum):
    PENDING = "pending"
    PARSING = "parsing"
    SOLVING = "solving"
    REPORTED = "reported"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    status: str
    error_type: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls) -> "Outcome":
        return cls("ok")

    @classmethod
    def failed(cls, exc: BaseException) -> "Outcome":
        status = "timeout" if isinstance(exc, PartTimeoutError) else "failed"
        return cls(status, type(exc).__name__, str(exc))

    def describe(self) -> str:
        if self.ok:
            return "ok"
        return f"{self.status}({self.error_type}: {self.message})"


@dataclass(frozen=True)
class ExecutionRecord:
    part: int
    result: int | None
    parse_time: float
    solve_time: float
    outcome: Outcome
    state: PartState
    solution: str = DEFAULT_SOLUTION
    max_rss_mb: float | None = None


@dataclass(frozen=True)
class GoldenExpectation:
    puzzle: str
    variant: str
    part: int
    expected: int
    solution: str = DEFAULT_SOLUTION


@dataclass(frozen=True)
class Verification:
    case: GoldenExpectation
    record: ExecutionRecord

    @property
    def actual(self) -> int | None:
        return self.record.result

    @property
    def expected(self) -> int:
        return self.case.expected

    @property
    def passed(self) -> bool:
        return (
            self.record.outcome.ok
            and type(self.actual) is int
            and self.actual == self.expected
        )

    @property
    def status(self) -> str:
        return "pass" if self.passed else "mismatch"
