from __future__ import annotations


class HarnessError(Exception):
    pass


class ConfigurationError(HarnessError):
    """The harness itself is misconfigured (bindings, golden table)."""


class InputNotFoundError(HarnessError):
    def __init__(self, name: str, variant: str, location: str | None = None):
        self.name = name
        self.variant = variant
        self.location = location
        where = f" at {location}" if location else ""
        super().__init__(f"No input for {name!r} variant {variant!r}{where}")


class InputFormatError(HarnessError):
    pass


class SolverError(HarnessError):
    pass


class PartTimeoutError(HarnessError):
    def __init__(self, phase: str, timeout: float):
        self.phase = phase
        self.timeout = timeout
        super().__init__(f"{phase} did not finish within {timeout}s")
