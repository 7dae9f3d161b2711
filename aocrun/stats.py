from __future__ import annotations

import math
from statistics import mean, median
from typing import Any, Dict, List


def _percentile(values: List[float], p: float) -> float | None:
    if not values:
        return None
    values = sorted(values)
    k = int(math.ceil((p / 100.0) * len(values))) - 1
    k = max(0, min(k, len(values) - 1))
    return values[k]


def summarize_times(times: List[float]) -> Dict[str, Any]:
    return {
        "count": len(times),
        "min": min(times) if times else None,
        "avg": mean(times) if times else None,
        "median": median(times) if times else None,
        "p95": _percentile(times, 95),
        "total": sum(times),
    }


def format_duration(seconds: float | None) -> str:
    if seconds is None:
        return "-"
    if seconds < 1e-3:
        return f"{seconds * 1e6:.0f}us"
    if seconds < 1:
        return f"{seconds * 1e3:.2f}ms"
    return f"{seconds:.3f}s"
