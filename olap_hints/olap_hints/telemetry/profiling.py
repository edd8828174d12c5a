"""Timing for codec operations.

``@profile_operation(name)`` wraps a function with ``perf_counter_ns``
timing.  Each call is recorded in the :class:`ProfileCollector` singleton
and logged at DEBUG level::

    @profile_operation("olap.parse")
    def parse_metadata(sql):
        ...

The collector keeps the last 100 durations per operation, or as many as
:meth:`ProfileCollector.configure` asks for, and aggregates them with
:meth:`ProfileCollector.get_stats`.  Nothing here reads settings, so timing
a codec call cannot make it fail.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class ProfileResult:
    """One timed call."""

    operation: str
    duration_ms: float


class ProfileCollector:
    """Thread-safe store of recent durations per operation name."""

    _instance: ProfileCollector | None = None
    _lock_cls = threading.Lock()

    def __init__(self, max_results: int = 100) -> None:
        self._max_results = max_results
        self._data: dict[str, deque[ProfileResult]] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> ProfileCollector:
        """Return the module-level singleton, creating it if needed."""
        if cls._instance is None:
            with cls._lock_cls:
                if cls._instance is None:
                    cls._instance = ProfileCollector()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        with cls._lock_cls:
            cls._instance = None

    @classmethod
    def configure(cls, max_results: int) -> ProfileCollector:
        """Replace the singleton with an empty collector keeping *max_results* per operation."""
        with cls._lock_cls:
            cls._instance = ProfileCollector(max_results)
            return cls._instance

    @property
    def max_results(self) -> int:
        return self._max_results

    def record(self, result: ProfileResult) -> None:
        with self._lock:
            if result.operation not in self._data:
                self._data[result.operation] = deque(maxlen=self._max_results)
            self._data[result.operation].append(result)

    def get_stats(self, operation: str) -> dict[str, Any] | None:
        """Aggregate the stored durations for *operation*.

        Returns ``None`` when nothing has been recorded, otherwise
        ``{"operation", "count", "mean_ms", "p50_ms", "p95_ms", "min_ms", "max_ms"}``.
        """
        with self._lock:
            results = self._data.get(operation)
            if not results:
                return None
            durations = sorted(r.duration_ms for r in results)

        count = len(durations)
        return {
            "operation": operation,
            "count": count,
            "mean_ms": round(sum(durations) / count, 3),
            "p50_ms": round(_percentile(durations, 50), 3),
            "p95_ms": round(_percentile(durations, 95), 3),
            "min_ms": round(durations[0], 3),
            "max_ms": round(durations[-1], 3),
        }


def _percentile(sorted_data: list[float], p: float) -> float:
    """Linear-interpolated p-th percentile of already sorted data."""
    n = len(sorted_data)
    k = (p / 100.0) * (n - 1)
    lower = int(k)
    upper = min(lower + 1, n - 1)
    return sorted_data[lower] + (k - lower) * (sorted_data[upper] - sorted_data[lower])


def profile_operation(name: str) -> Callable[[F], F]:
    """Decorator recording the wall time of each call under *name*."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_ns = time.perf_counter_ns()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
                ProfileCollector.get_instance().record(
                    ProfileResult(operation=name, duration_ms=round(duration_ms, 3))
                )
                logger.debug("PROFILE %s: %.3f ms", name, duration_ms)

        return wrapper  # type: ignore[return-value]

    return decorator
