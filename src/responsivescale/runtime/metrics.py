"""Performance counters for ScalingEngine.

Counts value requests answered from the cache and by computation, and
averages the computation time. Requests with invalid base values are not
counted: they are answered without computing anything.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from threading import Lock

__all__ = ["MetricsRecorder", "PerformanceMetrics"]


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Snapshot of engine performance counters.

    Attributes:
        total_operations: Value requests served (cache hits + computations)
        cache_hits: Requests answered from the value cache
        computations: Requests that ran the scaling pipeline
        cache_hit_rate: cache_hits / total_operations (0.0-1.0)
        average_computation_time: Mean pipeline time in milliseconds
    """

    total_operations: int = 0
    cache_hits: int = 0
    computations: int = 0
    cache_hit_rate: float = 0.0
    average_computation_time: float = 0.0


class MetricsRecorder:
    """Thread-safe accumulator behind ScalingEngine.get_performance_metrics()."""

    __slots__ = ("_computations", "_hits", "_lock", "_total_ms")

    def __init__(self) -> None:
        self._lock = Lock()
        self._hits = 0
        self._computations = 0
        self._total_ms = 0.0

    def record_hit(self) -> None:
        """Count a request answered from the cache."""
        with self._lock:
            self._hits += 1

    def record_computation(self, elapsed_ms: float) -> None:
        """Count a request that ran the pipeline for elapsed_ms milliseconds."""
        with self._lock:
            self._computations += 1
            self._total_ms += elapsed_ms

    def reset(self) -> None:
        """Zero every counter."""
        with self._lock:
            self._hits = 0
            self._computations = 0
            self._total_ms = 0.0

    def snapshot(self) -> PerformanceMetrics:
        """Current counters."""
        with self._lock:
            total = self._hits + self._computations
            return PerformanceMetrics(
                total_operations=total,
                cache_hits=self._hits,
                computations=self._computations,
                cache_hit_rate=round(self._hits / total, 4) if total else 0.0,
                average_computation_time=(
                    self._total_ms / self._computations if self._computations else 0.0
                ),
            )
