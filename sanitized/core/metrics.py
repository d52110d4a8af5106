"""
In-memory metrics collector for the sanitize pipeline.
Thread-safe singleton; only operation names, error codes and counts are kept.
"""
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class OperationStats:
    """Outcome counters for one pipeline operation."""
    total: int = 0
    success_count: int = 0
    error_count: int = 0
    error_codes: Dict[str, int] = field(default_factory=dict)

    def record(self, success: bool, error_code: Optional[str] = None) -> None:
        self.total += 1
        if success:
            self.success_count += 1
        else:
            self.error_count += 1
            if error_code:
                self.error_codes[error_code] = self.error_codes.get(error_code, 0) + 1


@dataclass
class MetricsData:
    """Container for all aggregated metrics."""
    operations: Dict[str, OperationStats] = field(default_factory=dict)
    dropped_keys: int = 0
    started_at: float = field(default_factory=time.time)


class MetricsCollector:
    """
    Thread-safe singleton for collecting pipeline metrics.

    Usage:
        metrics = get_metrics_collector()
        metrics.record_operation("construct", success=False, error_code="MISSING_BODY")
    """
    _instance: "MetricsCollector | None" = None
    _lock = threading.Lock()

    def __new__(cls) -> "MetricsCollector":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._data = MetricsData()
                    instance._data_lock = threading.Lock()
                    cls._instance = instance
        return cls._instance

    def record_operation(
        self,
        operation: str,
        success: bool,
        error_code: str | None = None,
    ) -> None:
        """
        Record a pipeline call outcome.

        Args:
            operation: Pipeline operation name (construct, merge, fetch_and_merge)
            success: Whether a record was returned
            error_code: SanitizeErrorCode value if not success
        """
        with self._data_lock:
            stats = self._data.operations.setdefault(operation, OperationStats())
            stats.record(success, error_code)

    def record_dropped(self, count: int) -> None:
        """Record the number of keys stripped by permit."""
        if count <= 0:
            return
        with self._data_lock:
            self._data.dropped_keys += count

    def get_snapshot(self) -> dict:
        """
        Get a snapshot of current metrics.
        Returns a plain dict suitable for JSON serialization.
        """
        with self._data_lock:
            operations = {
                name: {
                    "total": stats.total,
                    "success_count": stats.success_count,
                    "error_count": stats.error_count,
                    "error_codes": dict(stats.error_codes),
                }
                for name, stats in self._data.operations.items()
            }
            return {
                "uptime_seconds": int(time.time() - self._data.started_at),
                "operations": operations,
                "dropped_keys": self._data.dropped_keys,
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._data_lock:
            self._data = MetricsData()


def get_metrics_collector() -> MetricsCollector:
    """Get the singleton metrics collector instance."""
    return MetricsCollector()
