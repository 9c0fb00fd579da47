#!/usr/bin/env python3
"""
Monitoring hooks for performance tracking and observability
Lightweight counters and timers plus Prometheus series for varga projections
"""

import threading
import time

from dataclasses import dataclass
from typing import Any

from prometheus_client import Counter, Histogram

__all__ = [
    "MetricStats",
    "MetricsCollector",
    "get_metrics",
    "reset_metrics",
    "track_projection",
    "track_projection_error",
]

# ============================================================================
# METRICS STORAGE
# ============================================================================


@dataclass
class MetricStats:
    """Statistics for a single metric"""

    count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0
    last_time: float = 0.0
    errors: int = 0

    @property
    def avg_time(self) -> float:
        """Average time per call"""
        return self.total_time / self.count if self.count > 0 else 0.0

    def record(self, duration: float, error: bool = False):
        """Record a metric observation"""
        self.count += 1
        self.total_time += duration
        self.min_time = min(self.min_time, duration)
        self.max_time = max(self.max_time, duration)
        self.last_time = duration
        if error:
            self.errors += 1


# ============================================================================
# METRICS COLLECTOR
# ============================================================================


class MetricsCollector:
    """Thread-safe metrics collection"""

    def __init__(self):
        self._metrics: dict[str, MetricStats] = {}
        self._error_types: dict[str, int] = {}
        self._lock = threading.Lock()
        self._start_time = time.time()

    def record_timing(self, name: str, duration: float, error: bool = False):
        """Record a timing metric"""
        with self._lock:
            if name not in self._metrics:
                self._metrics[name] = MetricStats()
            self._metrics[name].record(duration, error)

    def record_error(self, error_type: str):
        """Record an error occurrence"""
        with self._lock:
            self._error_types[error_type] = self._error_types.get(error_type, 0) + 1

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics as a dictionary"""
        with self._lock:
            uptime = time.time() - self._start_time

            metrics_dict = {}
            for name, stats in self._metrics.items():
                metrics_dict[name] = {
                    "count": stats.count,
                    "total_time": stats.total_time,
                    "avg_time": stats.avg_time,
                    "min_time": stats.min_time if stats.count > 0 else 0,
                    "max_time": stats.max_time,
                    "last_time": stats.last_time,
                    "errors": stats.errors,
                }

            return {
                "uptime_seconds": uptime,
                "metrics": metrics_dict,
                "errors": self._error_types.copy(),
            }

    def reset(self):
        """Reset all metrics"""
        with self._lock:
            self._metrics.clear()
            self._error_types.clear()
            self._start_time = time.time()


_collector = MetricsCollector()

# ============================================================================
# PROMETHEUS SERIES
# ============================================================================

prom_projections = Counter(
    "vargacore_projections_total",
    "Total divisional chart projections",
    ["scheme"],
)

prom_projection_duration = Histogram(
    "vargacore_projection_duration_seconds",
    "Divisional chart projection duration",
    ["scheme"],
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1),
)

prom_projection_errors = Counter(
    "vargacore_projection_errors_total",
    "Total divisional chart projection errors",
    ["error_type"],
)


def track_projection(scheme: str, duration: float):
    """Track a completed projection"""
    _collector.record_timing(f"varga.{scheme}", duration)
    prom_projections.labels(scheme=scheme).inc()
    prom_projection_duration.labels(scheme=scheme).observe(duration)


def track_projection_error(error_type: str, scheme: str = "unknown", duration: float = 0.0):
    """Track a failed projection"""
    _collector.record_timing(f"varga.{scheme}", duration, error=True)
    _collector.record_error(error_type)
    prom_projection_errors.labels(error_type=error_type).inc()


def get_metrics() -> dict[str, Any]:
    """Get in-process metrics snapshot"""
    return _collector.get_metrics()


def reset_metrics():
    """Reset in-process metrics (for testing only)."""
    _collector.reset()
