from __future__ import annotations

import math

import pytest

from prometheus_client import REGISTRY

from vargacore.core.errors import InvalidLongitudeError
from vargacore.core_types import BaseChart
from vargacore.monitoring import MetricsCollector, get_metrics, reset_metrics
from vargacore.projector import project
from vargacore.schemes import build_registry
from vargacore.varga_config import VargaConfig


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_projection_counter(registry):
    before = _sample("vargacore_projections_total", {"scheme": "D27"})
    project(BaseChart(ascendant=0.0, bodies={"Sun": 1.0}), "D27", registry)
    after = _sample("vargacore_projections_total", {"scheme": "D27"})
    assert after == before + 1


def test_error_counter(registry):
    labels = {"error_type": "InvalidLongitudeError"}
    before = _sample("vargacore_projection_errors_total", labels)
    with pytest.raises(InvalidLongitudeError):
        project(BaseChart(ascendant=math.nan), "D9", registry)
    assert _sample("vargacore_projection_errors_total", labels) == before + 1


def test_metrics_disabled():
    quiet = build_registry(VargaConfig(enable_metrics=False))
    before = _sample("vargacore_projections_total", {"scheme": "D45"})
    project(BaseChart(ascendant=0.0), "D45", quiet)
    assert _sample("vargacore_projections_total", {"scheme": "D45"}) == before


def test_in_process_snapshot(registry):
    reset_metrics()
    chart = BaseChart(ascendant=0.0, bodies={"Sun": 1.0})
    project(chart, "D11", registry)
    project(chart, "D11", registry)
    stats = get_metrics()["metrics"]["varga.D11"]
    assert stats["count"] == 2
    assert stats["min_time"] <= stats["avg_time"] <= stats["max_time"]


def test_collector_errors():
    collector = MetricsCollector()
    collector.record_timing("x", 0.5, error=True)
    collector.record_error("UnsupportedSchemeError")
    collector.record_error("UnsupportedSchemeError")
    snapshot = collector.get_metrics()
    assert snapshot["metrics"]["x"]["errors"] == 1
    assert snapshot["errors"] == {"UnsupportedSchemeError": 2}
    collector.reset()
    assert collector.get_metrics()["metrics"] == {}


def test_failed_projection_is_timed_as_error(registry):
    reset_metrics()
    with pytest.raises(InvalidLongitudeError):
        project(BaseChart(ascendant=math.inf), "d16", registry)
    snapshot = get_metrics()
    assert snapshot["metrics"]["varga.D16"]["errors"] == 1
    assert snapshot["errors"] == {"InvalidLongitudeError": 1}
