from __future__ import annotations

import pytest

from vargacore import (
    BaseChart,
    EQUAL_249,
    UnsupportedSchemeError,
    describe_scheme,
    list_schemes,
    project_from_longitudes,
    project_many,
    project_shodasavarga,
    varga_pada,
    varga_sign,
    varga_sign_batch,
)
from vargacore.core.errors import VargaInvariantError


def test_list_and_describe(registry):
    codes = list_schemes(registry)
    assert "D30" in codes and EQUAL_249 in codes
    info = describe_scheme("d30", registry)
    assert info["code"] == "D30"
    assert info["name"] == "Trimsamsa"
    assert info["strategy"] == "lookup_table"
    assert info["proportional"] is False
    assert info["rule"]


@pytest.mark.parametrize(
    "longitude,divisor,expected",
    [(10.0, 9, 3), (39.99, 9, 2), (29.999, 60, 59), (360.0, 9, 0), (29.9999999999, 9, 0)],
)
def test_varga_pada(registry, longitude, divisor, expected):
    assert varga_pada(longitude, divisor, registry) == expected


def test_varga_pada_rejects_bad_divisor(registry):
    with pytest.raises(VargaInvariantError):
        varga_pada(10.0, 0, registry)


def test_varga_sign_accepts_any_id_form(registry):
    assert varga_sign(10.1, "D9", registry) == 3
    assert varga_sign(10.1, 9, registry) == 3
    assert varga_sign(10.1, "d9", registry) == 3
    with pytest.raises(UnsupportedSchemeError):
        varga_sign(10.1, "D13", registry)


def test_batch_matches_single_calls(registry):
    longitudes = [0.0, 10.1, 55.5, 183.3, 359.99, -5.0, 725.0]
    batch = varga_sign_batch(longitudes, "D9", registry)
    assert batch == [varga_sign(lon, "D9", registry) for lon in longitudes]
    assert varga_sign_batch([], "D9", registry) == []


def test_project_from_longitudes(registry):
    derived = project_from_longitudes({"Sun": 10.1, "Moon": 55.5}, "D9", registry=registry)
    assert derived.ascendant_sign == "Aries"
    assert derived.midheaven is None
    assert derived.sign_of("Sun") == "Cancer"


def test_project_many(registry):
    chart = BaseChart(ascendant=10.0, bodies={"Sun": 10.1})
    charts = project_many(chart, ["d9", 60, EQUAL_249], registry)
    assert list(charts) == ["D9", "D60", EQUAL_249]
    assert charts["D9"].sign_of("Sun") == "Cancer"


def test_shodasavarga(registry):
    chart = BaseChart(ascendant=10.0, bodies={"Sun": 10.1, "Moon": 55.5}, midheaven=270.0)
    charts = project_shodasavarga(chart, registry)
    assert len(charts) == 16
    assert "D5" not in charts
    assert charts["D1"].sign_of("Moon") == "Taurus"
    assert all(set(c.bodies) == {"Sun", "Moon"} for c in charts.values())


def test_empty_registry_is_not_replaced():
    from vargacore.schemes import SchemeRegistry
    from vargacore.varga_config import VargaConfig

    empty = SchemeRegistry([], config=VargaConfig(enable_metrics=False))
    assert list_schemes(empty) == []
    with pytest.raises(UnsupportedSchemeError):
        varga_sign(10.1, "D9", empty)
    with pytest.raises(UnsupportedSchemeError):
        varga_sign_batch([10.1], "D9", empty)
    with pytest.raises(UnsupportedSchemeError):
        describe_scheme("D9", empty)


@pytest.mark.parametrize(
    "scheme_id,significance",
    [("D1", "Body"), ("D9", "Spouse"), ("D30", "Misfortunes"), ("D60", "Past Life"), ("PROPORTIONAL-249", "Micro Analysis")],
)
def test_describe_includes_significance(registry, scheme_id, significance):
    assert describe_scheme(scheme_id, registry)["significance"] == significance
