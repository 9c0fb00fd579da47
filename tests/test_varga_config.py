from __future__ import annotations

import pytest

from vargacore.core.errors import VargaConfigError
from vargacore.facade import varga_sign
from vargacore.schemes import PROPORTIONAL_249, build_registry, get_registry
from vargacore.varga_config import DEFAULT_DEFINITIONS_PATH, VargaConfig, get_varga_config


def test_defaults(monkeypatch):
    for name in (
        "VARGACORE_VARGA_DEFINITIONS",
        "VARGACORE_BOUNDARY_EPSILON",
        "VARGACORE_PROPORTIONAL_EVEN_OFFSET",
        "VARGACORE_METRICS",
    ):
        monkeypatch.delenv(name, raising=False)
    config = VargaConfig()
    assert config.definitions_path == str(DEFAULT_DEFINITIONS_PATH)
    assert config.boundary_epsilon == 1e-9
    assert config.proportional_even_offset == 8
    assert config.enable_metrics is True
    assert config.trace_calculations is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("VARGACORE_BOUNDARY_EPSILON", "1e-7")
    monkeypatch.setenv("VARGACORE_PROPORTIONAL_EVEN_OFFSET", "0")
    monkeypatch.setenv("VARGACORE_METRICS", "off")
    config = VargaConfig()
    assert config.boundary_epsilon == 1e-7
    assert config.proportional_even_offset == 0
    assert config.enable_metrics is False


def test_config_is_frozen():
    config = VargaConfig()
    with pytest.raises(AttributeError):
        config.boundary_epsilon = 0.1


@pytest.mark.parametrize(
    "name,value",
    [
        ("VARGACORE_BOUNDARY_EPSILON", "tiny"),
        ("VARGACORE_PROPORTIONAL_EVEN_OFFSET", "8.5"),
    ],
)
def test_bad_env_value(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(VargaConfigError, match=name):
        VargaConfig()


@pytest.mark.parametrize("epsilon", [-1e-9, 0.01])
def test_epsilon_out_of_range(epsilon):
    with pytest.raises(VargaConfigError):
        VargaConfig(boundary_epsilon=epsilon)


def test_shodasavarga_divisors_are_registered(registry):
    divisors = registry.config.get_shodasavarga_divisors()
    assert len(divisors) == 16
    assert all(d in registry for d in divisors)


def test_classical_names():
    config = VargaConfig()
    assert config.get_classical_name(9) == "Navamsa"
    assert config.get_classical_name(13) == "D13"
    assert 60 in config.get_standard_vargas()


def test_proportional_even_offset_changes_even_signs(registry):
    plain = build_registry(VargaConfig(proportional_even_offset=0))
    ninth = registry  # default config counts even signs from the 9th

    # Taurus 0.5 lies in the first (Ketu) zone
    assert varga_sign(30.5, PROPORTIONAL_249, plain) == 1  # Taurus
    assert varga_sign(30.5, PROPORTIONAL_249, ninth) == 9  # Capricorn
    # Odd signs are unaffected
    assert varga_sign(0.5, PROPORTIONAL_249, ninth) == 0


def test_singletons_follow_environment(monkeypatch, fresh_singletons):
    monkeypatch.setenv("VARGACORE_PROPORTIONAL_EVEN_OFFSET", "0")
    assert get_varga_config().proportional_even_offset == 0
    assert get_registry().config is get_varga_config()
    assert varga_sign(30.5, PROPORTIONAL_249) == 1
