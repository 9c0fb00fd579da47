"""
Configuration for Varga (Divisional Charts) system.

Frozen dataclass configuration ensuring immutability and thread-safety
for varga calculations in production environments.
"""

import os

from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import VargaConfigError

__all__ = ["VargaConfig", "get_varga_config", "reset_config"]

DEFAULT_DEFINITIONS_PATH = Path(__file__).resolve().parent / "data" / "varga_tables.yaml"


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default, cast):
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    try:
        return cast(v.strip())
    except ValueError:
        raise VargaConfigError(f"{name} must be a {cast.__name__}, got {v!r}") from None


@dataclass(frozen=True)
class VargaConfig:
    """Immutable configuration for varga system."""

    # Lookup table data (D2, D3, D4, D30)
    definitions_path: str = field(
        default_factory=lambda: os.environ.get(
            "VARGACORE_VARGA_DEFINITIONS", str(DEFAULT_DEFINITIONS_PATH)
        )
    )

    # Numerical tolerance at sign and part boundaries, degrees
    boundary_epsilon: float = field(
        default_factory=lambda: _env_number("VARGACORE_BOUNDARY_EPSILON", 1e-9, float)
    )

    # Offset applied to even signs by the proportional (dasha-zone) scheme.
    # 8 = count even signs from the 9th; 0 = plain sequential counting for every sign.
    proportional_even_offset: int = field(
        default_factory=lambda: _env_number("VARGACORE_PROPORTIONAL_EVEN_OFFSET", 8, int)
    )

    # Observability
    enable_metrics: bool = field(
        default_factory=lambda: _env_bool("VARGACORE_METRICS", True)
    )
    trace_calculations: bool = False

    # Classical names, keyed by divisor
    classical_names: dict[int, str] = field(
        default_factory=lambda: {
            1: "Rashi",
            2: "Hora",
            3: "Drekkana",
            4: "Chaturthamsa",
            5: "Panchamsa",
            6: "Shashthamsa",
            7: "Saptamsa",
            8: "Ashtamsa",
            9: "Navamsa",
            10: "Dasamsa",
            11: "Rudramsa",
            12: "Dwadasamsa",
            16: "Shodasamsa",
            20: "Vimsamsa",
            24: "Chaturvimsamsa",
            27: "Saptavimsamsa",
            30: "Trimsamsa",
            40: "Khavedamsa",
            45: "Akshavedamsa",
            60: "Shashtiamsa",
        }
    )

    # Life area each chart is read for, keyed by divisor
    significance: dict[int, str] = field(
        default_factory=lambda: {
            1: "Body",
            2: "Wealth",
            3: "Siblings",
            4: "Assets",
            5: "Fame",
            6: "Health",
            7: "Children",
            8: "Longevity",
            9: "Spouse",
            10: "Career",
            11: "Gains",
            12: "Parents",
            16: "Vehicles",
            20: "Spirituality",
            24: "Education",
            27: "Strength",
            30: "Misfortunes",
            40: "Auspiciousness",
            45: "Character",
            60: "Past Life",
            249: "Micro Analysis",
        }
    )

    def __post_init__(self):
        if not (0.0 <= self.boundary_epsilon < 1e-3):
            raise VargaConfigError(
                f"boundary_epsilon must be in [0, 0.001), got {self.boundary_epsilon}"
            )

    def get_standard_vargas(self) -> list[int]:
        """Get list of standard divisional chart numbers.

        Returns:
            List of divisors with a classical scheme
        """
        return sorted(self.classical_names.keys())

    def get_shodasavarga_divisors(self) -> list[int]:
        """Get the 16 divisors for Shodasavarga.

        Returns:
            List of 16 standard divisors
        """
        return [1, 2, 3, 4, 7, 9, 10, 12, 16, 20, 24, 27, 30, 40, 45, 60]

    def get_classical_name(self, divisor: int) -> str:
        return self.classical_names.get(divisor, f"D{divisor}")

    def get_significance(self, divisor: int) -> str:
        return self.significance.get(divisor, "")


# Singleton instance
_config_instance: VargaConfig | None = None


def get_varga_config() -> VargaConfig:
    """Get singleton varga configuration instance.

    Returns:
        Frozen VargaConfig instance
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = VargaConfig()

    return _config_instance


def reset_config():
    """Reset configuration (for testing only)."""
    global _config_instance
    _config_instance = None
