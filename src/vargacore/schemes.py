"""
Varga scheme registry.

Maps a scheme identifier (``D1`` ... ``D60``, ``EQUAL-249``,
``PROPORTIONAL-249``) to the subdivision rule and start-sign strategy that
define it. The registry is built once per configuration and is read-only
afterwards, so it can be shared freely between threads.
"""

from __future__ import annotations

import logging
import threading

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .constants.signs import SIGN_SPAN
from .core.errors import UnsupportedSchemeError, VargaConfigError, VargaInvariantError
from .numerics import BOUNDARY_EPSILON
from .start_sign import (
    ElementAnchor,
    FixedGlobalAnchor,
    Identity,
    LookupTable,
    ModalityAnchor,
    ParityAnchor,
    ProportionalSequential,
    StartSignStrategy,
)
from .subdivision import ProportionalZones, default_dasha_zones, equal_part_index
from .varga_config import VargaConfig, get_varga_config
from .varga_tables import load_tables

__all__ = [
    "EQUAL_249",
    "PROPORTIONAL_249",
    "SchemeRegistry",
    "VargaScheme",
    "build_registry",
    "get_registry",
    "normalize_scheme_id",
    "reset_registry",
]

logger = logging.getLogger(__name__)

EQUAL_249 = "EQUAL-249"
PROPORTIONAL_249 = "PROPORTIONAL-249"

# Lookup-table schemes that must be present in the definitions file
REQUIRED_TABLES = ("D2", "D3", "D4", "D30")


@dataclass(frozen=True)
class VargaScheme:
    """A divisional chart definition: how to cut a sign and where to count from."""

    code: str
    name: str
    divisor: int  # parts per sign (zones for proportional schemes)
    strategy: StartSignStrategy
    rule: str = ""
    zones: ProportionalZones | None = None
    significance: str = ""

    def __post_init__(self):
        if self.divisor < 1:
            raise VargaInvariantError(f"{self.code}: divisor must be >= 1")
        if isinstance(self.strategy, Identity) and self.divisor != 1:
            raise VargaInvariantError(f"{self.code}: identity strategy requires divisor 1")
        if isinstance(self.strategy, LookupTable) and self.strategy.size != self.divisor:
            raise VargaInvariantError(
                f"{self.code}: lookup table has {self.strategy.size} entries, "
                f"expected {self.divisor}"
            )
        if isinstance(self.strategy, ProportionalSequential):
            if self.zones is None or len(self.zones) != self.divisor:
                raise VargaInvariantError(
                    f"{self.code}: proportional strategy needs {self.divisor} zones"
                )
        elif self.zones is not None:
            raise VargaInvariantError(f"{self.code}: zones given for an equal-width scheme")

    @property
    def proportional(self) -> bool:
        return self.zones is not None

    @property
    def span(self) -> float | None:
        """Width of each part for equal-width schemes, in degrees"""
        return None if self.proportional else SIGN_SPAN / self.divisor

    @property
    def strategy_tag(self) -> str:
        return self.strategy.tag

    def part_index(
        self, degree_in_sign: float, epsilon: float = BOUNDARY_EPSILON
    ) -> tuple[int, float | None]:
        """Part index for a degree within a sign, plus the sub-span if proportional."""
        if self.zones is not None:
            hit = self.zones.locate(degree_in_sign, epsilon)
            return hit.index, hit.span
        return equal_part_index(degree_in_sign, self.divisor, epsilon), None

    def describe(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "divisor": self.divisor,
            "strategy": self.strategy_tag,
            "proportional": self.proportional,
            "rule": self.rule,
            "significance": self.significance,
        }


def normalize_scheme_id(scheme_id: object) -> str:
    """Canonical form of a scheme identifier.

    ``9``, ``"9"``, ``"d9"`` and ``" D9 "`` all map to ``"D9"``.
    """
    if isinstance(scheme_id, bool):
        raise UnsupportedSchemeError(scheme_id)
    if isinstance(scheme_id, int):
        return f"D{scheme_id}"
    if not isinstance(scheme_id, str):
        raise UnsupportedSchemeError(scheme_id)
    key = scheme_id.strip().upper().replace("_", "-")
    if key.isdigit():
        return f"D{int(key)}"
    return key


class SchemeRegistry(Mapping):
    """Read-only mapping of scheme code -> VargaScheme"""

    def __init__(
        self,
        schemes: Iterable[VargaScheme],
        config: VargaConfig,
        table_version: str = "",
    ):
        table: dict[str, VargaScheme] = {}
        for scheme in schemes:
            if scheme.code in table:
                raise VargaInvariantError(f"Duplicate varga scheme: {scheme.code}")
            table[scheme.code] = scheme
        self._schemes = MappingProxyType(table)
        self.config = config
        self.table_version = table_version

    @property
    def boundary_epsilon(self) -> float:
        return self.config.boundary_epsilon

    def __getitem__(self, scheme_id: object) -> VargaScheme:
        return self.get_scheme(scheme_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemes)

    def __len__(self) -> int:
        return len(self._schemes)

    def __contains__(self, scheme_id: object) -> bool:
        try:
            return normalize_scheme_id(scheme_id) in self._schemes
        except UnsupportedSchemeError:
            return False

    def get_scheme(self, scheme_id: object) -> VargaScheme:
        """Look up a scheme.

        Raises:
            UnsupportedSchemeError: If the identifier is not registered
        """
        try:
            key = normalize_scheme_id(scheme_id)
        except UnsupportedSchemeError:
            raise UnsupportedSchemeError(scheme_id, self.list_schemes()) from None
        scheme = self._schemes.get(key)
        if scheme is None:
            raise UnsupportedSchemeError(scheme_id, self.list_schemes())
        return scheme

    def list_schemes(self) -> list[str]:
        """Scheme codes ordered by divisor, then code."""
        return [
            s.code
            for s in sorted(self._schemes.values(), key=lambda s: (s.divisor, s.code))
        ]


def _arithmetic_schemes(config: VargaConfig) -> list[VargaScheme]:
    """Schemes whose start sign follows a counting rule."""
    name = config.get_classical_name

    # Movable from Aries, fixed from Leo, dual from Sagittarius
    aries_leo_sag = ModalityAnchor(movable=0, fixed=4, dual=8, anchor="aries")
    odd_aries_even_libra = FixedGlobalAnchor(odd_anchor=0, even_anchor=6)

    entries: list[tuple[int, StartSignStrategy, str]] = [
        (1, Identity(), "Base rasi positions use the natal sign without subdivision."),
        (5, odd_aries_even_libra, "Odd signs count from Aries; even signs from Libra."),
        (6, odd_aries_even_libra, "Odd signs count from Aries; even signs from Libra."),
        (7, ParityAnchor(6), "Odd signs count from the natal sign; even signs from the 7th."),
        (8, aries_leo_sag, "Movable signs count from Aries, fixed from Leo, dual from Sagittarius."),
        (
            9,
            ModalityAnchor(movable=0, fixed=8, dual=4),
            "Movable signs count from the natal sign, fixed from the 9th, dual from the 5th.",
        ),
        (10, ParityAnchor(8), "Odd signs count from the natal sign; even signs from the 9th."),
        (11, aries_leo_sag, "Movable signs count from Aries, fixed from Leo, dual from Sagittarius."),
        (12, ParityAnchor(0), "Every sign counts onward from itself."),
        (16, aries_leo_sag, "Movable signs count from Aries, fixed from Leo, dual from Sagittarius."),
        (
            20,
            ModalityAnchor(movable=0, fixed=8, dual=4, anchor="aries"),
            "Movable signs count from Aries, fixed from Sagittarius, dual from Leo.",
        ),
        (24, FixedGlobalAnchor(odd_anchor=4, even_anchor=3), "Odd signs count from Leo; even signs from Cancer."),
        (
            27,
            ElementAnchor(fire=0, earth=3, air=6, water=9),
            "Fire signs count from Aries, earth from Cancer, air from Libra, water from Capricorn.",
        ),
        (40, odd_aries_even_libra, "Odd signs count from Aries; even signs from Libra."),
        (45, aries_leo_sag, "Movable signs count from Aries, fixed from Leo, dual from Sagittarius."),
        (60, ParityAnchor(8), "Odd signs count from the natal sign; even signs from the 9th."),
    ]

    schemes = [
        VargaScheme(
            code=f"D{divisor}",
            name=name(divisor),
            divisor=divisor,
            strategy=strategy,
            rule=rule,
            significance=config.get_significance(divisor),
        )
        for divisor, strategy, rule in entries
    ]

    schemes.append(
        VargaScheme(
            code=EQUAL_249,
            name="249 Subdivisions (equal)",
            divisor=249,
            strategy=ParityAnchor(8),
            rule="249 equal parts; odd signs count from the natal sign, even signs from the 9th.",
            significance=config.get_significance(249),
        )
    )
    schemes.append(
        VargaScheme(
            code=PROPORTIONAL_249,
            name="249 Subdivisions (dasha proportional)",
            divisor=9,
            strategy=ProportionalSequential(even_offset=config.proportional_even_offset),
            rule=(
                "Nine zones sized by Vimshottari periods (Ketu ... Mercury); "
                "zone i maps to the i-th sign from the start sign."
            ),
            zones=default_dasha_zones(),
            significance=config.get_significance(249),
        )
    )
    return schemes


def build_registry(config: VargaConfig | None = None) -> SchemeRegistry:
    """Build a registry from configuration and the lookup-table definitions.

    Raises:
        VargaConfigError: If the table data is missing, invalid, or lacks a
            required table
    """
    config = config or get_varga_config()
    tables = load_tables(config.definitions_path)

    missing = [code for code in REQUIRED_TABLES if tables.get(code) is None]
    if missing:
        raise VargaConfigError(
            f"{tables.source} is missing required tables: {', '.join(missing)}"
        )

    schemes = _arithmetic_schemes(config)
    for definition in tables.definitions:
        schemes.append(
            VargaScheme(
                code=definition.code,
                name=definition.name,
                divisor=definition.divisor,
                strategy=definition.strategy,
                rule=definition.rule,
                significance=config.get_significance(definition.divisor),
            )
        )

    registry = SchemeRegistry(schemes, config=config, table_version=tables.version)
    logger.info(
        f"Initialized {len(registry)} varga schemes (tables {tables.version})"
    )
    return registry


_registry_instance: SchemeRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> SchemeRegistry:
    """Process-wide registry, built on first use from ``get_varga_config()``."""
    global _registry_instance

    if _registry_instance is None:
        with _registry_lock:
            if _registry_instance is None:
                _registry_instance = build_registry(get_varga_config())

    return _registry_instance


def reset_registry():
    """Drop the process-wide registry (for testing only)."""
    global _registry_instance
    with _registry_lock:
        _registry_instance = None
