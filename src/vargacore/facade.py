"""
Convenience entry points over the scheme registry and projector.

These are the calls higher-level services (strength, dasha, reporting) use
when they only hold longitudes, or need several divisional charts at once.
"""

from __future__ import annotations

import logging

from collections.abc import Iterable, Mapping

from .core_types import BaseChart, DerivedChart
from .numerics import decompose_longitude
from .projector import place, project
from .schemes import SchemeRegistry, get_registry
from .subdivision import equal_part_index

__all__ = [
    "describe_scheme",
    "list_schemes",
    "project_from_longitudes",
    "project_many",
    "project_shodasavarga",
    "varga_pada",
    "varga_sign",
    "varga_sign_batch",
]

logger = logging.getLogger(__name__)


def list_schemes(registry: SchemeRegistry | None = None) -> list[str]:
    """Get list of available varga schemes.

    Returns:
        Scheme codes ordered by divisor
    """
    registry = registry if registry is not None else get_registry()
    return registry.list_schemes()


def describe_scheme(scheme_id: object, registry: SchemeRegistry | None = None) -> dict:
    """Code, name, divisor, strategy tag, rule text and significance of a scheme."""
    registry = registry if registry is not None else get_registry()
    return registry.get_scheme(scheme_id).describe()


def varga_pada(longitude: float, divisor: int, registry: SchemeRegistry | None = None) -> int:
    """Get the pada (segment) index within a sign.

    Args:
        longitude: Ecliptic longitude in degrees
        divisor: Number of equal divisions

    Returns:
        Pada index (0 to divisor-1)
    """
    registry = registry if registry is not None else get_registry()
    epsilon = registry.boundary_epsilon
    parts = decompose_longitude(longitude, epsilon)
    return equal_part_index(parts.degree_in_sign, divisor, epsilon)


def varga_sign(
    longitude: float, scheme_id: object, registry: SchemeRegistry | None = None
) -> int:
    """Calculate varga sign for a given longitude.

    Args:
        longitude: Ecliptic longitude in degrees
        scheme_id: Scheme identifier (``"D9"``, ``9``, ``"EQUAL-249"`` ...)

    Returns:
        Varga sign index (0=Aries to 11=Pisces)

    Raises:
        UnsupportedSchemeError: If scheme is not registered
        InvalidLongitudeError: If longitude is not finite
    """
    registry = registry if registry is not None else get_registry()
    scheme = registry.get_scheme(scheme_id)
    return place(scheme, longitude, registry.boundary_epsilon).sign_index


def varga_sign_batch(
    longitudes: Iterable[float],
    scheme_id: object,
    registry: SchemeRegistry | None = None,
) -> list[int]:
    """Calculate varga signs for multiple longitudes.

    Args:
        longitudes: Iterable of ecliptic longitudes
        scheme_id: Scheme identifier

    Returns:
        List of varga sign indices, in input order
    """
    registry = registry if registry is not None else get_registry()
    scheme = registry.get_scheme(scheme_id)
    epsilon = registry.boundary_epsilon
    return [place(scheme, lon, epsilon).sign_index for lon in longitudes]


def project_from_longitudes(
    longitudes: Mapping[str, float],
    scheme_id: object,
    ascendant: float = 0.0,
    midheaven: float | None = None,
    registry: SchemeRegistry | None = None,
) -> DerivedChart:
    """Project a chart given only body longitudes (ascendant defaults to 0° Aries)."""
    chart = BaseChart(ascendant=ascendant, bodies=longitudes, midheaven=midheaven)
    return project(chart, scheme_id, registry)


def project_many(
    base_chart: BaseChart,
    scheme_ids: Iterable[object],
    registry: SchemeRegistry | None = None,
) -> dict[str, DerivedChart]:
    """Project one chart into several divisional charts.

    Returns:
        Dictionary of scheme code -> DerivedChart
    """
    registry = registry if registry is not None else get_registry()
    results = {}
    for scheme_id in scheme_ids:
        derived = project(base_chart, scheme_id, registry)
        results[derived.chart_type] = derived
    return results


def project_shodasavarga(
    base_chart: BaseChart, registry: SchemeRegistry | None = None
) -> dict[str, DerivedChart]:
    """Calculate all 16 Shodasavarga divisional charts."""
    registry = registry if registry is not None else get_registry()
    divisors = registry.config.get_shodasavarga_divisors()
    logger.debug(f"Projecting shodasavarga: {divisors}")
    return project_many(base_chart, divisors, registry)
