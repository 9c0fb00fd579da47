"""
Chart projector: applies a varga scheme to every point of a base chart.

The projection is a pure function of the base chart and the read-only
scheme registry. Each point is handled independently, so charts, bodies and
schemes may be projected concurrently without coordination.
"""

from __future__ import annotations

import time

from .core.errors import VargaError
from .core.logging import get_varga_logger
from .core_types import BaseChart, BodyPlacement, DerivedChart, validate_chart
from .monitoring import track_projection, track_projection_error
from .numerics import BOUNDARY_EPSILON, decompose_longitude
from .schemes import SchemeRegistry, VargaScheme, get_registry
from .start_sign import Identity, resolve_sign

__all__ = ["place", "project"]

logger = get_varga_logger("projector")


def place(
    scheme: VargaScheme,
    longitude: float,
    epsilon: float = BOUNDARY_EPSILON,
    body: str | None = None,
) -> BodyPlacement:
    """Varga placement of a single longitude under ``scheme``.

    Args:
        scheme: Resolved scheme definition
        longitude: Ecliptic longitude in degrees (any finite value)
        epsilon: Boundary snap tolerance in degrees
        body: Optional body name for error messages

    Returns:
        BodyPlacement with the varga sign, part index and optional sub-span

    Raises:
        InvalidLongitudeError: If longitude is NaN or infinite
    """
    if isinstance(scheme.strategy, Identity):
        # D1 keeps the natal sign exactly: plain floor, no edge snap
        epsilon = 0.0
    parts = decompose_longitude(longitude, epsilon, body=body)
    part_idx, sub_span = scheme.part_index(parts.degree_in_sign, epsilon)
    sign_idx = resolve_sign(scheme.strategy, parts.sign_index, part_idx)
    return BodyPlacement(sign_index=sign_idx, part_index=part_idx, sub_span=sub_span)


def _project(chart: BaseChart, scheme: VargaScheme, epsilon: float) -> DerivedChart:
    validate_chart(chart)

    ascendant = place(scheme, chart.ascendant, epsilon, body="ascendant")
    midheaven = (
        place(scheme, chart.midheaven, epsilon, body="midheaven")
        if chart.midheaven is not None
        else None
    )
    bodies = {
        body: place(scheme, lon, epsilon, body=body) for body, lon in chart.bodies.items()
    }
    return DerivedChart(
        chart_type=scheme.code,
        ascendant=ascendant,
        bodies=bodies,
        midheaven=midheaven,
    )


def project(
    base_chart: BaseChart,
    scheme_id: object,
    registry: SchemeRegistry | None = None,
) -> DerivedChart:
    """Project a base chart into the divisional chart ``scheme_id``.

    Args:
        base_chart: Natal chart (ascendant, optional midheaven, body longitudes)
        scheme_id: Scheme identifier, e.g. ``"D9"``, ``9``, ``"PROPORTIONAL-249"``
        registry: Scheme registry; defaults to the process-wide one

    Returns:
        A new DerivedChart; the base chart is not modified

    Raises:
        UnsupportedSchemeError: If ``scheme_id`` is not registered
        InvalidLongitudeError: If any longitude is NaN or infinite
    """
    registry = registry if registry is not None else get_registry()
    config = registry.config
    start = time.perf_counter()
    code = str(scheme_id)

    try:
        scheme = registry.get_scheme(scheme_id)
        code = scheme.code
        derived = _project(base_chart, scheme, registry.boundary_epsilon)
    except VargaError as e:
        logger.warning(
            f"Varga projection failed for {scheme_id!r} ({type(e).__name__}): {e}"
        )
        if config.enable_metrics:
            track_projection_error(
                type(e).__name__, code, time.perf_counter() - start
            )
        raise

    duration = time.perf_counter() - start
    if config.enable_metrics:
        track_projection(scheme.code, duration)
    if config.trace_calculations:
        logger.debug(
            f"Projected {len(base_chart.bodies)} bodies into {scheme.code} "
            f"in {duration * 1000:.3f}ms"
        )
    return derived
