"""
Longitude decomposition helpers.

Turns an absolute ecliptic longitude (any finite real) into a sign ordinal
and the degrees travelled within that sign. The arithmetic kernels are
compiled with Numba; the Python wrappers own input validation.
"""

from __future__ import annotations

import math

from dataclasses import dataclass

from numba import njit

from .core.errors import InvalidLongitudeError
from .constants.signs import SIGNS, Sign

__all__ = [
    "BOUNDARY_EPSILON",
    "LongitudeParts",
    "decompose_longitude",
    "ensure_finite",
    "normalize_angle",
]

# Points closer than this (degrees) to the upper edge of a sign or part are
# treated as lying on the boundary itself
BOUNDARY_EPSILON = 1e-9


@njit(cache=True)
def _normalize_longitude(longitude: float) -> float:
    """Normalize longitude to [0, 360) range."""
    lon = longitude % 360.0
    if lon < 0.0:
        lon += 360.0
    # -1e-20 % 360.0 rounds to exactly 360.0
    if lon >= 360.0:
        lon -= 360.0
    return lon


@njit(cache=True)
def _decompose(longitude: float, epsilon: float) -> tuple[int, float]:
    """Split a longitude into (sign index, degree in sign).

    Args:
        longitude: Ecliptic longitude in degrees (finite)
        epsilon: Snap tolerance in degrees at the upper sign edge

    Returns:
        Sign index (0-11) and degree within sign in [0, 30)
    """
    lon = _normalize_longitude(longitude)
    sign_idx = int(lon // 30.0)
    within_sign = lon - sign_idx * 30.0

    if 30.0 - within_sign < epsilon:
        sign_idx += 1
        within_sign = 0.0
    if within_sign < 0.0:
        within_sign = 0.0

    return sign_idx % 12, within_sign


def ensure_finite(longitude: float, body: str | None = None) -> float:
    """Coerce to float and reject NaN/infinity.

    Raises:
        InvalidLongitudeError: If the value is not a finite number
    """
    try:
        value = float(longitude)
    except (TypeError, ValueError):
        raise InvalidLongitudeError(longitude, body) from None
    if not math.isfinite(value):
        raise InvalidLongitudeError(value, body)
    return value


def normalize_angle(deg: float) -> float:
    """Normalize an angle in degrees to [0, 360).

    Raises:
        InvalidLongitudeError: On non-finite input
    """
    return _normalize_longitude(ensure_finite(deg))


@dataclass(frozen=True)
class LongitudeParts:
    """A longitude broken down into its sign and in-sign position"""

    longitude: float  # normalized, [0, 360)
    sign_index: int  # 0=Aries ... 11=Pisces
    degree_in_sign: float  # [0, 30)

    @property
    def sign(self) -> Sign:
        return SIGNS[self.sign_index]


def decompose_longitude(
    longitude: float, epsilon: float = BOUNDARY_EPSILON, body: str | None = None
) -> LongitudeParts:
    """Decompose an absolute longitude into sign and degree-in-sign.

    Args:
        longitude: Ecliptic longitude in degrees; negative or >= 360 is wrapped
        epsilon: Boundary snap tolerance in degrees
        body: Optional body name, used only in error messages

    Returns:
        LongitudeParts with sign_index in [0, 11] and degree_in_sign in [0, 30)

    Raises:
        InvalidLongitudeError: If longitude is NaN or infinite
    """
    value = ensure_finite(longitude, body)
    sign_idx, within_sign = _decompose(value, float(epsilon))
    normalized = sign_idx * 30.0 + within_sign
    return LongitudeParts(
        longitude=normalized, sign_index=int(sign_idx), degree_in_sign=float(within_sign)
    )
