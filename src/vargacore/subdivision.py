"""
Subdivision indexers: which part of a sign a degree falls into.

Two modes are supported:
- equal width: the sign is cut into ``divisor`` parts of ``30 / divisor``
- proportional: the sign is cut into unequal zones whose widths are the
  Vimshottari dasha periods scaled onto 30°
"""

from __future__ import annotations

import math

from dataclasses import dataclass, field

import numpy as np

from numba import njit

from .constants.signs import SIGN_SPAN
from .constants.vimshottari import VIMSHOTTARI_LORDS, zone_weights
from .core.errors import VargaInvariantError
from .numerics import BOUNDARY_EPSILON

__all__ = [
    "ProportionalZones",
    "ZoneHit",
    "default_dasha_zones",
    "equal_part_index",
]

# Zone widths must cover the sign to within this tolerance (degrees)
ZONE_SUM_TOLERANCE = 1e-6


@njit(cache=True)
def _equal_pada(within_sign: float, divisor: int, epsilon: float) -> int:
    """Calculate pada (segment) index within a sign.

    Multiplies before dividing so exact boundaries such as 10° at D9 give an
    exact quotient, then snaps values within ``epsilon`` degrees below the
    next boundary onto it.
    """
    q = within_sign * divisor / 30.0
    pada_idx = int(math.floor(q))

    if (pada_idx + 1) - q < epsilon * divisor / 30.0:
        pada_idx += 1

    # Clamp to valid range (handles edge case at 30.0)
    if pada_idx >= divisor:
        pada_idx = divisor - 1
    if pada_idx < 0:
        pada_idx = 0

    return pada_idx


@njit(cache=True)
def _zone_index(within_sign: float, upper_bounds: np.ndarray, epsilon: float) -> int:
    """Smallest zone whose cumulative upper bound lies above ``within_sign``."""
    n = upper_bounds.shape[0]
    for i in range(n):
        if within_sign < upper_bounds[i] - epsilon:
            return i
    return n - 1


def _check_degree(degree_in_sign: float) -> None:
    if not (0.0 <= degree_in_sign <= SIGN_SPAN):
        raise VargaInvariantError(
            f"degree_in_sign must lie in [0, 30], got {degree_in_sign!r}"
        )


def equal_part_index(
    degree_in_sign: float, divisor: int, epsilon: float = BOUNDARY_EPSILON
) -> int:
    """Part index for an equal-width division of a sign.

    Args:
        degree_in_sign: Degrees within the sign, [0, 30]
        divisor: Number of equal parts (D)
        epsilon: Boundary snap tolerance in degrees

    Returns:
        Part index in [0, divisor - 1]

    Raises:
        VargaInvariantError: If divisor is not a positive integer or the
            degree lies outside the sign
    """
    if isinstance(divisor, bool) or not isinstance(divisor, int) or divisor < 1:
        raise VargaInvariantError(f"Divisor must be a positive integer, got {divisor!r}")
    _check_degree(degree_in_sign)
    return int(_equal_pada(float(degree_in_sign), divisor, float(epsilon)))


@dataclass(frozen=True)
class ZoneHit:
    """The proportional zone a degree falls into"""

    index: int
    lord: str
    start: float  # lower bound within the sign, degrees
    span: float  # zone width, degrees


@dataclass(frozen=True)
class ProportionalZones:
    """Unequal zones covering one sign, in fixed order."""

    lords: tuple[str, ...]
    weights: tuple[float, ...]
    upper_bounds: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.lords) != len(self.weights) or not self.weights:
            raise VargaInvariantError(
                f"Zone table needs one weight per lord, got {len(self.lords)} "
                f"lords and {len(self.weights)} weights"
            )
        if any(w <= 0.0 for w in self.weights):
            raise VargaInvariantError(f"Zone weights must be positive: {self.weights}")
        total = math.fsum(self.weights)
        if abs(total - SIGN_SPAN) > ZONE_SUM_TOLERANCE:
            raise VargaInvariantError(
                f"Zone weights must sum to {SIGN_SPAN}°, got {total!r}"
            )
        bounds = np.cumsum(np.asarray(self.weights, dtype=np.float64))
        # The last bound is the sign edge exactly
        bounds[-1] = SIGN_SPAN
        bounds.setflags(write=False)
        object.__setattr__(self, "upper_bounds", bounds)

    def __len__(self) -> int:
        return len(self.weights)

    @property
    def total(self) -> float:
        return math.fsum(self.weights)

    def locate(self, degree_in_sign: float, epsilon: float = BOUNDARY_EPSILON) -> ZoneHit:
        """Find the zone containing ``degree_in_sign``.

        Raises:
            VargaInvariantError: If the degree lies outside the sign
        """
        _check_degree(degree_in_sign)
        idx = int(_zone_index(float(degree_in_sign), self.upper_bounds, float(epsilon)))
        start = 0.0 if idx == 0 else float(self.upper_bounds[idx - 1])
        return ZoneHit(
            index=idx, lord=self.lords[idx], start=start, span=self.weights[idx]
        )


def default_dasha_zones() -> ProportionalZones:
    """The nine Vimshottari zones (Ketu ... Mercury) scaled to 30°."""
    return ProportionalZones(lords=VIMSHOTTARI_LORDS, weights=zone_weights())
