#!/usr/bin/env python3
"""
Chart data types consumed and produced by the varga projector.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .constants.signs import sign_name
from .numerics import decompose_longitude, ensure_finite

# ============================================================================
# BASE CHART (input)
# ============================================================================


@dataclass(frozen=True)
class BaseChart:
    """Natal chart as sidereal longitudes, supplied by the ephemeris layer

    Longitudes are in degrees; any finite value is accepted and wrapped
    when projected. The body mapping is copied into a read-only view.
    """

    ascendant: float
    bodies: Mapping[str, float] = field(default_factory=dict)
    midheaven: float | None = None

    def __post_init__(self):
        object.__setattr__(self, "bodies", MappingProxyType(dict(self.bodies)))

    def sign_indices(self) -> dict[str, int]:
        """Natal (D1) sign index of every body, floor(longitude / 30)"""
        return {
            body: decompose_longitude(lon, 0.0, body=body).sign_index
            for body, lon in self.bodies.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BaseChart":
        """Create from dictionary

        Accepts ``{"ascendant": .., "midheaven": .., "bodies": {name: lon}}``.
        """
        return cls(
            ascendant=data["ascendant"],
            bodies=dict(data.get("bodies", {})),
            midheaven=data.get("midheaven"),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            "ascendant": self.ascendant,
            "midheaven": self.midheaven,
            "bodies": dict(self.bodies),
        }


# ============================================================================
# DERIVED CHART (output)
# ============================================================================


@dataclass(frozen=True)
class BodyPlacement:
    """Varga placement of one point"""

    sign_index: int  # 0=Aries ... 11=Pisces
    part_index: int  # pada (or zone) within the natal sign
    sub_span: float | None = None  # zone width, proportional schemes only

    @property
    def sign(self) -> str:
        return sign_name(self.sign_index)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        data = {
            "sign": self.sign,
            "sign_index": self.sign_index,
            "part_index": self.part_index,
            "sub_span": self.sub_span,
        }
        # Remove None values for cleaner JSON
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class DerivedChart:
    """Divisional chart produced from a BaseChart"""

    chart_type: str
    ascendant: BodyPlacement
    bodies: Mapping[str, BodyPlacement]
    midheaven: BodyPlacement | None = None

    def __post_init__(self):
        object.__setattr__(self, "bodies", MappingProxyType(dict(self.bodies)))

    @property
    def ascendant_sign(self) -> str:
        return self.ascendant.sign

    @property
    def midheaven_sign(self) -> str | None:
        return self.midheaven.sign if self.midheaven is not None else None

    def sign_of(self, body: str) -> str:
        """Varga sign name of ``body``

        Raises:
            KeyError: If the body is not in the chart
        """
        return self.bodies[body].sign

    def sign_indices(self) -> dict[str, int]:
        return {body: placement.sign_index for body, placement in self.bodies.items()}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            "chart_type": self.chart_type,
            "ascendant": self.ascendant.to_dict(),
            "midheaven": self.midheaven.to_dict() if self.midheaven else None,
            "bodies": {body: p.to_dict() for body, p in self.bodies.items()},
        }


def validate_chart(chart: BaseChart) -> None:
    """Reject non-finite longitudes before any projection work starts.

    Raises:
        InvalidLongitudeError: Naming the first offending point
    """
    ensure_finite(chart.ascendant, "ascendant")
    if chart.midheaven is not None:
        ensure_finite(chart.midheaven, "midheaven")
    for body, lon in chart.bodies.items():
        ensure_finite(lon, body)
