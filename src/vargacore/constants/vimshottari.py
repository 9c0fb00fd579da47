"""
Vimshottari dasha constants reused as zone widths by the proportional varga.
"""

from __future__ import annotations

from .signs import SIGN_SPAN

# Dasha lords in cycle order with their periods in years
VIMSHOTTARI_SEQUENCE: tuple[tuple[str, float], ...] = (
    ("Ketu", 7.0),
    ("Venus", 20.0),
    ("Sun", 6.0),
    ("Moon", 10.0),
    ("Mars", 7.0),
    ("Rahu", 18.0),
    ("Jupiter", 16.0),
    ("Saturn", 19.0),
    ("Mercury", 17.0),
)

VIMSHOTTARI_LORDS: tuple[str, ...] = tuple(lord for lord, _ in VIMSHOTTARI_SEQUENCE)
VIMSHOTTARI_YEARS: tuple[float, ...] = tuple(years for _, years in VIMSHOTTARI_SEQUENCE)

# Total years in Vimshottari cycle
VIMSHOTTARI_TOTAL_YEARS = 120.0


def zone_weights(span: float = SIGN_SPAN) -> tuple[float, ...]:
    """Scale the dasha periods onto ``span`` degrees.

    With the default 30° span: Ketu 1.75, Venus 5.0, Sun 1.5, Moon 2.5,
    Mars 1.75, Rahu 4.5, Jupiter 4.0, Saturn 4.75, Mercury 4.25.
    """
    return tuple(years / VIMSHOTTARI_TOTAL_YEARS * span for years in VIMSHOTTARI_YEARS)
