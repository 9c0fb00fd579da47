"""
Zodiac sign metadata (rasi table).

Ordinals are 0-based (Aries=0 ... Pisces=11). Parity follows the classical
1-based numbering, so Aries (ordinal 0) is an odd sign.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Element",
    "Modality",
    "NUM_SIGNS",
    "SIGN_NAMES",
    "SIGN_SPAN",
    "SIGNS",
    "Sign",
    "sign_by_name",
    "sign_name",
]

NUM_SIGNS = 12
SIGN_SPAN = 30.0  # degrees per sign


class Element(Enum):
    FIRE = "fire"
    EARTH = "earth"
    AIR = "air"
    WATER = "water"


class Modality(Enum):
    MOVABLE = "movable"  # chara
    FIXED = "fixed"  # sthira
    DUAL = "dual"  # dwiswabhava


_ELEMENT_CYCLE = (Element.FIRE, Element.EARTH, Element.AIR, Element.WATER)
_MODALITY_CYCLE = (Modality.MOVABLE, Modality.FIXED, Modality.DUAL)


@dataclass(frozen=True)
class Sign:
    """Static attributes of one zodiac sign"""

    index: int
    name: str
    element: Element
    modality: Modality

    @property
    def number(self) -> int:
        """Classical 1-based sign number"""
        return self.index + 1

    @property
    def is_odd(self) -> bool:
        return self.number % 2 == 1

    @property
    def parity(self) -> str:
        return "odd" if self.is_odd else "even"


SIGN_NAMES: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

SIGNS: tuple[Sign, ...] = tuple(
    Sign(
        index=i,
        name=name,
        element=_ELEMENT_CYCLE[i % 4],
        modality=_MODALITY_CYCLE[i % 3],
    )
    for i, name in enumerate(SIGN_NAMES)
)

_BY_NAME = {s.name.lower(): s for s in SIGNS}


def sign_name(index: int) -> str:
    """Sign name for a 0-based ordinal (wrapped mod 12)."""
    return SIGN_NAMES[index % NUM_SIGNS]


def sign_by_name(name: str) -> Sign:
    """Look up a sign by (case-insensitive) name.

    Raises:
        KeyError: If the name is not one of the twelve signs
    """
    try:
        return _BY_NAME[name.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown sign name: {name!r}") from None
