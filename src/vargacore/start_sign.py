"""
Start-sign strategies for divisional charts.

Each scheme pairs a subdivision indexer with one of the tagged strategy
variants below. A strategy turns (sign index, part index) into the varga
sign. The set of variants is closed; new divisors are added by configuring
an existing variant, not by adding code paths.

Counting conventions (0-based ordinals, classical parity):
- odd signs are Aries, Gemini, Leo, Libra, Sagittarius, Aquarius (even ordinals)
- movable/fixed/dual repeat every three signs starting at Aries
- fire/earth/air/water repeat every four signs starting at Aries
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, Literal, Union

from numba import njit

from .constants.signs import NUM_SIGNS
from .core.errors import VargaInvariantError

__all__ = [
    "ElementAnchor",
    "FixedGlobalAnchor",
    "Identity",
    "LookupTable",
    "ModalityAnchor",
    "ParityAnchor",
    "ProportionalSequential",
    "StartSignStrategy",
    "resolve_sign",
    "start_sign",
]

Anchor = Literal["sign", "aries"]


@njit(cache=True)
def _is_odd_sign(sign_idx: int) -> bool:
    # Aries (index 0) is an odd sign, so use even indices for odd signs.
    return sign_idx % 2 == 0


@njit(cache=True)
def _parity_start(sign_idx: int, even_offset: int) -> int:
    if _is_odd_sign(sign_idx):
        return sign_idx
    return (sign_idx + even_offset) % 12


@njit(cache=True)
def _modality_start(
    sign_idx: int, movable: int, fixed: int, dual: int, from_sign: bool
) -> int:
    # Movable: Aries(0), Cancer(3), Libra(6), Capricorn(9)
    # Fixed: Taurus(1), Leo(4), Scorpio(7), Aquarius(10)
    # Dual: Gemini(2), Virgo(5), Sagittarius(8), Pisces(11)
    modality = sign_idx % 3
    if modality == 0:
        offset = movable
    elif modality == 1:
        offset = fixed
    else:
        offset = dual

    if from_sign:
        return (sign_idx + offset) % 12
    return offset % 12


@njit(cache=True)
def _fixed_start(sign_idx: int, odd_anchor: int, even_anchor: int) -> int:
    if _is_odd_sign(sign_idx):
        return odd_anchor % 12
    return even_anchor % 12


@njit(cache=True)
def _element_start(sign_idx: int, fire: int, earth: int, air: int, water: int) -> int:
    element = sign_idx % 4
    if element == 0:
        return fire % 12
    if element == 1:
        return earth % 12
    if element == 2:
        return air % 12
    return water % 12


@njit(cache=True)
def _advance(start: int, part_idx: int) -> int:
    return (start + part_idx) % 12


@dataclass(frozen=True)
class Identity:
    """D1: the varga sign is the natal sign."""

    tag: ClassVar[str] = "identity"


@dataclass(frozen=True)
class ParityAnchor:
    """Odd signs count from themselves, even signs from ``offset_for_even`` ahead."""

    offset_for_even: int
    tag: ClassVar[str] = "parity_anchor"


@dataclass(frozen=True)
class ModalityAnchor:
    """Start sign chosen by modality.

    With ``anchor="sign"`` the offsets are added to the natal sign (Navamsa:
    movable +0, fixed +8, dual +4). With ``anchor="aries"`` they are absolute
    start signs (e.g. Aries/Leo/Sagittarius).
    """

    movable: int
    fixed: int
    dual: int
    anchor: Anchor = "sign"
    tag: ClassVar[str] = "modality_anchor"


@dataclass(frozen=True)
class FixedGlobalAnchor:
    """Every odd sign starts at ``odd_anchor``, every even sign at ``even_anchor``."""

    odd_anchor: int
    even_anchor: int
    tag: ClassVar[str] = "fixed_global_anchor"


@dataclass(frozen=True)
class ElementAnchor:
    """Start sign chosen by the natal sign's element (absolute start signs)."""

    fire: int
    earth: int
    air: int
    water: int
    tag: ClassVar[str] = "element_anchor"


@dataclass(frozen=True)
class LookupTable:
    """Per-part sign offsets read from versioned table data.

    ``odd_table[p]`` / ``even_table[p]`` give the offset for part ``p``.
    With ``anchor="sign"`` the result is ``(sign + offset) % 12``; with
    ``anchor="aries"`` the offset is the sign itself.
    """

    odd_table: tuple[int, ...]
    even_table: tuple[int, ...]
    anchor: Anchor = "sign"
    version: str = ""
    tag: ClassVar[str] = "lookup_table"

    def __post_init__(self):
        if not self.odd_table or len(self.odd_table) != len(self.even_table):
            raise VargaInvariantError(
                f"Lookup tables must be non-empty and of equal length, got "
                f"{len(self.odd_table)} odd and {len(self.even_table)} even entries"
            )
        if self.anchor not in ("sign", "aries"):
            raise VargaInvariantError(f"Unknown lookup anchor: {self.anchor!r}")

    @property
    def size(self) -> int:
        return len(self.odd_table)


@dataclass(frozen=True)
class ProportionalSequential:
    """Zone ``i`` maps to the ``i``-th sign from the start sign.

    Odd signs start from themselves; even signs start ``even_offset`` ahead
    (the 9th by default; 0 keeps the plain sequential rule for every sign).
    """

    even_offset: int = 8
    tag: ClassVar[str] = "proportional_sequential"


StartSignStrategy = Union[
    Identity,
    ParityAnchor,
    ModalityAnchor,
    FixedGlobalAnchor,
    ElementAnchor,
    LookupTable,
    ProportionalSequential,
]


def _lookup_sign(strategy: LookupTable, sign_idx: int, part_idx: int) -> int:
    if not (0 <= part_idx < strategy.size):
        raise VargaInvariantError(
            f"Part index {part_idx} outside lookup table of size {strategy.size}"
        )
    table = strategy.odd_table if _is_odd_sign(sign_idx) else strategy.even_table
    base = sign_idx if strategy.anchor == "sign" else 0
    return (base + table[part_idx]) % NUM_SIGNS


_START_FNS: dict[type, Callable[[object, int], int]] = {
    Identity: lambda s, sign_idx: sign_idx,
    ParityAnchor: lambda s, sign_idx: _parity_start(sign_idx, s.offset_for_even),
    ModalityAnchor: lambda s, sign_idx: _modality_start(
        sign_idx, s.movable, s.fixed, s.dual, s.anchor == "sign"
    ),
    FixedGlobalAnchor: lambda s, sign_idx: _fixed_start(
        sign_idx, s.odd_anchor, s.even_anchor
    ),
    ElementAnchor: lambda s, sign_idx: _element_start(
        sign_idx, s.fire, s.earth, s.air, s.water
    ),
    ProportionalSequential: lambda s, sign_idx: _parity_start(sign_idx, s.even_offset),
}


def start_sign(strategy: StartSignStrategy, sign_idx: int) -> int:
    """Sign the part count begins from.

    Lookup tables have no single start sign; for them this returns the sign
    for part 0.
    """
    if isinstance(strategy, LookupTable):
        return _lookup_sign(strategy, sign_idx, 0)
    try:
        fn = _START_FNS[type(strategy)]
    except KeyError:
        raise VargaInvariantError(f"Unknown start-sign strategy: {strategy!r}") from None
    return int(fn(strategy, sign_idx))


def resolve_sign(strategy: StartSignStrategy, sign_idx: int, part_idx: int) -> int:
    """Final varga sign for a part of a natal sign.

    Args:
        strategy: One of the start-sign variants
        sign_idx: Natal sign index (0-11)
        part_idx: Part (or zone) index from the scheme's subdivision indexer

    Returns:
        Varga sign index (0-11)

    Raises:
        VargaInvariantError: On an out-of-range sign or part index
    """
    if not (0 <= sign_idx < NUM_SIGNS):
        raise VargaInvariantError(f"Sign index must be 0-11, got {sign_idx}")
    if part_idx < 0:
        raise VargaInvariantError(f"Part index must be non-negative, got {part_idx}")

    if isinstance(strategy, Identity):
        return sign_idx
    if isinstance(strategy, LookupTable):
        return _lookup_sign(strategy, sign_idx, part_idx)
    return int(_advance(start_sign(strategy, sign_idx), part_idx))
