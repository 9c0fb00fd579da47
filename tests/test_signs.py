from __future__ import annotations

import pytest

from vargacore.constants.signs import (
    SIGN_NAMES,
    SIGNS,
    Element,
    Modality,
    sign_by_name,
    sign_name,
)
from vargacore.constants.vimshottari import VIMSHOTTARI_LORDS, zone_weights


def test_twelve_signs_in_cyclic_order():
    assert len(SIGNS) == 12
    assert [s.index for s in SIGNS] == list(range(12))
    assert SIGNS[0].name == "Aries"
    assert SIGNS[11].name == "Pisces"
    assert tuple(s.name for s in SIGNS) == SIGN_NAMES


def test_parity_uses_classical_numbering():
    odd = [s.name for s in SIGNS if s.is_odd]
    assert odd == ["Aries", "Gemini", "Leo", "Libra", "Sagittarius", "Aquarius"]
    assert SIGNS[1].parity == "even"


def test_modality_and_element_groups():
    movable = {s.name for s in SIGNS if s.modality is Modality.MOVABLE}
    assert movable == {"Aries", "Cancer", "Libra", "Capricorn"}
    fixed = {s.name for s in SIGNS if s.modality is Modality.FIXED}
    assert fixed == {"Taurus", "Leo", "Scorpio", "Aquarius"}
    water = {s.name for s in SIGNS if s.element is Element.WATER}
    assert water == {"Cancer", "Scorpio", "Pisces"}


def test_sign_lookup_helpers():
    assert sign_name(13) == "Taurus"
    assert sign_by_name(" libra ").index == 6
    with pytest.raises(KeyError):
        sign_by_name("Ophiuchus")


def test_dasha_zone_weights():
    weights = zone_weights()
    assert VIMSHOTTARI_LORDS[0] == "Ketu"
    assert VIMSHOTTARI_LORDS[-1] == "Mercury"
    assert weights == pytest.approx((1.75, 5.0, 1.5, 2.5, 1.75, 4.5, 4.0, 4.75, 4.25))
    assert sum(weights) == pytest.approx(30.0, abs=1e-6)
