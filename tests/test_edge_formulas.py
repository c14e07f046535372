"""
Formula catalog tests — edge meterage per operation code.

Tests:
1-4.   Fixed formula coefficients (every code)
5-7.   Circle / manual codes
8-11.  Registry + legacy aliases
12-14. Operation descriptors
"""

from decimal import Decimal

import pytest

from glasspos.calculators import edge_formulas
from glasspos.calculators.operations import (
    OperationCode,
    OperationDescriptor,
    OperationFamily,
    describe_operation,
    list_operations,
)
from glasspos.calculators.registry import (
    FORMULA_REGISTRY,
    finishing_meters,
    get_formula,
    has_formula,
    list_formulas,
)
from glasspos.exceptions import InvalidDimensions, MissingDiameter, UnknownOperation

SIZES = [
    (Decimal("1"), Decimal("0.5")),
    (Decimal("2.45"), Decimal("1.2")),
    (Decimal("0.001"), Decimal("0.001")),
    (Decimal("3"), Decimal("3")),
]


# ============================================================
# Formula coefficients
# ============================================================

@pytest.mark.parametrize("w,h", SIZES)
def test_straight_and_full_frame(w, h):
    """straight = 2(w+h), full frame = 4(w+h)."""
    assert edge_formulas.straight(w, h) == 2 * (w + h)
    assert edge_formulas.full_frame(w, h) == 4 * (w + h)


@pytest.mark.parametrize("w,h", SIZES)
def test_frame_head_and_side_variants(w, h):
    assert edge_formulas.frame_head(w, h) == 2 * w + 3 * h
    assert edge_formulas.two_frame_heads(w, h) == 2 * w + 4 * h
    assert edge_formulas.frame_side(w, h) == 3 * w + 2 * h
    assert edge_formulas.two_frame_sides(w, h) == 4 * w + 2 * h


@pytest.mark.parametrize("w,h", SIZES)
def test_combined_frame_variants(w, h):
    assert edge_formulas.frame_head_side(w, h) == 3 * (w + h)
    assert edge_formulas.two_frame_heads_side(w, h) == 3 * w + 4 * h
    assert edge_formulas.two_frame_sides_head(w, h) == 4 * w + 3 * h


def test_formulas_for_one_by_half_meter():
    """1 m × 0.5 m piece through every formula code."""
    w, h = Decimal("1"), Decimal("0.5")
    expected = {
        OperationCode.STRAIGHT: Decimal("3.0"),
        OperationCode.FRAME_HEAD: Decimal("3.5"),
        OperationCode.TWO_FRAME_HEADS: Decimal("4.0"),
        OperationCode.FRAME_SIDE: Decimal("4.0"),
        OperationCode.TWO_FRAME_SIDES: Decimal("5.0"),
        OperationCode.FRAME_HEAD_SIDE: Decimal("4.5"),
        OperationCode.TWO_FRAME_HEADS_SIDE: Decimal("5.0"),
        OperationCode.TWO_FRAME_SIDES_HEAD: Decimal("5.5"),
        OperationCode.FULL_FRAME: Decimal("6.0"),
    }
    for code, meters in expected.items():
        assert finishing_meters(code, w, h) == meters, code


# ============================================================
# Circle and manual codes
# ============================================================

def test_circle_is_six_times_diameter():
    for d in (Decimal("0.3"), Decimal("1"), Decimal("1.25")):
        assert edge_formulas.circle(Decimal("1"), Decimal("1"), d) == 6 * d


def test_circle_without_diameter_fails():
    with pytest.raises(MissingDiameter):
        finishing_meters(OperationCode.CIRCLE, Decimal("1"), Decimal("1"))
    with pytest.raises(MissingDiameter):
        finishing_meters(OperationCode.CIRCLE, Decimal("1"), Decimal("1"), Decimal("0"))
    # MissingDiameter is a dimensions error on the diameter field
    with pytest.raises(InvalidDimensions) as exc:
        finishing_meters(OperationCode.CIRCLE, Decimal("1"), Decimal("1"), Decimal("-1"))
    assert exc.value.field == "diameter"


def test_manual_codes_return_zero():
    """Curve/arch and panel meterage comes from the operator."""
    assert finishing_meters(OperationCode.CURVE_ARCH, Decimal("2"), Decimal("1")) == 0
    assert finishing_meters(OperationCode.PANELS, Decimal("2"), Decimal("1")) == 0


# ============================================================
# Registry
# ============================================================

def test_registry_covers_every_code():
    """No operation code can slip through without a formula."""
    assert set(FORMULA_REGISTRY) == set(OperationCode)
    assert len(list_formulas()) == len(OperationCode)
    for code in OperationCode:
        assert has_formula(code)


def test_unknown_code_raises():
    assert not has_formula("DIAMOND_CUT")
    with pytest.raises(UnknownOperation) as exc:
        get_formula("DIAMOND_CUT")
    assert exc.value.code == "DIAMOND_CUT"
    assert exc.value.to_dict()["error"] == "UnknownOperation"


def test_codes_parse_from_strings():
    assert OperationCode.parse("2_FRAME_HEADS") is OperationCode.TWO_FRAME_HEADS
    assert OperationCode.parse("two_frame_heads") is OperationCode.TWO_FRAME_HEADS
    assert OperationCode.parse(" straight ") is OperationCode.STRAIGHT


def test_legacy_aliases_share_formulas():
    """Farma/shataf names resolve to the same canonical formula."""
    assert OperationCode.parse("NORMAL_SHATAF") is OperationCode.STRAIGHT
    assert OperationCode.parse("ONE_HEAD_FARMA") is OperationCode.FRAME_HEAD
    assert OperationCode.parse("TWO_SIDE_ONE_HEAD_FARMA") is OperationCode.TWO_FRAME_SIDES_HEAD
    assert OperationCode.parse("WHEEL_CUT") is OperationCode.CIRCLE
    assert OperationCode.parse("TABLEAUX") is OperationCode.PANELS
    assert get_formula("FULL_FARMA") is get_formula(OperationCode.FULL_FRAME)
    assert OperationFamily.parse("SHAMBORLEH") is OperationFamily.CHAMBOURLIEH


# ============================================================
# Descriptors
# ============================================================

def test_describe_operation_flags():
    circle = describe_operation("CIRCLE")
    assert circle.requires_diameter is True
    assert circle.is_manual is False

    arch = describe_operation(OperationCode.CURVE_ARCH)
    assert arch.is_manual is True
    assert arch.requires_diameter is False

    straight = describe_operation("STRAIGHT")
    assert not straight.is_manual and not straight.requires_diameter


def test_every_code_has_a_descriptor():
    codes = {d.code for d in list_operations()}
    assert codes == set(OperationCode)
    assert [d.code for d in list_operations() if d.requires_diameter] == [OperationCode.CIRCLE]


def test_manual_descriptor_cannot_require_diameter():
    with pytest.raises(ValueError):
        OperationDescriptor(code=OperationCode.PANELS, english_name="x", arabic_name="x",
                            formula="manual", is_manual=True, requires_diameter=True)
