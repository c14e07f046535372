"""
Formula registry — maps every OperationCode to its edge formula.

One catalog for beveling, farma and shataf work; the naming schemes differ
only in labels (see operations.LEGACY_ALIASES).
"""

from decimal import Decimal

from . import edge_formulas
from .operations import OperationCode

FORMULA_REGISTRY: dict = {
    OperationCode.STRAIGHT: edge_formulas.straight,
    OperationCode.FRAME_HEAD: edge_formulas.frame_head,
    OperationCode.TWO_FRAME_HEADS: edge_formulas.two_frame_heads,
    OperationCode.FRAME_SIDE: edge_formulas.frame_side,
    OperationCode.TWO_FRAME_SIDES: edge_formulas.two_frame_sides,
    OperationCode.FRAME_HEAD_SIDE: edge_formulas.frame_head_side,
    OperationCode.TWO_FRAME_HEADS_SIDE: edge_formulas.two_frame_heads_side,
    OperationCode.TWO_FRAME_SIDES_HEAD: edge_formulas.two_frame_sides_head,
    OperationCode.FULL_FRAME: edge_formulas.full_frame,
    OperationCode.CIRCLE: edge_formulas.circle,
    OperationCode.CURVE_ARCH: edge_formulas.manual,
    OperationCode.PANELS: edge_formulas.manual,
}


def get_formula(code):
    """Returns the formula for an operation code, or raises UnknownOperation."""
    return FORMULA_REGISTRY[OperationCode.parse(code)]


def has_formula(code) -> bool:
    """Check if a formula is registered for a code (aliases included)."""
    try:
        return OperationCode.parse(code) in FORMULA_REGISTRY
    except ValueError:
        return False


def list_formulas() -> list[str]:
    """List all registered canonical operation codes."""
    return [code.value for code in FORMULA_REGISTRY]


def finishing_meters(code, width_m, height_m, diameter_m=None) -> Decimal:
    """Linear meters of edge work for one piece. Dimensions must already be in meters."""
    return get_formula(code)(width_m, height_m, diameter_m)
