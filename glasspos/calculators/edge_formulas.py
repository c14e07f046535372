"""
Edge-finishing formulas — linear meters of edge work per glass piece.

Each formula is a fixed linear combination of width and height (or 6 × the
diameter for a circle). The coefficients are acceptance-tested constants.
All inputs are in meters; all outputs are Decimal meters.

    STRAIGHT             2 × (W + H)
    FRAME_HEAD           2W + 3H
    2_FRAME_HEADS        2W + 4H
    FRAME_SIDE           3W + 2H
    2_FRAME_SIDES        4W + 2H
    FRAME_HEAD_SIDE      3 × (W + H)
    2_FRAME_HEADS_SIDE   3W + 4H
    2_FRAME_SIDES_HEAD   4W + 3H
    FULL_FRAME           4 × (W + H)
    CIRCLE               6 × D
    CURVE_ARCH, PANELS   0 (operator supplies meterage)
"""

from decimal import Decimal

from ..exceptions import MissingDiameter

ZERO = Decimal(0)


def straight(width_m, height_m, diameter_m=None) -> Decimal:
    return 2 * (width_m + height_m)


def frame_head(width_m, height_m, diameter_m=None) -> Decimal:
    return (width_m * 2) + (height_m * 3)


def two_frame_heads(width_m, height_m, diameter_m=None) -> Decimal:
    return (width_m * 2) + (height_m * 4)


def frame_side(width_m, height_m, diameter_m=None) -> Decimal:
    return (width_m * 3) + (height_m * 2)


def two_frame_sides(width_m, height_m, diameter_m=None) -> Decimal:
    return (width_m * 4) + (height_m * 2)


def frame_head_side(width_m, height_m, diameter_m=None) -> Decimal:
    return 3 * (width_m + height_m)


def two_frame_heads_side(width_m, height_m, diameter_m=None) -> Decimal:
    return (width_m * 3) + (height_m * 4)


def two_frame_sides_head(width_m, height_m, diameter_m=None) -> Decimal:
    return (width_m * 4) + (height_m * 3)


def full_frame(width_m, height_m, diameter_m=None) -> Decimal:
    return 4 * (width_m + height_m)


def circle(width_m, height_m, diameter_m=None) -> Decimal:
    """Wheel cut. Width and height are ignored; diameter is mandatory."""
    if diameter_m is None or diameter_m <= 0:
        raise MissingDiameter(diameter_m)
    return 6 * diameter_m


def manual(width_m, height_m, diameter_m=None) -> Decimal:
    """Curved/arch and panel work: meterage comes from the operator."""
    return ZERO
