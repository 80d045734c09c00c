"""Anchor point system for positioning views by a named point of their frame."""

from enum import Enum

import numpy as np

from ..core.geometry import Point, Size


class Anchor(Enum):
    """Named unit points within a view's frame.

    Anchors are defined in normalized coordinates (0-1) where:
    - X: 0 = leading (left), 1 = trailing (right)
    - Y: 0 = top, 1 = bottom
    """
    TOP_LEADING = "top_leading"
    TOP = "top"
    TOP_TRAILING = "top_trailing"

    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"

    BOTTOM_LEADING = "bottom_leading"
    BOTTOM = "bottom"
    BOTTOM_TRAILING = "bottom_trailing"


# Mapping from anchor to normalized coordinates (x, y)
ANCHOR_POSITIONS: dict[Anchor, tuple[float, float]] = {
    Anchor.TOP_LEADING: (0.0, 0.0),
    Anchor.TOP: (0.5, 0.0),
    Anchor.TOP_TRAILING: (1.0, 0.0),

    Anchor.LEADING: (0.0, 0.5),
    Anchor.CENTER: (0.5, 0.5),
    Anchor.TRAILING: (1.0, 0.5),

    Anchor.BOTTOM_LEADING: (0.0, 1.0),
    Anchor.BOTTOM: (0.5, 1.0),
    Anchor.BOTTOM_TRAILING: (1.0, 1.0),
}


def resolve_anchor(anchor: Anchor | str, at: Point, size: Size) -> Point:
    """Find the top-left origin of a frame whose anchor point sits at a position.

    Args:
        anchor: The anchor point (enum or string name)
        at: Where the anchor point should end up
        size: Size of the frame being positioned

    Returns:
        Top-left corner of the frame
    """
    if isinstance(anchor, str):
        anchor = Anchor(anchor)

    norm_pos = np.array(ANCHOR_POSITIONS[anchor], dtype=np.float64)
    offset = norm_pos * np.array(size.as_tuple(), dtype=np.float64)
    origin = np.array(at.as_tuple(), dtype=np.float64) - offset

    return Point(float(origin[0]), float(origin[1]))
