"""H2VStack - horizontal-then-vertical flow layout."""

from .core import Point, ProposedSize, Rect, Size, StackNode, ViewNode
from .layout import (
    Anchor,
    H2VStack,
    Layout,
    Placement,
    PlacementMode,
    StackLoader,
    Subview,
    arrange,
    measure,
)

__all__ = [
    "Anchor",
    "H2VStack",
    "Layout",
    "Placement",
    "PlacementMode",
    "Point",
    "ProposedSize",
    "Rect",
    "Size",
    "StackLoader",
    "StackNode",
    "Subview",
    "ViewNode",
    "arrange",
    "measure",
]
