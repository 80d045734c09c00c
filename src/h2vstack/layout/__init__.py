"""Layout engine and stack definitions."""

from .anchors import Anchor, resolve_anchor
from .base import Layout, Subview
from .flow import H2VStack, Placement, PlacementMode, arrange, break_rows, measure, sizes
from .loader import StackLoader

__all__ = [
    "Anchor",
    "resolve_anchor",
    "Layout",
    "Subview",
    "H2VStack",
    "Placement",
    "PlacementMode",
    "arrange",
    "break_rows",
    "measure",
    "sizes",
    "StackLoader",
]
