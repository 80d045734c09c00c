"""Geometry value types and view nodes."""

from .geometry import Point, ProposedSize, Rect, Size
from .node import StackNode, ViewNode

__all__ = ["Point", "ProposedSize", "Rect", "Size", "StackNode", "ViewNode"]
