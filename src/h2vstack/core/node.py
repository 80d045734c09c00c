"""View nodes that take part in a layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from .geometry import Point, ProposedSize, Rect, Size

if TYPE_CHECKING:
    from ..layout.anchors import Anchor
    from ..layout.base import Layout


@dataclass
class ViewNode:
    """A leaf view with a fixed intrinsic size.

    The node reports its intrinsic size for any proposal and remembers the
    frame its parent layout gave it in place().
    """

    name: str
    intrinsic_size: Size
    frame: Rect | None = field(default=None, compare=False)

    def size_that_fits(self, proposal: ProposedSize) -> Size:
        return self.intrinsic_size

    def place(self, at: Point, anchor: Anchor, proposal: ProposedSize) -> None:
        from ..layout.anchors import resolve_anchor

        size = proposal.replacing_unspecified(self.intrinsic_size)
        self.frame = Rect(resolve_anchor(anchor, at, size), size)

    def iter_nodes(self, depth: int = 0) -> Iterator[tuple[int, ViewNode | StackNode]]:
        yield depth, self

    def __repr__(self) -> str:
        size = self.intrinsic_size
        return f"ViewNode({self.name!r}, {size.width:g}x{size.height:g})"


@dataclass
class StackNode:
    """A view that lays out its own children with a layout.

    Stack nodes nest: a StackNode can be the child of another StackNode, and
    measuring the outer stack asks the inner one for its size.

    Example:
        tags = StackNode("tags", width=120)
        tags.add_child(ViewNode("a", Size(60, 20)))
        tags.add_child(ViewNode("b", Size(70, 20)))
        size = tags.layout_in()
    """

    name: str
    children: list[ViewNode | StackNode] = field(default_factory=list)
    layout: Layout | None = None
    width: float | None = None
    origin: Point = field(default_factory=Point.zero)
    frame: Rect | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.layout is None:
            from ..layout.flow import H2VStack

            self.layout = H2VStack()

    def add_child(self, node: ViewNode | StackNode) -> ViewNode | StackNode:
        """Append a child node.

        Returns:
            The added node (for chaining)
        """
        self.children.append(node)
        return node

    def size_that_fits(self, proposal: ProposedSize) -> Size:
        """Measure the children, using this stack's own width when it has one."""
        width = self.width if self.width is not None else proposal.width
        return self.layout.size_that_fits(ProposedSize(width, proposal.height), self.children)

    def place(self, at: Point, anchor: Anchor, proposal: ProposedSize) -> None:
        """Take a frame from the parent and lay out the children inside it."""
        from ..layout.anchors import resolve_anchor

        size = proposal.replacing_unspecified(self.size_that_fits(ProposedSize.unspecified()))
        self.frame = Rect(resolve_anchor(anchor, at, size), size)
        self.layout.place_subviews(self.frame, ProposedSize(self.width), self.children)

    def layout_in(self, origin: Point | None = None) -> Size:
        """Measure this stack as a root and place it with its top-left at origin.

        Args:
            origin: Top-left corner of the frame; defaults to self.origin

        Returns:
            The measured size
        """
        from ..layout.anchors import Anchor

        if origin is None:
            origin = self.origin

        size = self.size_that_fits(ProposedSize.unspecified())
        self.place(origin, Anchor.TOP_LEADING, ProposedSize.from_size(size))
        return size

    def iter_nodes(self, depth: int = 0) -> Iterator[tuple[int, ViewNode | StackNode]]:
        """Iterate over this node and all descendants (depth-first).

        Yields:
            Tuples of (depth, node), the root at depth 0
        """
        yield depth, self
        for child in self.children:
            yield from child.iter_nodes(depth + 1)

    def find(self, name: str) -> ViewNode | StackNode | None:
        """Find the first node with the given name, or None."""
        for _, node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def __repr__(self) -> str:
        children_str = f", children={len(self.children)}" if self.children else ""
        return f"StackNode({self.name!r}, width={self.width}{children_str})"
