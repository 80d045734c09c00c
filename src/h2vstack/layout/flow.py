"""Horizontal-then-vertical flow layout.

Children are laid out left to right in input order. A child that does not fit
in what is left of the current row starts a new row below it, much like words
wrapping in a paragraph. Every child keeps its intrinsic size and is anchored
at its top-left corner.

Two passes share one wrap rule:

1. measure() walks the children and reports the container size.
2. arrange() walks them again against the container bounds and yields one
   placement per child.

The wrap test is strict: a child whose width exactly fills the rest of the row
does not fit and moves to the next row.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..core.geometry import Point, ProposedSize, Rect, Size
from .anchors import Anchor
from .base import Layout, Subview

logger = logging.getLogger(__name__)


class PlacementMode(Enum):
    """How arrange() decides rows and row offsets.

    UNIFIED uses the same rows measure() computes, so placements never extend
    past the size measure() reported. LEGACY reproduces the original placement
    pass: it wraps when a child crosses bounds.max_x and moves down by the
    wrapping child's own height instead of the previous row's height.
    """
    UNIFIED = "unified"
    LEGACY = "legacy"


@dataclass(frozen=True)
class Placement:
    """Where one child ends up: its index in the input, origin and size."""

    index: int
    origin: Point
    size: Size

    @property
    def frame(self) -> Rect:
        return Rect(self.origin, self.size)


def sizes(subviews: Sequence[Subview]) -> NDArray[np.float64]:
    """Query the intrinsic size of each subview.

    Every subview is asked independently with an unspecified proposal.

    Returns:
        Array of shape (n, 2) holding [width, height] per subview
    """
    proposal = ProposedSize.unspecified()
    result = np.zeros((len(subviews), 2), dtype=np.float64)
    for i, subview in enumerate(subviews):
        result[i] = subview.size_that_fits(proposal).as_tuple()
    return result


def _as_sizes(values: ArrayLike) -> NDArray[np.float64]:
    return np.asarray(values, dtype=np.float64).reshape(-1, 2)


def _boundary(width_hint: float | None) -> float:
    return math.inf if width_hint is None else float(width_hint)


def _walk_rows(widths: Iterable[float], boundary: float) -> Iterator[tuple[bool, float]]:
    """Yield (starts_new_row, row_offset) for each width in order.

    row_offset is the running width of the current row after the child is
    added. A wrapping child's own width becomes the new offset and is not
    tested against the boundary again, so a child wider than the boundary
    still gets a row of its own.
    """
    pos_x = 0.0
    for width in widths:
        if pos_x + width < boundary:
            pos_x += width
            yield False, pos_x
        else:
            pos_x = width
            yield True, pos_x


def measure(width_hint: float | None, child_sizes: ArrayLike) -> Size:
    """Compute the size an H2V stack reports for its children.

    Args:
        width_hint: Width available to the container, or None for unconstrained
            (no wrapping ever happens)
        child_sizes: Intrinsic [width, height] of each child, in order

    Returns:
        The boundary width if any child wrapped, otherwise the width of the
        single row; the height is the sum of all row heights.
    """
    child_sizes = _as_sizes(child_sizes)
    boundary = _boundary(width_hint)

    pos_x = 0.0
    pos_y = 0.0
    line_height = 0.0
    wrapped = False

    rows = _walk_rows(child_sizes[:, 0].tolist(), boundary)
    for (starts_row, pos_x), height in zip(rows, child_sizes[:, 1].tolist()):
        if starts_row:
            pos_y += line_height
            line_height = height
            wrapped = True
        else:
            line_height = max(line_height, height)

    result = Size(boundary if wrapped else pos_x, pos_y + line_height)
    logger.debug(
        "Measured %d children against width %s: %s", len(child_sizes), width_hint, result
    )
    return result


def break_rows(child_sizes: ArrayLike, boundary: float) -> NDArray[np.intp]:
    """Assign each child to a row using the same rule as measure().

    When the very first child does not fit it starts row 1, leaving row 0
    empty with zero height.

    Returns:
        Row index per child, non-decreasing
    """
    child_sizes = _as_sizes(child_sizes)
    starts = np.fromiter(
        (starts_row for starts_row, _ in _walk_rows(child_sizes[:, 0].tolist(), boundary)),
        dtype=bool,
        count=len(child_sizes),
    )
    return np.cumsum(starts, dtype=np.intp)


def row_heights(child_sizes: ArrayLike, rows: NDArray[np.intp]) -> NDArray[np.float64]:
    """Height of each row: the tallest child in it.

    Row 0 starts from zero, matching measure(); an empty row 0 has zero height.
    """
    child_sizes = _as_sizes(child_sizes)
    if len(rows) == 0:
        return np.zeros(0, dtype=np.float64)

    heights = np.full(int(rows[-1]) + 1, -np.inf, dtype=np.float64)
    heights[0] = 0.0
    np.maximum.at(heights, rows, child_sizes[:, 1])
    return heights


def arrange(
    bounds: Rect,
    child_sizes: ArrayLike,
    width_hint: float | None,
    mode: PlacementMode = PlacementMode.UNIFIED,
) -> list[Placement]:
    """Position children inside bounds.

    Args:
        bounds: The container's final frame
        child_sizes: Intrinsic [width, height] of each child, in order
        width_hint: The width that was proposed to measure(); only used by
            UNIFIED mode, which must wrap exactly where measure() did
        mode: Row strategy, see PlacementMode

    Returns:
        One top-left anchored placement per child, in input order
    """
    child_sizes = _as_sizes(child_sizes)
    if mode is PlacementMode.LEGACY:
        placements = _arrange_legacy(bounds, child_sizes)
    else:
        placements = _arrange_unified(bounds, child_sizes, _boundary(width_hint))

    logger.debug("Placed %d children in %s (%s)", len(placements), bounds, mode.value)
    return placements


def _arrange_unified(
    bounds: Rect, child_sizes: NDArray[np.float64], boundary: float
) -> list[Placement]:
    rows = break_rows(child_sizes, boundary)
    heights = row_heights(child_sizes, rows)
    # Top of row r is min_y plus the heights of rows 0..r-1
    tops = np.concatenate(([0.0], np.cumsum(heights)[:-1])) + bounds.min_y

    placements = []
    x = bounds.min_x
    current_row = 0
    for i, (width, height) in enumerate(child_sizes.tolist()):
        row = int(rows[i])
        if row != current_row:
            x = bounds.min_x
            current_row = row
        placements.append(Placement(i, Point(x, float(tops[row])), Size(width, height)))
        x += width
    return placements


def _arrange_legacy(bounds: Rect, child_sizes: NDArray[np.float64]) -> list[Placement]:
    placements = []
    x = bounds.min_x
    y = bounds.min_y
    for i, (width, height) in enumerate(child_sizes.tolist()):
        if x + width > bounds.max_x:
            x = bounds.min_x
            y += height
        placements.append(Placement(i, Point(x, y), Size(width, height)))
        x += width
    return placements


class H2VStack(Layout):
    """Flow layout that stacks subviews horizontally, then wraps vertically.

    Example:
        stack = H2VStack()
        size = stack.size_that_fits(ProposedSize(width=100), subviews)
        stack.place_subviews(Rect(Point.zero(), size), ProposedSize(width=100), subviews)
    """

    def __init__(self, mode: PlacementMode | str = PlacementMode.UNIFIED) -> None:
        self.mode = PlacementMode(mode)

    def size_that_fits(
        self,
        proposal: ProposedSize,
        subviews: Sequence[Subview],
        cache: Any = None,
    ) -> Size:
        return measure(proposal.width, sizes(subviews))

    def place_subviews(
        self,
        bounds: Rect,
        proposal: ProposedSize,
        subviews: Sequence[Subview],
        cache: Any = None,
    ) -> list[Placement]:
        """Place every subview top-left anchored inside bounds.

        In UNIFIED mode rows wrap against proposal.width, the same width
        size_that_fits() measured with, not against bounds.width. An
        unspecified proposal width therefore keeps every subview on one row,
        even past bounds.max_x. LEGACY mode wraps against bounds.max_x only.
        """
        placements = arrange(bounds, sizes(subviews), proposal.width, self.mode)
        for placement, subview in zip(placements, subviews):
            subview.place(
                at=placement.origin,
                anchor=Anchor.TOP_LEADING,
                proposal=ProposedSize.from_size(placement.size),
            )
        return placements

    def __repr__(self) -> str:
        return f"H2VStack(mode={self.mode.value!r})"
