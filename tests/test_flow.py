"""Tests for the H2V flow layout engine."""

import math

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from h2vstack.core.geometry import Point, ProposedSize, Rect, Size
from h2vstack.layout.anchors import Anchor
from h2vstack.layout.flow import (
    H2VStack,
    Placement,
    PlacementMode,
    arrange,
    break_rows,
    measure,
    row_heights,
    sizes,
)

# Boundary 100: (60, 20) fills row 1, (50, 30) wraps, (10, 10) joins it
EXAMPLE_SIZES = [(60, 20), (50, 30), (10, 10)]


class RecordingView:
    """Subview that reports a fixed size and records every call."""

    def __init__(self, width: float, height: float) -> None:
        self.size = Size(width, height)
        self.proposals: list[ProposedSize] = []
        self.placed: list[tuple[Point, Anchor, ProposedSize]] = []

    def size_that_fits(self, proposal: ProposedSize) -> Size:
        self.proposals.append(proposal)
        return self.size

    def place(self, at: Point, anchor: Anchor, proposal: ProposedSize) -> None:
        self.placed.append((at, anchor, proposal))


def origins(placements: list[Placement]) -> list[tuple[float, float]]:
    return [p.origin.as_tuple() for p in placements]


# -------
# measure
# -------

def test_measure_example_scenario():
    """Two rows report the full width and the sum of both row heights."""
    assert measure(100, EXAMPLE_SIZES) == Size(100, 50)


def test_measure_single_row_reports_content_width():
    result = measure(100, [(10, 5), (20, 8), (30, 3)])
    assert result == Size(60, 8)


def test_measure_exact_fit_wraps():
    """A child that exactly fills the rest of the row moves to the next row."""
    assert measure(10, [(5, 4), (5, 6)]) == Size(10, 10)


def test_measure_just_under_boundary_does_not_wrap():
    assert measure(10, [(5, 4), (4.5, 6)]) == Size(9.5, 6)


@pytest.mark.parametrize("width_hint", [None, math.inf])
def test_measure_unconstrained_never_wraps(width_hint):
    child_sizes = [(1e6, 3), (2e6, 7), (5, 1)] * 4
    result = measure(width_hint, child_sizes)
    assert result == Size(12000020, 7)


def test_measure_oversized_first_child():
    """A first child wider than the boundary gets its own row, unclamped."""
    assert measure(50, [(80, 10)]) == Size(50, 10)
    assert measure(50, [(80, 10), (20, 5)]) == Size(50, 15)


def test_measure_oversized_child_in_the_middle():
    # (80, 10) wraps onto row 2 and (20, 5) wraps again onto row 3
    assert measure(50, [(30, 4), (80, 10), (20, 5)]) == Size(50, 19)


@pytest.mark.parametrize("width_hint", [None, 0, 100])
def test_measure_empty(width_hint):
    assert measure(width_hint, []) == Size(0, 0)


def test_measure_zero_width_boundary_wraps_every_child():
    assert measure(0, [(0, 5), (0, 5), (0, 2)]) == Size(0, 12)


def test_measure_accepts_numpy_array():
    child_sizes = np.array(EXAMPLE_SIZES, dtype=np.float64)
    assert measure(100, child_sizes) == Size(100, 50)


# -------
# rows
# -------

def test_break_rows_example():
    rows = break_rows(EXAMPLE_SIZES, 100)
    assert_array_equal(rows, [0, 1, 1])


def test_break_rows_oversized_first_child_leaves_row_zero_empty():
    child_sizes = [(80, 10), (20, 5)]
    rows = break_rows(child_sizes, 50)
    # The oversized child is the running offset of its row, so (20, 5) wraps too
    assert_array_equal(rows, [1, 2])
    assert_array_equal(row_heights(child_sizes, rows), [0, 10, 5])


def test_break_rows_empty():
    assert break_rows([], 100).shape == (0,)


def test_row_heights_take_tallest_child():
    child_sizes = [(10, 3), (10, 9), (95, 4), (1, 12)]
    rows = break_rows(child_sizes, 100)
    assert_array_equal(rows, [0, 0, 1, 1])
    assert_array_equal(row_heights(child_sizes, rows), [9, 12])


# -------
# arrange
# -------

def test_arrange_unified_example():
    placements = arrange(Rect.from_xywh(0, 0, 100, 50), EXAMPLE_SIZES, 100)
    assert origins(placements) == [(0, 0), (0, 20), (50, 20)]
    assert [p.size for p in placements] == [Size(60, 20), Size(50, 30), Size(10, 10)]


def test_arrange_unified_exact_fit_wraps():
    placements = arrange(Rect.from_xywh(0, 0, 10, 10), [(5, 4), (5, 6)], 10)
    assert origins(placements) == [(0, 0), (0, 4)]


def test_arrange_unified_offsets_by_bounds_origin():
    placements = arrange(Rect.from_xywh(10, 5, 100, 50), EXAMPLE_SIZES, 100)
    assert origins(placements) == [(10, 5), (10, 25), (60, 25)]


def test_arrange_single_row_has_no_vertical_offset():
    child_sizes = [(10, 5), (20, 8), (30, 3)]
    for mode in PlacementMode:
        placements = arrange(Rect.from_xywh(0, 0, 60, 8), child_sizes, 100, mode)
        assert origins(placements) == [(0, 0), (10, 0), (30, 0)]


def test_arrange_unconstrained_is_one_row():
    placements = arrange(Rect.from_xywh(0, 0, 30, 10), [(10, 10)] * 5, None)
    assert origins(placements) == [(0, 0), (10, 0), (20, 0), (30, 0), (40, 0)]


def test_arrange_preserves_input_order():
    child_sizes = [(30, 1), (90, 2), (10, 3), (70, 4), (40, 5)]
    placements = arrange(Rect.from_xywh(0, 0, 100, 20), child_sizes, 100)
    assert [p.index for p in placements] == [0, 1, 2, 3, 4]
    assert [p.size.height for p in placements] == [1, 2, 3, 4, 5]


def test_arrange_oversized_first_child_at_origin():
    placements = arrange(Rect.from_xywh(0, 0, 50, 10), [(80, 10)], 50)
    assert placements[0].frame == Rect.from_xywh(0, 0, 80, 10)


@pytest.mark.parametrize("mode", list(PlacementMode))
def test_arrange_empty(mode):
    assert arrange(Rect.from_xywh(0, 0, 100, 100), [], 100, mode) == []


def test_arrange_unified_matches_measured_height():
    """Placements never extend below the height measure() reports."""
    rng = np.random.default_rng(7)
    child_sizes = np.column_stack([
        rng.integers(1, 40, size=50),
        rng.integers(1, 25, size=50),
    ]).astype(np.float64)

    measured = measure(100, child_sizes)
    placements = arrange(Rect(Point.zero(), measured), child_sizes, 100)

    bottom = max(p.frame.max_y for p in placements)
    assert bottom == pytest.approx(measured.height)
    assert min(p.origin.y for p in placements) == 0


def test_arrange_unified_rows_stay_inside_boundary():
    rng = np.random.default_rng(11)
    child_sizes = np.column_stack([
        rng.integers(1, 60, size=40),
        rng.integers(1, 10, size=40),
    ]).astype(np.float64)

    placements = arrange(Rect.from_xywh(0, 0, 100, 0), child_sizes, 100)
    rows = break_rows(child_sizes, 100)

    for i, placement in enumerate(placements):
        starts_row = i == 0 or rows[i] != rows[i - 1]
        if starts_row:
            assert placement.origin.x == 0
        else:
            assert placement.frame.max_x < 100


# -------
# legacy placement
# -------

def test_arrange_legacy_moves_down_by_wrapping_child_height():
    placements = arrange(Rect.from_xywh(0, 0, 100, 50), EXAMPLE_SIZES, 100, PlacementMode.LEGACY)
    assert origins(placements) == [(0, 0), (0, 30), (50, 30)]
    # Extends past the measured height of 50
    assert max(p.frame.max_y for p in placements) == 60


def test_arrange_legacy_exact_fit_stays_on_row():
    placements = arrange(Rect.from_xywh(0, 0, 10, 10), [(5, 4), (5, 6)], 10, PlacementMode.LEGACY)
    assert origins(placements) == [(0, 0), (5, 0)]


def test_arrange_legacy_oversized_first_child_moves_down():
    placements = arrange(Rect.from_xywh(0, 0, 50, 10), [(80, 10)], 50, PlacementMode.LEGACY)
    assert origins(placements) == [(0, 10)]


def test_arrange_legacy_ignores_width_hint():
    bounds = Rect.from_xywh(0, 0, 100, 50)
    with_hint = arrange(bounds, EXAMPLE_SIZES, 30, PlacementMode.LEGACY)
    without_hint = arrange(bounds, EXAMPLE_SIZES, None, PlacementMode.LEGACY)
    assert with_hint == without_hint


# -------
# H2VStack
# -------

@pytest.fixture
def example_views() -> list[RecordingView]:
    return [RecordingView(w, h) for w, h in EXAMPLE_SIZES]


def test_sizes_queries_unspecified(example_views):
    result = sizes(example_views)
    assert result.shape == (3, 2)
    assert_array_equal(result, EXAMPLE_SIZES)
    for view in example_views:
        assert view.proposals == [ProposedSize.unspecified()]


def test_sizes_empty():
    assert sizes([]).shape == (0, 2)


def test_size_that_fits_has_no_placement_side_effects(example_views):
    stack = H2VStack()
    assert stack.size_that_fits(ProposedSize(100, None), example_views) == Size(100, 50)
    assert all(view.placed == [] for view in example_views)


def test_place_subviews_places_each_view(example_views):
    stack = H2VStack()
    proposal = ProposedSize(100, None)
    bounds = Rect(Point(0, 0), stack.size_that_fits(proposal, example_views))

    placements = stack.place_subviews(bounds, proposal, example_views)

    assert origins(placements) == [(0, 0), (0, 20), (50, 20)]
    for view, placement in zip(example_views, placements):
        assert view.placed == [
            (placement.origin, Anchor.TOP_LEADING, ProposedSize(view.size.width, view.size.height))
        ]
        # One query for measuring, one for placing
        assert len(view.proposals) == 2


def test_place_subviews_legacy_mode(example_views):
    stack = H2VStack(PlacementMode.LEGACY)
    placements = stack.place_subviews(
        Rect.from_xywh(0, 0, 100, 50), ProposedSize(100, None), example_views
    )
    assert origins(placements) == [(0, 0), (0, 30), (50, 30)]


def test_h2vstack_mode_from_string():
    assert H2VStack("legacy").mode is PlacementMode.LEGACY
    assert H2VStack().mode is PlacementMode.UNIFIED
    with pytest.raises(ValueError):
        H2VStack("diagonal")


def test_h2vstack_make_cache_is_stateless(example_views):
    assert H2VStack().make_cache(example_views) is None


def test_h2vstack_repr():
    assert repr(H2VStack("legacy")) == "H2VStack(mode='legacy')"


def test_place_subviews_unified_wraps_against_proposal_not_bounds(example_views):
    placements = H2VStack().place_subviews(
        Rect.from_xywh(0, 0, 100, 50), ProposedSize.unspecified(), example_views
    )
    assert origins(placements) == [(0, 0), (60, 0), (110, 0)]
