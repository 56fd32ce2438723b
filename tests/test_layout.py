"""Tests for pane.tui.layout -- constraints, the solver and the split cache."""

from __future__ import annotations

import pytest

from pane.tui.errors import LayoutError
from pane.tui.geometry import Margin, Rect
from pane.tui.layout import (
    DEFAULT_CACHE_SIZE,
    Direction,
    Fill,
    Fixed,
    Layout,
    Length,
    Max,
    Min,
    Percentage,
    Ratio,
    solve_lengths,
    split,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    Layout.init_cache(DEFAULT_CACHE_SIZE)
    Layout.cache_clear()
    yield
    Layout.init_cache(DEFAULT_CACHE_SIZE)
    Layout.cache_clear()


def widths(rects: tuple[Rect, ...]) -> list[int]:
    return [r.width for r in rects]


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class TestConstraints:
    """Individual constraint arithmetic and validation."""

    def test_percentage_rounds_down(self) -> None:
        assert Percentage(33).apply(10) == 3

    def test_percentage_above_hundred_is_clamped(self) -> None:
        assert Percentage(150).apply(10) == 10

    def test_ratio(self) -> None:
        assert Ratio(1, 3).apply(9) == 3

    def test_ratio_zero_denominator(self) -> None:
        assert Ratio(1, 0).apply(7) == 7

    def test_min_and_max(self) -> None:
        assert Min(5).apply(3) == 5
        assert Max(5).apply(8) == 5

    def test_fixed_is_length(self) -> None:
        assert Fixed(3) == Length(3)

    @pytest.mark.parametrize(
        "make",
        [
            lambda: Length(-1),
            lambda: Percentage(-5),
            lambda: Ratio(-1, 2),
            lambda: Ratio(1, -2),
            lambda: Min(-1),
            lambda: Max(-1),
            lambda: Fill(-1),
        ],
    )
    def test_negative_values_rejected(self, make) -> None:
        with pytest.raises(LayoutError):
            make()

    def test_layout_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Length(-1)


# ---------------------------------------------------------------------------
# solve_lengths
# ---------------------------------------------------------------------------


class TestSolveLengths:
    """Distribution of usable cells among constraints."""

    def test_two_halves(self) -> None:
        assert solve_lengths(10, (Percentage(50), Percentage(50))) == [5, 5]

    def test_fixed_then_two_fills(self) -> None:
        assert solve_lengths(10, (Fixed(3), Fill(1), Fill(1))) == [3, 4, 3]

    def test_weighted_fills(self) -> None:
        assert solve_lengths(10, (Fill(2), Fill(1))) == [7, 3]

    def test_zero_weight_fill_gets_nothing(self) -> None:
        assert solve_lengths(10, (Fill(1), Fill(0))) == [10, 0]

    def test_all_zero_weights_share_equally(self) -> None:
        assert solve_lengths(5, (Fill(0), Fill(0))) == [3, 2]

    def test_max_caps(self) -> None:
        assert solve_lengths(10, (Max(3), Fill())) == [3, 7]

    def test_remainder_without_fill_goes_to_last(self) -> None:
        assert solve_lengths(10, (Length(2), Length(3))) == [2, 8]

    def test_remainder_without_fill_prefers_min(self) -> None:
        assert solve_lengths(10, (Min(2), Length(3))) == [7, 3]

    def test_remainder_skips_trailing_max(self) -> None:
        assert solve_lengths(10, (Length(3), Max(2))) == [8, 2]

    def test_remainder_goes_to_max_when_nothing_else(self) -> None:
        assert solve_lengths(10, (Max(2), Max(3))) == [2, 8]

    def test_overflow_priority(self) -> None:
        # Length is satisfied first, Min takes what is left, the rest get 0.
        assert solve_lengths(10, (Percentage(50), Length(8), Min(5))) == [0, 8, 2]

    def test_zero_usable(self) -> None:
        assert solve_lengths(0, (Length(3), Fill())) == [0, 0]

    def test_no_constraints(self) -> None:
        assert solve_lengths(10, ()) == []

    @pytest.mark.parametrize("usable", [0, 1, 7, 10, 33, 80])
    @pytest.mark.parametrize(
        "constraints",
        [
            (Length(5), Fill(), Length(5)),
            (Percentage(30), Percentage(30), Percentage(30)),
            (Ratio(1, 3), Ratio(1, 3), Ratio(1, 3)),
            (Min(10), Max(10), Fill(3), Fill(1)),
            (Length(100),),
            (Max(1), Max(1)),
        ],
    )
    def test_sizes_always_sum_to_usable(self, usable, constraints) -> None:
        sizes = solve_lengths(usable, constraints)
        assert len(sizes) == len(constraints)
        assert sum(sizes) == usable
        assert all(s >= 0 for s in sizes)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class TestLayout:
    """Splitting rectangles."""

    def test_horizontal_halves(self) -> None:
        left, right = Layout.horizontal([Percentage(50), Percentage(50)]).split(
            Rect.sized(10, 4)
        )
        assert left == Rect(0, 0, 5, 4)
        assert right == Rect(5, 0, 5, 4)

    def test_vertical_header_body_footer(self) -> None:
        rects = Layout.vertical([Length(1), Fill(), Length(1)]).split(Rect(2, 3, 20, 10))
        assert rects == (Rect(2, 3, 20, 1), Rect(2, 4, 20, 8), Rect(2, 12, 20, 1))

    def test_rects_tile_the_area(self) -> None:
        area = Rect(4, 1, 37, 3)
        rects = Layout.horizontal([Ratio(1, 3), Fill(), Length(5), Min(2)]).split(area)
        assert sum(widths(rects)) == area.width
        x = area.x
        for rect in rects:
            assert rect.x == x
            assert rect.y == area.y and rect.height == area.height
            x = rect.right
        assert x == area.right

    def test_spacing(self) -> None:
        layout = Layout.horizontal([Length(2), Length(2)]).with_spacing(1)
        assert layout.split(Rect.sized(10, 1)) == (Rect(0, 0, 2, 1), Rect(3, 0, 7, 1))

    def test_spacing_shrinks_when_it_does_not_fit(self) -> None:
        layout = Layout.horizontal([Fill(), Fill(), Fill()]).with_spacing(5)
        rects = layout.split(Rect.sized(4, 1))
        assert widths(rects) == [0, 0, 0]
        assert [r.x for r in rects] == [0, 2, 4]

    def test_margin(self) -> None:
        (inner,) = Layout.vertical([Fill()]).with_margin(1).split(Rect.sized(10, 5))
        assert inner == Rect(1, 1, 8, 3)

    def test_asymmetric_margin(self) -> None:
        (inner,) = Layout.vertical([Fill()]).with_margin(Margin(2, 0)).split(Rect.sized(10, 5))
        assert inner == Rect(2, 0, 6, 5)

    def test_margin_larger_than_area(self) -> None:
        rects = Layout.vertical([Fill(), Fill()]).with_margin(4).split(Rect.sized(5, 5))
        assert all(r.is_empty() for r in rects)

    def test_no_constraints(self) -> None:
        assert Layout.vertical([]).split(Rect.sized(5, 5)) == ()

    def test_builders_return_copies(self) -> None:
        base = Layout.vertical([Length(1)])
        moved = base.with_direction(Direction.HORIZONTAL)
        assert base.direction is Direction.VERTICAL
        assert moved.direction is Direction.HORIZONTAL
        assert moved.with_constraints([Fill()]).constraints == (Fill(),)

    def test_non_constraint_rejected(self) -> None:
        with pytest.raises(LayoutError):
            Layout.vertical([Length(1), 5])  # type: ignore[list-item]

    def test_negative_spacing_rejected(self) -> None:
        with pytest.raises(LayoutError):
            Layout.vertical([Fill()]).with_spacing(-1)

    def test_negative_margin_rejected(self) -> None:
        with pytest.raises(LayoutError):
            Layout.vertical([Fill()]).with_margin(-1)

    def test_module_split(self) -> None:
        area = Rect.sized(10, 2)
        assert split(area, Direction.HORIZONTAL, [Fixed(3), Fill(), Fill()]) == (
            Rect(0, 0, 3, 2),
            Rect(3, 0, 4, 2),
            Rect(7, 0, 3, 2),
        )


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


class TestCache:
    """The shared split cache."""

    def test_hits_and_misses(self) -> None:
        layout = Layout.vertical([Length(1), Fill()])
        first = layout.split(Rect.sized(10, 10))
        second = layout.split(Rect.sized(10, 10))
        assert first == second
        info = Layout.cache_info()
        assert (info.hits, info.misses, info.currsize) == (1, 1, 1)

    def test_equal_layouts_share_entries(self) -> None:
        Layout.vertical([Length(1)]).split(Rect.sized(3, 3))
        Layout.vertical([Length(1)]).split(Rect.sized(3, 3))
        assert Layout.cache_info().hits == 1

    def test_eviction(self) -> None:
        Layout.init_cache(2)
        layout = Layout.vertical([Fill()])
        for height in (1, 2, 3):
            layout.split(Rect.sized(5, height))
        info = Layout.cache_info()
        assert info.maxsize == 2
        assert info.currsize == 2

    def test_shrinking_evicts(self) -> None:
        layout = Layout.vertical([Fill()])
        for height in (1, 2, 3):
            layout.split(Rect.sized(5, height))
        Layout.init_cache(1)
        assert Layout.cache_info().currsize == 1

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            Layout.init_cache(0)

    def test_clear(self) -> None:
        Layout.vertical([Fill()]).split(Rect.sized(5, 5))
        Layout.cache_clear()
        assert Layout.cache_info() == (0, 0, DEFAULT_CACHE_SIZE, 0)
