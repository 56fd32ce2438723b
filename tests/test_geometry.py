"""Tests for pane.tui.geometry -- rectangles and margins."""

from __future__ import annotations

import pytest

from pane.tui.geometry import Margin, Position, Rect


class TestRectConstruction:
    """Field validation and derived edges."""

    def test_negative_fields_rejected(self) -> None:
        with pytest.raises(ValueError):
            Rect(0, 0, -1, 5)
        with pytest.raises(ValueError):
            Rect(-1, 0, 1, 1)

    def test_edges(self) -> None:
        r = Rect(2, 3, 10, 4)
        assert (r.left, r.right, r.top, r.bottom) == (2, 12, 3, 7)
        assert r.area == 40

    def test_sized_is_anchored_at_origin(self) -> None:
        assert Rect.sized(5, 2) == Rect(0, 0, 5, 2)

    def test_is_empty(self) -> None:
        assert Rect(0, 0, 0, 5).is_empty()
        assert Rect(0, 0, 5, 0).is_empty()
        assert not Rect(0, 0, 1, 1).is_empty()

    def test_contains_is_half_open(self) -> None:
        r = Rect(1, 1, 2, 2)
        assert r.contains(1, 1)
        assert r.contains(2, 2)
        assert not r.contains(3, 1)
        assert not r.contains(0, 1)


class TestRectDerived:
    """inner / intersection / union never produce negative sizes."""

    def test_inner_shrinks_every_side(self) -> None:
        assert Rect(0, 0, 10, 6).inner(Margin(2, 1)) == Rect(2, 1, 6, 4)

    def test_inner_too_large_margin_is_empty(self) -> None:
        assert Rect(0, 0, 3, 3).inner(Margin(2, 0)).is_empty()

    def test_intersection_overlap(self) -> None:
        a = Rect(0, 0, 5, 5)
        b = Rect(3, 2, 5, 5)
        assert a.intersection(b) == Rect(3, 2, 2, 3)
        assert a.intersects(b)

    def test_disjoint_intersection_is_zero_area(self) -> None:
        a = Rect(0, 0, 2, 2)
        b = Rect(5, 5, 2, 2)
        result = a.intersection(b)
        assert result.area == 0
        assert not a.intersects(b)

    def test_union(self) -> None:
        assert Rect(0, 0, 2, 2).union(Rect(4, 1, 2, 3)) == Rect(0, 0, 6, 4)

    def test_positions(self) -> None:
        r = Rect(1, 2, 2, 2)
        assert list(r.positions()) == [
            Position(1, 2),
            Position(2, 2),
            Position(1, 3),
            Position(2, 3),
        ]


class TestMargin:
    def test_negative_margin_rejected(self) -> None:
        with pytest.raises(ValueError):
            Margin(-1, 0)

    def test_str(self) -> None:
        assert str(Margin(2, 1)) == "2x1"
