"""Unit tests for geometry primitives.

Tests Point, Size, and Rect Pydantic models including:
- Construction and validation
- Computed properties (right, bottom, origin)
- Tuple conversion (to/from)
- Rect operations (contains_point, moved_to)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from flagavatar.geometry import Point, Rect, Size


class TestPoint:
    """Tests for the Point model."""

    def test_point_creation_valid(self) -> None:
        point = Point(x=100.5, y=200)
        assert point.x == 100.5
        assert point.y == 200

    def test_point_allows_negative_coordinates(self) -> None:
        """Pointer positions may lie outside the surface."""
        point = Point(x=-10, y=-0.5)
        assert point.to_tuple() == (-10, -0.5)

    def test_point_from_tuple(self) -> None:
        point = Point.from_tuple((3, 4))
        assert point == Point(x=3, y=4)

    def test_point_subtraction(self) -> None:
        offset = Point(x=250, y=400) - Point(x=0, y=318)
        assert offset == Point(x=250, y=82)

    def test_point_is_frozen(self) -> None:
        point = Point(x=1, y=2)
        with pytest.raises(ValidationError):
            point.x = 3  # type: ignore[misc]

    def test_point_hashable(self) -> None:
        points = {Point(x=1, y=2), Point(x=1, y=2)}
        assert len(points) == 1


class TestSize:
    """Tests for the Size model."""

    def test_size_creation_valid(self) -> None:
        size = Size(width=500, height=300)
        assert size.to_tuple() == (500, 300)

    def test_size_square(self) -> None:
        size = Size.square(500)
        assert size == Size(width=500, height=500)

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-1, 10)])
    def test_size_rejects_non_positive(self, width: int, height: int) -> None:
        with pytest.raises(ValidationError, match="greater than 0"):
            Size(width=width, height=height)

    def test_size_from_tuple(self) -> None:
        assert Size.from_tuple((1200, 800)) == Size(width=1200, height=800)


class TestRect:
    """Tests for the Rect model."""

    @pytest.fixture
    def rect(self) -> Rect:
        return Rect(x=10, y=20, width=100, height=50)

    def test_rect_edges(self, rect: Rect) -> None:
        assert rect.right == 110
        assert rect.bottom == 70
        assert rect.origin == Point(x=10, y=20)

    def test_rect_rejects_zero_width(self) -> None:
        with pytest.raises(ValidationError):
            Rect(x=0, y=0, width=0, height=10)

    def test_rect_tuple_roundtrip(self, rect: Rect) -> None:
        assert Rect.from_tuple(rect.to_tuple()) == rect

    def test_contains_point_interior(self, rect: Rect) -> None:
        assert rect.contains_point(Point(x=50, y=40)) is True

    @pytest.mark.parametrize(
        "point",
        [
            Point(x=10, y=20),
            Point(x=110, y=20),
            Point(x=10, y=70),
            Point(x=110, y=70),
        ],
    )
    def test_contains_point_is_inclusive_on_all_edges(
        self, rect: Rect, point: Point
    ) -> None:
        assert rect.contains_point(point) is True

    @pytest.mark.parametrize(
        "point",
        [
            Point(x=9.99, y=40),
            Point(x=110.01, y=40),
            Point(x=50, y=19.99),
            Point(x=50, y=70.01),
        ],
    )
    def test_contains_point_outside(self, rect: Rect, point: Point) -> None:
        assert rect.contains_point(point) is False

    def test_moved_to_keeps_size(self, rect: Rect) -> None:
        moved = rect.moved_to(0, 0)
        assert moved == Rect(x=0, y=0, width=100, height=50)
        assert rect.x == 10
