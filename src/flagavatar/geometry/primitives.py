"""Geometry primitives for flag-avatar.

This module provides immutable Pydantic models for representing points,
sizes, and rectangles. All coordinates follow the convention where (0, 0)
is the top-left corner, x increases rightward and y increases downward.

Points and rectangles use float coordinates because marker placement is
expressed in fractional edit-surface units (e.g. a 3:1 marker on a
500-unit surface is 166.67 units tall). Sizes are whole pixels.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field


class Point(BaseModel, frozen=True):
    """A 2D point.

    Coordinates are unconstrained: pointer positions may lie outside the
    surface while a gesture is in progress.

    Attributes:
        x: Horizontal position.
        y: Vertical position.
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, coord: tuple[float, float]) -> Self:
        """Create Point from (x, y) tuple."""
        return cls(x=coord[0], y=coord[1])

    def __sub__(self, other: Point) -> Point:
        return Point(x=self.x - other.x, y=self.y - other.y)


class Size(BaseModel, frozen=True):
    """A 2D size in whole pixels.

    Both dimensions must be strictly positive (> 0).

    Attributes:
        width: Horizontal extent in pixels.
        height: Vertical extent in pixels.
    """

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")

    def to_tuple(self) -> tuple[int, int]:
        """Convert to (width, height) tuple."""
        return (self.width, self.height)

    @classmethod
    def from_tuple(cls, size: tuple[int, int]) -> Self:
        """Create Size from (width, height) tuple."""
        return cls(width=size[0], height=size[1])

    @classmethod
    def square(cls, side: int) -> Self:
        """Create a square Size."""
        return cls(width=side, height=side)


class Rect(BaseModel, frozen=True):
    """An axis-aligned rectangle with a float origin and float dimensions.

    Used for the marker placement: the top-left corner (x, y) and the
    on-surface (width, height), all in edit-surface units.

    Attributes:
        x: Left edge X coordinate.
        y: Top edge Y coordinate.
        width: Horizontal extent (> 0).
        height: Vertical extent (> 0).
    """

    x: float = Field(..., description="Left edge X coordinate")
    y: float = Field(..., description="Top edge Y coordinate")
    width: float = Field(..., gt=0, description="Width")
    height: float = Field(..., gt=0, description="Height")

    @property
    def right(self) -> float:
        """Return the X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Return the Y coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def origin(self) -> Point:
        """Return the top-left corner as a Point."""
        return Point(x=self.x, y=self.y)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    @classmethod
    def from_tuple(cls, bbox: tuple[float, float, float, float]) -> Self:
        """Create Rect from (x, y, width, height) tuple."""
        return cls(x=bbox[0], y=bbox[1], width=bbox[2], height=bbox[3])

    def contains_point(self, point: Point) -> bool:
        """Check if a point is inside this rectangle, inclusive of all edges.

        A point exactly on the right or bottom edge counts as inside.

        Args:
            point: Point to check.

        Returns:
            True if point is within the closed rectangle.
        """
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def moved_to(self, x: float, y: float) -> Rect:
        """Return a copy of this rectangle with a new origin and the same size."""
        return Rect(x=x, y=y, width=self.width, height=self.height)
