"""Geometry validation utilities for flag-avatar.

This module provides bounds checking and position clamping that keep the
marker rectangle fully inside the edit surface.
"""

from __future__ import annotations

from flagavatar.geometry.primitives import Rect, Size
from flagavatar.geometry.transforms import clamp

# Slack for edges computed as origin + size in floating point
EDGE_TOLERANCE = 1e-9


class ValidationError(Exception):
    """Raised when a rectangle fails bounds validation.

    Attributes:
        rect: The invalid rectangle that was validated.
        bounds: The bounds it was validated against.
    """

    def __init__(
        self,
        message: str,
        *,
        rect: Rect,
        bounds: Size,
    ) -> None:
        self.rect = rect
        self.bounds = bounds
        super().__init__(f"{message} (rect={rect.to_tuple()}, bounds={bounds.to_tuple()})")


class GeometryValidator:
    """Validator for rectangles placed on a bounded surface.

    The validator is stateless and operates purely on the inputs provided
    to each method.
    """

    def validate(
        self,
        rect: Rect,
        bounds: Size,
        *,
        strict: bool = True,
    ) -> bool:
        """Validate that a rectangle lies fully within bounds.

        Edges may overshoot by up to EDGE_TOLERANCE.

        Args:
            rect: The rectangle to validate.
            bounds: The surface it must fit in.
            strict: If True, raise ValidationError on failure.
                If False, return False instead.

        Returns:
            True if the rectangle is inside bounds.

        Raises:
            ValidationError: If strict=True and the rectangle is out of bounds.
        """
        violations: list[str] = []
        if rect.x < -EDGE_TOLERANCE:
            violations.append(f"left edge ({rect.x}) is negative")
        if rect.y < -EDGE_TOLERANCE:
            violations.append(f"top edge ({rect.y}) is negative")
        if rect.right > bounds.width + EDGE_TOLERANCE:
            violations.append(f"right edge ({rect.right}) exceeds width ({bounds.width})")
        if rect.bottom > bounds.height + EDGE_TOLERANCE:
            violations.append(
                f"bottom edge ({rect.bottom}) exceeds height ({bounds.height})"
            )

        if violations and strict:
            raise ValidationError(
                f"Rect out of bounds: {'; '.join(violations)}",
                rect=rect,
                bounds=bounds,
            )

        return not violations

    def clamp_position(self, rect: Rect, bounds: Size) -> Rect:
        """Clamp a rectangle's origin so it stays inside bounds.

        Only the origin moves; width and height are never changed. x is
        clamped to [0, bounds.width - width] and y to
        [0, bounds.height - height]. A rectangle larger than the bounds
        on an axis is pinned to 0 on that axis.

        Args:
            rect: The rectangle to clamp.
            bounds: The surface it must stay within.

        Returns:
            A Rect with a clamped origin, or ``rect`` itself if already inside.

        Example:
            >>> validator = GeometryValidator()
            >>> bounds = Size(width=500, height=500)
            >>> validator.clamp_position(Rect(x=480, y=-5, width=100, height=50), bounds).x
            400.0
        """
        clamped_x = clamp(rect.x, 0.0, bounds.width - rect.width)
        clamped_y = clamp(rect.y, 0.0, bounds.height - rect.height)
        if clamped_x == rect.x and clamped_y == rect.y:
            return rect
        return rect.moved_to(clamped_x, clamped_y)
