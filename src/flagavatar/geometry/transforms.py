"""Coordinate and scale transforms for flag-avatar.

This module is the single place where scale factors between the three
coordinate spaces are computed. Nothing else in the package divides one
dimension by another.

Coordinate Systems:
    - Edit: the fixed square edit surface (e.g. 500x500 units). Marker
      placement and converted pointer events live here.
    - Display: on-screen pixels of the rendered edit surface, which may be
      scaled by responsive layout or high-density displays.
    - Export: the uploaded image's native resolution.

Transform Direction Conventions:
    - display_to_edit: multiply by surface/display per axis
    - to_export_space: multiply by export/edit (one scalar for every axis)
"""

from __future__ import annotations

from flagavatar.geometry.primitives import Point, Rect, Size

__all__ = [
    "center_offset",
    "clamp",
    "display_to_edit",
    "export_scale",
    "fit_scale",
    "fit_width_scale",
    "rect_to_export_space",
    "to_export_space",
]


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def fit_scale(src_w: float, src_h: float, box_w: float, box_h: float) -> float:
    """Compute the uniform scale that fits content inside a box.

    The result is the largest factor for which the scaled content fits
    within the box on both axes; aspect ratio is preserved.

    Args:
        src_w: Content width.
        src_h: Content height.
        box_w: Box width.
        box_h: Box height.

    Returns:
        min(box_w / src_w, box_h / src_h)

    Raises:
        ValueError: If any dimension is not positive.

    Example:
        >>> fit_scale(1000, 500, 500, 500)
        0.5
    """
    for name, value in (
        ("src_w", src_w),
        ("src_h", src_h),
        ("box_w", box_w),
        ("box_h", box_h),
    ):
        _require_positive(name, value)
    return min(box_w / src_w, box_h / src_h)


def fit_width_scale(src_w: float, box_w: float) -> float:
    """Compute the scale that makes content span the full box width.

    Unlike fit_scale, the height is not considered.

    Raises:
        ValueError: If either width is not positive.
    """
    _require_positive("src_w", src_w)
    _require_positive("box_w", box_w)
    return box_w / src_w


def center_offset(
    box_w: float, box_h: float, content_w: float, content_h: float
) -> tuple[float, float]:
    """Return the top-left offset that centers content inside a box."""
    return ((box_w - content_w) / 2, (box_h - content_h) / 2)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value to [minimum, maximum].

    If maximum < minimum (content larger than its container), the range
    degenerates to the single point ``minimum``.

    Example:
        >>> clamp(12.0, 0.0, 10.0)
        10.0
        >>> clamp(5.0, 0.0, -3.0)
        0.0
    """
    return max(minimum, min(value, maximum))


def export_scale(edit_dimension: float, export_dimension: float) -> float:
    """Return the uniform edit->export scale factor.

    Raises:
        ValueError: If either dimension is not positive.
    """
    _require_positive("edit_dimension", edit_dimension)
    _require_positive("export_dimension", export_dimension)
    return export_dimension / edit_dimension


def to_export_space(
    edit_coord: float, edit_dimension: float, export_dimension: float
) -> float:
    """Map a single edit-space value into export space."""
    return edit_coord * export_scale(edit_dimension, export_dimension)


def rect_to_export_space(
    rect: Rect, edit_dimension: float, export_dimension: float
) -> Rect:
    """Map a rectangle into export space with one scalar for all four values.

    Using the same factor for x, y, width and height keeps the marker's
    aspect ratio intact at any export resolution.

    Args:
        rect: Rectangle in edit-surface units.
        edit_dimension: Edit surface width.
        export_dimension: True image width.

    Returns:
        Rectangle in export pixels.
    """
    scale = export_scale(edit_dimension, export_dimension)
    return Rect(
        x=rect.x * scale,
        y=rect.y * scale,
        width=rect.width * scale,
        height=rect.height * scale,
    )


def display_to_edit(point: Point, display_size: Size, surface_size: Size) -> Point:
    """Convert a pointer position from display pixels to edit-surface units.

    Args:
        point: Pointer position relative to the surface's on-screen
            top-left corner, in display pixels.
        display_size: Rendered on-screen size of the surface.
        surface_size: Logical size of the surface.

    Returns:
        The same position in edit-surface units.
    """
    scale_x = surface_size.width / display_size.width
    scale_y = surface_size.height / display_size.height
    return Point(x=point.x * scale_x, y=point.y * scale_y)
