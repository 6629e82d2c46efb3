"""Geometry module for flag-avatar.

This package is the single source of truth for coordinates and scale
factors shared by the edit surface, the on-screen display of that surface
and the full-resolution export.

Key Components:
    - Primitives: Point, Size, Rect models
    - Transforms: fit/center math and edit <-> display <-> export conversions
    - Validators: bounds checking and position clamping

Example:
    from flagavatar.geometry import GeometryValidator, Rect, Size, rect_to_export_space

    surface = Size(width=500, height=500)
    marker = Rect(x=10, y=318.3, width=200, height=66.7)

    GeometryValidator().validate(marker, surface)  # Raises if out of bounds
    exported = rect_to_export_space(marker, 500, 1200)  # every value x2.4
"""

from flagavatar.geometry.primitives import Point, Rect, Size
from flagavatar.geometry.transforms import (
    center_offset,
    clamp,
    display_to_edit,
    export_scale,
    fit_scale,
    fit_width_scale,
    rect_to_export_space,
    to_export_space,
)
from flagavatar.geometry.validators import GeometryValidator, ValidationError

__all__ = [
    "GeometryValidator",
    "Point",
    "Rect",
    "Size",
    "ValidationError",
    "center_offset",
    "clamp",
    "display_to_edit",
    "export_scale",
    "fit_scale",
    "fit_width_scale",
    "rect_to_export_space",
    "to_export_space",
]
