"""Marker placement on the edit surface.

The marker's on-surface size is computed once, when the marker asset
loads, by scaling it to the full surface width. After that only its
position changes: it is re-centered whenever a new image is uploaded and
moved (with clamping) while the user drags it.

The pure functions below compute new placements; MarkerPlacement owns the
current value and notifies listeners when, and only when, it changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from flagavatar.geometry import (
    GeometryValidator,
    Rect,
    Size,
    ValidationError,
    fit_width_scale,
)

logger = logging.getLogger(__name__)

# Square edit surface, in logical units
EDIT_SURFACE_SIZE = 500

# Gap between the marker and the bottom edge right after the asset loads
INITIAL_BOTTOM_MARGIN = 15.0

# Gap between the marker and the bottom edge after a new image is uploaded
UPLOAD_BOTTOM_MARGIN = 25.0

_validator = GeometryValidator()

PlacementListener = Callable[[Rect], None]


def initial_placement(marker_width: float, marker_height: float, surface: Size) -> Rect:
    """Compute the marker's first placement.

    The marker is scaled to span the full surface width (height follows the
    intrinsic aspect ratio), centered horizontally and anchored
    INITIAL_BOTTOM_MARGIN above the bottom edge.

    Args:
        marker_width: Intrinsic width of the marker asset in pixels.
        marker_height: Intrinsic height of the marker asset in pixels.
        surface: Edit surface size.

    Returns:
        Placement in edit-surface units.

    Raises:
        ValueError: If the marker has no pixels.
    """
    if marker_height <= 0:
        raise ValueError(f"marker_height must be positive, got {marker_height}")
    scale = fit_width_scale(marker_width, surface.width)
    width = float(surface.width)
    height = marker_height * scale
    rect = Rect(
        x=(surface.width - width) / 2,
        y=surface.height - height - INITIAL_BOTTOM_MARGIN,
        width=width,
        height=height,
    )
    # a marker taller than the surface is pinned to the top edge
    return _validator.clamp_position(rect, surface)


def recentered_placement(rect: Rect, surface: Size) -> Rect:
    """Re-center a placement for a newly uploaded image.

    Depends only on the marker size, the surface and UPLOAD_BOTTOM_MARGIN,
    never on where the marker was before.
    """
    return _validator.clamp_position(
        rect.moved_to(
            (surface.width - rect.width) / 2,
            surface.height - rect.height - UPLOAD_BOTTOM_MARGIN,
        ),
        surface,
    )


def moved_placement(
    rect: Rect, proposed_x: float, proposed_y: float, surface: Size
) -> Rect:
    """Move a placement to a proposed origin, clamped to the surface.

    Returns ``rect`` itself (same object) when the clamped origin equals
    the current one, so callers can detect a no-op with ``is``.
    """
    clamped = _validator.clamp_position(rect.moved_to(proposed_x, proposed_y), surface)
    if clamped.x == rect.x and clamped.y == rect.y:
        return rect
    return clamped


class MarkerPlacement:
    """Owner of the marker's current placement.

    The placement is None until the marker asset has loaded. Every
    committed change is pushed to the registered listeners; no-op moves
    are not.

    Usage:
        placement = MarkerPlacement(Size.square(EDIT_SURFACE_SIZE))
        placement.subscribe(lambda rect: redraw())
        placement.initialize(600, 200)
        placement.move_to(0, 400)
    """

    __slots__ = ("_listeners", "_rect", "_surface")

    def __init__(self, surface: Size) -> None:
        self._surface = surface
        self._rect: Rect | None = None
        self._listeners: list[PlacementListener] = []

    @property
    def surface(self) -> Size:
        return self._surface

    @property
    def rect(self) -> Rect | None:
        """Current placement, or None before the marker asset has loaded."""
        return self._rect

    @property
    def is_initialized(self) -> bool:
        return self._rect is not None

    def subscribe(self, listener: PlacementListener) -> None:
        """Register a callback invoked with the new Rect after each change."""
        self._listeners.append(listener)

    def initialize(self, marker_width: float, marker_height: float) -> Rect:
        """Size and place the marker for the first time."""
        rect = initial_placement(marker_width, marker_height, self._surface)
        logger.debug("Marker placement initialized: %s", rect.to_tuple())
        self._commit(rect)
        return rect

    def recenter_for_new_image(self) -> Rect | None:
        """Re-center the marker after an upload; no-op before initialization."""
        if self._rect is None:
            return None
        rect = recentered_placement(self._rect, self._surface)
        if rect != self._rect:
            self._commit(rect)
        return self._rect

    def move_to(self, proposed_x: float, proposed_y: float) -> bool:
        """Move the marker, clamped to the surface.

        Returns:
            True if the placement changed (and listeners were notified).
        """
        if self._rect is None:
            return False
        rect = moved_placement(self._rect, proposed_x, proposed_y, self._surface)
        if rect is self._rect:
            return False
        self._commit(rect)
        return True

    def _commit(self, rect: Rect) -> None:
        try:
            _validator.validate(rect, self._surface)
        except ValidationError as e:
            logger.warning("Committed placement leaves the surface: %s", e)
        self._rect = rect
        for listener in self._listeners:
            listener(rect)
