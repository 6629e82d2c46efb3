"""Drag state machine for repositioning the marker.

Pointer events arrive in display pixels; they are converted to
edit-surface units before any hit test or offset computation.

States:
- Idle: no gesture in progress
- Dragging: the pointer grabbed the marker at grab_offset from its origin

Transitions:
- Idle/Dragging --pointer_down(hit)--> Dragging
- Idle/Dragging --pointer_down(miss)--> Idle (cancels a stale drag)
- Dragging --pointer_move--> Dragging (marker moved, clamped)
- Dragging --pointer_up / pointer_leave--> Idle
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from flagavatar.editor.placement import MarkerPlacement
from flagavatar.geometry import Point, Size, display_to_edit

logger = logging.getLogger(__name__)


class DragTarget(Enum):
    """Things that can be dragged on the edit surface."""

    MARKER = "marker"


@dataclass(frozen=True)
class Idle:
    """No drag in progress."""


@dataclass(frozen=True)
class Dragging:
    """A drag gesture is in progress.

    Attributes:
        target: What is being dragged.
        grab_offset: Pointer position minus the target's origin at grab time,
            in edit-surface units.
    """

    target: DragTarget
    grab_offset: Point


DragState = Idle | Dragging

IDLE = Idle()


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event on the edit surface, in display pixels.

    Attributes:
        x: Horizontal position relative to the surface's on-screen left edge.
        y: Vertical position relative to the surface's on-screen top edge.
        display_width: Rendered on-screen width of the surface.
        display_height: Rendered on-screen height of the surface.
    """

    x: float
    y: float
    display_width: int
    display_height: int

    def to_edit_space(self, surface: Size) -> Point:
        """Return this event's position in edit-surface units."""
        return display_to_edit(
            Point(x=self.x, y=self.y),
            Size(width=self.display_width, height=self.display_height),
            surface,
        )


class DragController:
    """Translates pointer events into marker moves.

    The controller never stores a copy of the placement: every event reads
    the current Rect from the MarkerPlacement it was given.

    Usage:
        controller = DragController(placement)
        controller.pointer_down(PointerEvent(50, 330, 500, 500))
        controller.pointer_move(PointerEvent(490, 490, 500, 500))
        controller.pointer_up()
    """

    __slots__ = ("_gestures", "_placement", "_state")

    def __init__(self, placement: MarkerPlacement) -> None:
        self._placement = placement
        self._state: DragState = IDLE
        self._gestures = 0

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._state, Dragging)

    @property
    def gesture_count(self) -> int:
        """Number of drag gestures started so far."""
        return self._gestures

    @property
    def cursor(self) -> str:
        """Cursor name a host should show over the edit surface."""
        return "grabbing" if self.is_dragging else "grab"

    def pointer_down(self, event: PointerEvent) -> DragState:
        """Start a drag if the pointer hits the marker, otherwise reset to Idle."""
        point = event.to_edit_space(self._placement.surface)
        rect = self._placement.rect

        if rect is not None and rect.contains_point(point):
            self._gestures += 1
            self._state = Dragging(
                target=DragTarget.MARKER,
                grab_offset=point - rect.origin,
            )
            logger.debug("Drag started at %s", point.to_tuple())
        else:
            self._state = IDLE
        return self._state

    def pointer_move(self, event: PointerEvent) -> bool:
        """Move the dragged marker under the pointer.

        Returns:
            True if the marker placement changed.
        """
        state = self._state
        if not isinstance(state, Dragging):
            return False

        point = event.to_edit_space(self._placement.surface)
        proposed = point - state.grab_offset
        return self._placement.move_to(proposed.x, proposed.y)

    def pointer_up(self) -> None:
        """End the current gesture."""
        if self.is_dragging:
            logger.debug("Drag ended")
        self._state = IDLE

    def pointer_leave(self) -> None:
        """Pointer left the surface; behaves exactly like pointer_up."""
        self.pointer_up()
