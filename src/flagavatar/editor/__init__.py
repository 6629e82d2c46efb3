"""Interactive editing state for flag-avatar.

Usage:
    from flagavatar.editor import EditorSession, PointerEvent

    session = EditorSession(notice_handler=print)
    session.mount()
    await session.load_marker()
    await session.upload_path("me.jpg")
"""

from flagavatar.editor.drag import (
    IDLE,
    DragController,
    Dragging,
    DragState,
    DragTarget,
    Idle,
    PointerEvent,
)
from flagavatar.editor.placement import (
    EDIT_SURFACE_SIZE,
    INITIAL_BOTTOM_MARGIN,
    UPLOAD_BOTTOM_MARGIN,
    MarkerPlacement,
    initial_placement,
    moved_placement,
    recentered_placement,
)
from flagavatar.editor.session import EditorSession, Notice, NoticeLevel, Surfaces

__all__ = [
    "EDIT_SURFACE_SIZE",
    "IDLE",
    "INITIAL_BOTTOM_MARGIN",
    "UPLOAD_BOTTOM_MARGIN",
    "DragController",
    "DragState",
    "DragTarget",
    "Dragging",
    "EditorSession",
    "Idle",
    "MarkerPlacement",
    "Notice",
    "NoticeLevel",
    "PointerEvent",
    "Surfaces",
    "initial_placement",
    "moved_placement",
    "recentered_placement",
]
