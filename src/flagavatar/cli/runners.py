"""Runner implementations behind the flag-avatar CLI commands.

Each runner drives an EditorSession headlessly: it mounts surfaces,
loads the marker, uploads the image, replays drag gestures as pointer
events and exports the composite.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path

from flagavatar.editor.drag import PointerEvent
from flagavatar.editor.session import EditorSession, Notice
from flagavatar.geometry import Rect, Size
from flagavatar.utils.logging import get_logger

_PAIR = r"\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*"
_DRAG_PATTERN = re.compile(rf"^{_PAIR}:{_PAIR}$")
_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*[x,]\s*(\d+)\s*$")


@dataclass(frozen=True)
class DragGesture:
    """A press at ``start`` followed by a move to ``end`` and a release.

    Coordinates are display pixels relative to the edit surface.
    """

    start: tuple[float, float]
    end: tuple[float, float]


@dataclass
class ComposeResult:
    """Outcome of a compose run."""

    success: bool
    output_path: Path | None = None
    preview_path: Path | None = None
    placement: Rect | None = None
    size: Size | None = None
    scale: float | None = None
    notices: list[Notice] = field(default_factory=list)


def parse_drag(value: str) -> DragGesture:
    """Parse ``"FX,FY:TX,TY"`` into a DragGesture.

    Raises:
        ValueError: If the value is malformed.
    """
    match = _DRAG_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid drag '{value}', expected FX,FY:TX,TY")
    fx, fy, tx, ty = (float(g) for g in match.groups())
    return DragGesture(start=(fx, fy), end=(tx, ty))


def parse_size(value: str) -> Size:
    """Parse ``"W,H"`` or ``"WxH"`` into a Size.

    Raises:
        ValueError: If the value is malformed or not positive.
    """
    match = _SIZE_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid size '{value}', expected W,H")
    return Size(width=int(match.group(1)), height=int(match.group(2)))


def run_compose(
    image_path: Path,
    *,
    drags: list[DragGesture],
    display_size: Size,
    output_dir: Path,
    preview_path: Path | None = None,
) -> ComposeResult:
    """Compose the marker onto an image and export it (sync wrapper)."""
    return asyncio.run(
        _compose_async(
            image_path,
            drags=drags,
            display_size=display_size,
            output_dir=output_dir,
            preview_path=preview_path,
        )
    )


async def _compose_async(
    image_path: Path,
    *,
    drags: list[DragGesture],
    display_size: Size,
    output_dir: Path,
    preview_path: Path | None,
) -> ComposeResult:
    logger = get_logger(__name__)
    result = ComposeResult(success=False)
    session = EditorSession(notice_handler=result.notices.append)
    session.mount()

    if not await session.load_marker():
        return result
    if await session.upload_path(image_path) is None:
        return result

    for gesture in drags:
        _replay(session, gesture, display_size)
        logger.info(
            "Replayed drag",
            start=gesture.start,
            end=gesture.end,
            placement=session.placement.to_tuple() if session.placement else None,
        )

    if preview_path is not None:
        surfaces = session.require_surfaces()
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        surfaces.preview.save(preview_path, format="PNG")
        result.preview_path = preview_path

    artifact = session.export()
    if artifact is None:
        return result

    result.output_path = session.save(artifact, output_dir)
    result.placement = session.placement
    result.size = artifact.size
    result.scale = artifact.scale
    result.success = True
    return result


def _replay(session: EditorSession, gesture: DragGesture, display_size: Size) -> None:
    width, height = display_size.to_tuple()
    session.pointer_down(PointerEvent(gesture.start[0], gesture.start[1], width, height))
    session.pointer_move(PointerEvent(gesture.end[0], gesture.end[1], width, height))
    session.pointer_up()
