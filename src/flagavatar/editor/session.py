"""Editor session: the single owner of all editing state.

The session holds the marker asset, the current upload, the marker
placement and the drag controller, and it owns the edit and preview
surfaces once a host mounts them. Every committed mutation is followed
by one render pass (edit surface, then circular preview) and a
notification to subscribers.

Two operations are asynchronous: decoding the marker asset and decoding
an upload. Their completion handlers are methods of the session and read
the state current at the time they run.

Components below the session raise FlagAvatarError subclasses; the
session is where those become user-visible notices.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO

from PIL import Image

from flagavatar.config import settings
from flagavatar.editor.drag import DragController, DragState, PointerEvent
from flagavatar.editor.placement import EDIT_SURFACE_SIZE, MarkerPlacement
from flagavatar.exceptions import FlagAvatarError, MissingRenderSurfaceError
from flagavatar.export.pipeline import ExportArtifact, ExportPipeline
from flagavatar.geometry import Rect, Size
from flagavatar.media.assets import load_marker_asset_async
from flagavatar.media.ingestion import ImageIngestion
from flagavatar.media.types import LoadedImage, MarkerAsset
from flagavatar.render.composite import CompositeRenderer
from flagavatar.render.preview import PreviewRenderer
from flagavatar.utils.logging import set_correlation_context

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    """Severity of a user-visible notice."""

    info = "info"
    warning = "warning"
    error = "error"


@dataclass(frozen=True)
class Notice:
    """A message the host must show to the user (blocking)."""

    level: NoticeLevel
    message: str


NoticeHandler = Callable[[Notice], None]
RenderListener = Callable[["EditorSession"], None]


@dataclass(frozen=True)
class Surfaces:
    """The mounted edit and preview surfaces."""

    edit: Image.Image
    preview: Image.Image


class EditorSession:
    """Owns marker, upload, placement, drag state and surfaces.

    Usage:
        session = EditorSession(notice_handler=print)
        session.mount()
        await session.load_marker()
        await session.upload_path("me.jpg")
        session.pointer_down(PointerEvent(250, 400, 500, 500))
        session.pointer_move(PointerEvent(260, 380, 500, 500))
        session.pointer_up()
        artifact = session.export()
    """

    def __init__(
        self,
        *,
        notice_handler: NoticeHandler | None = None,
        renderer: CompositeRenderer | None = None,
        preview_renderer: PreviewRenderer | None = None,
        exporter: ExportPipeline | None = None,
        ingestion: ImageIngestion | None = None,
        edit_surface_size: int = EDIT_SURFACE_SIZE,
        preview_size: int | None = None,
    ) -> None:
        """Create a session with no surfaces, marker or image.

        Args:
            notice_handler: Receives user-visible notices. Notices are only
                logged when not provided.
            renderer: Composite renderer shared by edit surface and export.
            preview_renderer: Circular preview renderer.
            exporter: Export pipeline. Built around ``renderer`` if not provided.
            ingestion: Upload decoder.
            edit_surface_size: Side of the square edit surface.
            preview_size: Side of the square preview surface.
                Defaults to settings.PREVIEW_SIZE.
        """
        self.session_id = uuid.uuid4().hex[:12]
        self._notice_handler = notice_handler
        self._renderer = renderer or CompositeRenderer()
        self._preview_renderer = preview_renderer or PreviewRenderer()
        self._exporter = exporter or ExportPipeline(renderer=self._renderer)
        self._ingestion = ingestion or ImageIngestion()

        self._surface_size = Size.square(edit_surface_size)
        self._preview_size = Size.square(preview_size or settings.PREVIEW_SIZE)
        self._surfaces: Surfaces | None = None

        self._marker: MarkerAsset | None = None
        self._base: LoadedImage | None = None
        self._placement = MarkerPlacement(self._surface_size)
        self._drag = DragController(self._placement)
        self._listeners: list[RenderListener] = []
        self._render_count = 0

        self._placement.subscribe(self._on_placement_changed)
        set_correlation_context(session_id=self.session_id)

    # ---- State (read-only views) ----

    @property
    def surface_size(self) -> Size:
        return self._surface_size

    @property
    def surfaces(self) -> Surfaces | None:
        return self._surfaces

    @property
    def marker(self) -> MarkerAsset | None:
        return self._marker

    @property
    def base_image(self) -> LoadedImage | None:
        return self._base

    @property
    def placement(self) -> Rect | None:
        return self._placement.rect

    @property
    def drag_state(self) -> DragState:
        return self._drag.state

    @property
    def cursor(self) -> str:
        return self._drag.cursor

    @property
    def can_export(self) -> bool:
        """True once an image has been uploaded."""
        return self._base is not None

    @property
    def render_count(self) -> int:
        """Number of completed render passes."""
        return self._render_count

    def subscribe(self, listener: RenderListener) -> None:
        """Register a callback invoked after each completed render pass."""
        self._listeners.append(listener)

    # ---- Surfaces ----

    def mount(self) -> Surfaces:
        """Create the edit and preview surfaces and draw them once."""
        self._surfaces = Surfaces(
            edit=Image.new("RGBA", self._surface_size.to_tuple(), (0, 0, 0, 0)),
            preview=Image.new("RGBA", self._preview_size.to_tuple(), (0, 0, 0, 0)),
        )
        self.render()
        return self._surfaces

    def unmount(self) -> None:
        self._surfaces = None

    def require_surfaces(self) -> Surfaces:
        """Return the mounted surfaces.

        Raises:
            MissingRenderSurfaceError: If no surfaces are mounted.
        """
        if self._surfaces is None:
            raise MissingRenderSurfaceError("Render surfaces are not mounted")
        return self._surfaces

    def render(self) -> bool:
        """Redraw the edit surface and the circular preview.

        A pass requested before the surfaces are mounted is skipped.

        Returns:
            True if a pass ran.
        """
        surfaces = self._surfaces
        if surfaces is None:
            logger.debug("Render skipped: surfaces not mounted")
            return False

        self._renderer.render(
            surfaces.edit,
            self._base.image if self._base is not None else None,
            self._marker.image if self._marker is not None else None,
            self._placement.rect,
        )
        self._preview_renderer.render(surfaces.preview, surfaces.edit)
        self._render_count += 1

        for listener in self._listeners:
            listener(self)
        return True

    # ---- Marker asset ----

    async def load_marker(self, path: str | Path | None = None) -> bool:
        """Decode the marker asset and place it.

        Returns:
            True if the marker was installed.
        """
        try:
            asset = await load_marker_asset_async(path)
        except FlagAvatarError as e:
            self._notify(NoticeLevel.error, f"Could not load the marker graphic: {e.message}")
            return False
        return self.on_marker_decoded(asset)

    def on_marker_decoded(self, asset: MarkerAsset) -> bool:
        """Install a decoded marker asset.

        The asset is only installed once the edit surface is mounted;
        earlier completions return without changing anything.

        Returns:
            True if the marker was installed.
        """
        if self._surfaces is None:
            logger.warning("Marker decoded before the edit surface was mounted; ignoring")
            return False

        self._marker = asset
        # initialize() commits the placement, which triggers the render pass
        self._placement.initialize(asset.width, asset.height)
        return True

    # ---- Uploads ----

    async def upload(
        self,
        source: BinaryIO | bytes,
        media_type: str | None,
        name: str | None = None,
    ) -> LoadedImage | None:
        """Decode an upload and make it the base image.

        Rejected or undecodable uploads produce a notice and leave the
        session unchanged.

        Returns:
            The new base image, or None if the upload was refused.
        """
        return await self._accept_upload(
            self._ingestion.ingest(source, media_type, name=name)
        )

    async def upload_path(self, path: str | Path) -> LoadedImage | None:
        """Upload a file from disk. See upload()."""
        return await self._accept_upload(self._ingestion.ingest_path(path))

    def on_image_decoded(self, loaded: LoadedImage) -> None:
        """Replace the base image and re-center the marker, then redraw."""
        self._base = loaded
        previous = self._placement.rect
        self._placement.recenter_for_new_image()
        if self._placement.rect is previous:
            # No placement change was committed, so nothing has redrawn yet
            self.render()

    async def _accept_upload(
        self, decoding: Coroutine[Any, Any, LoadedImage]
    ) -> LoadedImage | None:
        set_correlation_context(upload_id=uuid.uuid4().hex[:8])
        try:
            loaded = await decoding
        except FlagAvatarError as e:
            self._notify(NoticeLevel.error, e.message)
            return None
        self.on_image_decoded(loaded)
        return loaded

    # ---- Pointer events ----

    def pointer_down(self, event: PointerEvent) -> DragState:
        state = self._drag.pointer_down(event)
        if self._drag.is_dragging:
            set_correlation_context(gesture=self._drag.gesture_count)
        return state

    def pointer_move(self, event: PointerEvent) -> bool:
        """Forward a move; the render pass runs only if the marker moved."""
        return self._drag.pointer_move(event)

    def pointer_up(self) -> None:
        self._drag.pointer_up()

    def pointer_leave(self) -> None:
        self._drag.pointer_leave()

    # ---- Export ----

    def export(self) -> ExportArtifact | None:
        """Export the composite at the upload's native resolution.

        Returns:
            The artifact, or None (with a notice) if no image was uploaded.
        """
        try:
            return self._exporter.export(
                self._base,
                self._marker,
                self._placement.rect,
                self._surface_size.width,
            )
        except FlagAvatarError as e:
            self._notify(NoticeLevel.warning, e.message)
            return None

    def save(self, artifact: ExportArtifact, directory: str | Path) -> Path:
        """Hand an artifact to the host file system."""
        return self._exporter.save(artifact, directory)

    def save_as(self, artifact: ExportArtifact, path: str | Path) -> Path | None:
        """Write an artifact to a host-chosen path.

        Returns:
            The written path, or None (with an error notice) if the write failed.
        """
        try:
            return self._exporter.write(artifact, path)
        except OSError as e:
            self._notify(NoticeLevel.error, f"Could not save the avatar: {e}")
            return None

    # ---- Internals ----

    def _on_placement_changed(self, rect: Rect) -> None:
        logger.debug("Placement changed: %s", rect.to_tuple())
        self.render()

    def _notify(self, level: NoticeLevel, message: str) -> None:
        logger.warning("Notice (%s): %s", level.value, message)
        if self._notice_handler is not None:
            self._notice_handler(Notice(level=level, message=message))
