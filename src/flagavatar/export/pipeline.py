"""Full-resolution export of the composite.

The export reuses CompositeRenderer on an off-screen surface sized to the
uploaded image's native resolution. The base image is already that size,
so it is drawn 1:1; the marker placement is scaled by
true width / edit surface width, the same factor on every axis.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image

from flagavatar.exceptions import ExportWithoutImageError
from flagavatar.geometry import Rect, Size, export_scale
from flagavatar.media.types import LoadedImage, MarkerAsset
from flagavatar.render.composite import CompositeRenderer

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "avatar-with-flag.png"
EXPORT_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class ExportArtifact:
    """A serialized composite ready to be saved.

    Attributes:
        filename: File name to save under.
        data: Encoded PNG bytes.
        size: Pixel dimensions of the image (the upload's native size).
        scale: Edit-to-export factor used for the marker.
        media_type: Media type of ``data``.
    """

    filename: str
    data: bytes
    size: Size
    scale: float
    media_type: str = EXPORT_MEDIA_TYPE


class ExportPipeline:
    """Renders the composite at native resolution and encodes it as PNG.

    Example:
        >>> pipeline = ExportPipeline()
        >>> artifact = pipeline.export(loaded, marker, placement, 500)
        >>> path = pipeline.save(artifact, Path("out"))
    """

    def __init__(
        self,
        renderer: CompositeRenderer | None = None,
        filename: str = EXPORT_FILENAME,
    ) -> None:
        """Initialize the pipeline.

        Args:
            renderer: Renderer to draw with. Creates default if not provided.
            filename: Name given to every exported artifact.
        """
        self.renderer = renderer or CompositeRenderer()
        self.filename = filename

    def render(
        self,
        base: LoadedImage | None,
        marker: MarkerAsset | None,
        placement: Rect | None,
        edit_surface_size: int,
    ) -> tuple[Image.Image, float]:
        """Render the full-resolution composite without encoding it.

        Returns:
            (image, scale) where image is trueWidth x trueHeight RGBA.

        Raises:
            ExportWithoutImageError: If no image has been uploaded.
        """
        if base is None or base.width == 0:
            raise ExportWithoutImageError("Please upload an image before downloading.")

        scale = export_scale(edit_surface_size, base.width)
        target = Image.new("RGBA", (base.width, base.height), (0, 0, 0, 0))
        self.renderer.render(
            target,
            base.image,
            marker.image if marker is not None else None,
            placement,
            scale=scale,
        )
        return target, scale

    def export(
        self,
        base: LoadedImage | None,
        marker: MarkerAsset | None,
        placement: Rect | None,
        edit_surface_size: int,
    ) -> ExportArtifact:
        """Render and encode the composite as a lossless PNG.

        Args:
            base: Uploaded image with its native dimensions.
            marker: Marker asset, or None if it has not loaded.
            placement: Marker placement in edit-surface units.
            edit_surface_size: Width of the square edit surface.

        Returns:
            ExportArtifact holding the PNG bytes.

        Raises:
            ExportWithoutImageError: If no image has been uploaded.
        """
        image, scale = self.render(base, marker, placement, edit_surface_size)

        buffer = BytesIO()
        image.save(buffer, format="PNG")
        artifact = ExportArtifact(
            filename=self.filename,
            data=buffer.getvalue(),
            size=Size(width=image.width, height=image.height),
            scale=scale,
        )
        logger.info(
            "Exported %s (%dx%d, scale=%.4f, %d bytes)",
            artifact.filename,
            image.width,
            image.height,
            scale,
            len(artifact.data),
        )
        return artifact

    def save(self, artifact: ExportArtifact, directory: str | Path) -> Path:
        """Write an artifact into a directory under its fixed file name.

        Returns:
            Path of the written file.
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        return self.write(artifact, directory / artifact.filename)

    def write(self, artifact: ExportArtifact, path: str | Path) -> Path:
        """Write an artifact to an exact path chosen by the host."""
        path = Path(path)
        path.write_bytes(artifact.data)
        logger.info("Saved %s", path)
        return path
