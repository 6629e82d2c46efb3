"""Unit tests for the export pipeline."""

from __future__ import annotations

from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from flagavatar.exceptions import ExportWithoutImageError
from flagavatar.export.pipeline import EXPORT_FILENAME, ExportArtifact, ExportPipeline
from flagavatar.geometry import Rect, Size
from flagavatar.media.types import LoadedImage, MarkerAsset

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def pipeline() -> ExportPipeline:
    return ExportPipeline()


@pytest.fixture
def placement() -> Rect:
    return Rect(x=100, y=300, width=300, height=100)


class TestRender:
    """Tests for ExportPipeline.render."""

    def test_without_image_raises(
        self, pipeline: ExportPipeline, marker: MarkerAsset, placement: Rect
    ) -> None:
        with pytest.raises(ExportWithoutImageError, match="upload an image"):
            pipeline.render(None, marker, placement, 500)

    def test_output_matches_native_size(
        self,
        pipeline: ExportPipeline,
        loaded_image: Callable[..., LoadedImage],
        marker: MarkerAsset,
        placement: Rect,
    ) -> None:
        image, scale = pipeline.render(loaded_image(1200, 800), marker, placement, 500)
        assert image.size == (1200, 800)
        assert scale == pytest.approx(2.4)

    def test_marker_scaled_uniformly(
        self,
        pipeline: ExportPipeline,
        loaded_image: Callable[..., LoadedImage],
        marker: MarkerAsset,
        placement: Rect,
    ) -> None:
        image, _ = pipeline.render(loaded_image(1000, 1000), marker, placement, 500)
        # Placement x2: (200, 600) to (800, 800)
        assert image.getpixel((205, 605)) == RED
        assert image.getpixel((795, 795)) == RED
        assert image.getpixel((195, 700)) == BLUE
        assert image.getpixel((500, 805)) == BLUE

    def test_base_drawn_one_to_one(
        self,
        pipeline: ExportPipeline,
        marker: MarkerAsset,
    ) -> None:
        base = Image.new("RGBA", (640, 480), BLUE)
        base.putpixel((0, 0), RED)
        loaded = LoadedImage(image=base, width=640, height=480, media_type="image/png")
        image, _ = pipeline.render(loaded, None, None, 500)
        assert image.getpixel((0, 0)) == RED
        assert image.getpixel((1, 0)) == BLUE

    def test_uses_given_renderer(
        self, loaded_image: Callable[..., LoadedImage], placement: Rect
    ) -> None:
        renderer = MagicMock()
        ExportPipeline(renderer=renderer).render(loaded_image(1200, 1200), None, placement, 500)
        _, kwargs = renderer.render.call_args
        assert kwargs["scale"] == pytest.approx(2.4)


class TestExport:
    """Tests for encoding and saving."""

    def test_artifact_is_png(
        self,
        pipeline: ExportPipeline,
        loaded_image: Callable[..., LoadedImage],
        marker: MarkerAsset,
        placement: Rect,
    ) -> None:
        artifact = pipeline.export(loaded_image(1200, 800), marker, placement, 500)
        assert artifact.filename == EXPORT_FILENAME == "avatar-with-flag.png"
        assert artifact.media_type == "image/png"
        assert artifact.size == Size(width=1200, height=800)
        with Image.open(BytesIO(artifact.data)) as decoded:
            assert decoded.format == "PNG"
            assert decoded.size == (1200, 800)

    def test_save_writes_fixed_name(self, pipeline: ExportPipeline, tmp_path: Path) -> None:
        artifact = ExportArtifact(
            filename=EXPORT_FILENAME, data=b"png", size=Size.square(1), scale=1.0
        )
        path = pipeline.save(artifact, tmp_path / "nested")
        assert path == tmp_path / "nested" / EXPORT_FILENAME
        assert path.read_bytes() == b"png"

    def test_write_uses_exact_path(self, pipeline: ExportPipeline, tmp_path: Path) -> None:
        artifact = ExportArtifact(
            filename=EXPORT_FILENAME, data=b"png", size=Size.square(1), scale=1.0
        )
        path = pipeline.write(artifact, tmp_path / "mine.png")
        assert path == tmp_path / "mine.png"
        assert path.read_bytes() == b"png"

    def test_write_propagates_os_error(self, pipeline: ExportPipeline, tmp_path: Path) -> None:
        artifact = ExportArtifact(
            filename=EXPORT_FILENAME, data=b"png", size=Size.square(1), scale=1.0
        )
        with pytest.raises(OSError):
            pipeline.write(artifact, tmp_path / "missing-dir" / "mine.png")
