"""Unit tests for CompositeRenderer."""

from __future__ import annotations

import pytest
from PIL import Image

from flagavatar.geometry import Rect
from flagavatar.render.composite import CompositeRenderer, PlaceholderStyle

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
TRANSPARENT = (0, 0, 0, 0)
PLACEHOLDER_GREY = (224, 224, 224, 255)


@pytest.fixture
def renderer() -> CompositeRenderer:
    return CompositeRenderer(PlaceholderStyle())


@pytest.fixture
def target() -> Image.Image:
    return Image.new("RGBA", (500, 500), TRANSPARENT)


@pytest.fixture
def red_marker() -> Image.Image:
    return Image.new("RGBA", (300, 100), RED)


class TestPlaceholder:
    """Tests for the empty-state rendering."""

    def test_fills_background(self, renderer: CompositeRenderer, target: Image.Image) -> None:
        renderer.render(target, None, None, None)
        assert target.getpixel((5, 5)) == PLACEHOLDER_GREY
        assert target.getpixel((495, 495)) == PLACEHOLDER_GREY

    def test_draws_label_near_center(
        self, renderer: CompositeRenderer, target: Image.Image
    ) -> None:
        renderer.render(target, None, None, None)
        band = target.crop((0, 230, 500, 270))
        colors = {color for _, color in band.getcolors(maxcolors=500 * 40) or []}
        assert colors - {PLACEHOLDER_GREY}

    def test_deterministic(self, renderer: CompositeRenderer) -> None:
        first = renderer.render(Image.new("RGBA", (500, 500)), None, None, None)
        second = renderer.render(Image.new("RGBA", (500, 500)), None, None, None)
        assert first.tobytes() == second.tobytes()

    def test_style_from_settings(self) -> None:
        style = PlaceholderStyle.from_settings()
        assert style.background == "#E0E0E0"
        assert style.font_size == 16


class TestBaseImage:
    """Tests for drawing the uploaded image."""

    def test_wide_image_fitted_and_centered(
        self, renderer: CompositeRenderer, target: Image.Image
    ) -> None:
        base = Image.new("RGBA", (1000, 500), BLUE)
        renderer.render(target, base, None, None)
        # 500 x 250 band centered vertically
        assert target.getpixel((250, 50)) == TRANSPARENT
        assert target.getpixel((250, 250)) == BLUE
        assert target.getpixel((250, 450)) == TRANSPARENT

    def test_rgb_base_is_accepted(
        self, renderer: CompositeRenderer, target: Image.Image
    ) -> None:
        base = Image.new("RGB", (500, 500), (0, 0, 255))
        renderer.render(target, base, None, None)
        assert target.getpixel((10, 10)) == BLUE

    def test_clears_previous_frame(
        self, renderer: CompositeRenderer, target: Image.Image
    ) -> None:
        renderer.render(target, Image.new("RGBA", (500, 500), BLUE), None, None)
        renderer.render(target, Image.new("RGBA", (500, 100), RED), None, None)
        assert target.getpixel((250, 10)) == TRANSPARENT


class TestMarker:
    """Tests for drawing the marker."""

    def test_marker_drawn_at_placement(
        self,
        renderer: CompositeRenderer,
        target: Image.Image,
        red_marker: Image.Image,
    ) -> None:
        placement = Rect(x=100, y=300, width=300, height=100)
        renderer.render(target, Image.new("RGBA", (500, 500), BLUE), red_marker, placement)
        assert target.getpixel((250, 350)) == RED
        assert target.getpixel((50, 350)) == BLUE
        assert target.getpixel((250, 420)) == BLUE

    def test_marker_scaled(
        self,
        renderer: CompositeRenderer,
        red_marker: Image.Image,
    ) -> None:
        target = Image.new("RGBA", (1000, 1000))
        placement = Rect(x=100, y=300, width=300, height=100)
        renderer.render(target, Image.new("RGBA", (1000, 1000), BLUE), red_marker, placement, scale=2.0)
        assert target.getpixel((210, 610)) == RED
        assert target.getpixel((790, 790)) == RED
        assert target.getpixel((810, 790)) == BLUE
        assert target.getpixel((500, 810)) == BLUE

    def test_marker_without_placement_skipped(
        self,
        renderer: CompositeRenderer,
        target: Image.Image,
        red_marker: Image.Image,
    ) -> None:
        renderer.render(target, Image.new("RGBA", (500, 500), BLUE), red_marker, None)
        assert RED not in {c for _, c in target.getcolors(maxcolors=500 * 500) or []}

    def test_idempotent(
        self,
        renderer: CompositeRenderer,
        target: Image.Image,
        red_marker: Image.Image,
    ) -> None:
        placement = Rect(x=0, y=318.3333, width=500, height=166.6667)
        base = Image.new("RGBA", (800, 600), BLUE)
        first = renderer.render(target, base, red_marker, placement).tobytes()
        second = renderer.render(target, base, red_marker, placement).tobytes()
        assert first == second


class TestValidation:
    def test_rejects_non_rgba_target(self, renderer: CompositeRenderer) -> None:
        with pytest.raises(ValueError, match="RGBA"):
            renderer.render(Image.new("RGB", (10, 10)), None, None, None)

    def test_rejects_non_positive_scale(
        self, renderer: CompositeRenderer, target: Image.Image
    ) -> None:
        with pytest.raises(ValueError, match="scale"):
            renderer.render(target, None, None, None, scale=0)
