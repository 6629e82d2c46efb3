"""Composite rendering of the base image and the marker.

The same renderer draws the live edit surface (scale=1) and the
full-resolution export surface (scale = true width / edit width), so
the exported file reproduces what the edit surface shows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image, ImageColor, ImageDraw, ImageFont

from flagavatar.config import settings
from flagavatar.geometry import Rect, center_offset, fit_scale

logger = logging.getLogger(__name__)

_TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class PlaceholderStyle:
    """Appearance of the surface before any image is uploaded.

    Attributes:
        background: Fill color (any Pillow color string).
        text_color: Label color.
        label: Text drawn at the center of the surface.
        font_size: Label font size in pixels.
    """

    background: str = "#E0E0E0"
    text_color: str = "#616161"
    label: str = "Please upload an image"
    font_size: int = 16

    @classmethod
    def from_settings(cls) -> PlaceholderStyle:
        """Build the style from application settings."""
        return cls(
            background=settings.PLACEHOLDER_COLOR,
            text_color=settings.PLACEHOLDER_TEXT_COLOR,
            label=settings.PLACEHOLDER_LABEL,
            font_size=settings.PLACEHOLDER_FONT_SIZE,
        )


def _pixel_box(x: float, y: float, width: float, height: float) -> tuple[int, int, int, int]:
    """Round a float rectangle to (left, top, width, height) in whole pixels."""
    left = round(x)
    top = round(y)
    return (left, top, max(1, round(width)), max(1, round(height)))


class CompositeRenderer:
    """Draws base image + marker onto a target surface of any size.

    The renderer owns nothing: it reads the images and the placement it is
    given and writes only to the target. Calling render twice with the same
    inputs produces identical pixels.
    """

    def __init__(self, placeholder: PlaceholderStyle | None = None) -> None:
        """Initialize the renderer.

        Args:
            placeholder: Placeholder appearance. Uses settings if not provided.
        """
        self.placeholder = placeholder or PlaceholderStyle.from_settings()

    def render(
        self,
        target: Image.Image,
        base_image: Image.Image | None,
        marker_image: Image.Image | None,
        placement: Rect | None,
        scale: float = 1.0,
    ) -> Image.Image:
        """Render the composite onto ``target`` in place.

        Steps:
            1. Clear the target to transparent.
            2. Draw the base image fitted and centered, or the placeholder.
            3. Draw the marker at placement * scale.

        Args:
            target: RGBA surface to draw on.
            base_image: Uploaded image, or None for the placeholder.
            marker_image: Marker asset image, or None if not loaded yet.
            placement: Marker placement in edit-surface units.
            scale: Factor from edit-surface units to target pixels.

        Returns:
            The target, for chaining.

        Raises:
            ValueError: If the target is not RGBA or scale is not positive.
        """
        if target.mode != "RGBA":
            raise ValueError(f"target must be RGBA, got {target.mode}")
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")

        target.paste(_TRANSPARENT, (0, 0, target.width, target.height))

        if base_image is not None:
            self._draw_base(target, base_image)
        else:
            self._draw_placeholder(target)

        if marker_image is not None and placement is not None:
            self._draw_marker(target, marker_image, placement, scale)

        return target

    def _draw_base(self, target: Image.Image, base_image: Image.Image) -> None:
        """Draw the base image scaled to fit and centered on the target."""
        scale = fit_scale(base_image.width, base_image.height, target.width, target.height)
        offset_x, offset_y = center_offset(
            target.width,
            target.height,
            base_image.width * scale,
            base_image.height * scale,
        )
        left, top, width, height = _pixel_box(
            offset_x, offset_y, base_image.width * scale, base_image.height * scale
        )

        layer = base_image if base_image.mode == "RGBA" else base_image.convert("RGBA")
        if layer.size != (width, height):
            layer = layer.resize((width, height), Image.Resampling.LANCZOS)

        target.alpha_composite(layer, dest=(max(0, left), max(0, top)))

    def _draw_placeholder(self, target: Image.Image) -> None:
        """Fill the target and draw the centered placeholder label."""
        style = self.placeholder
        target.paste(
            ImageColor.getcolor(style.background, "RGBA"),
            (0, 0, target.width, target.height),
        )

        draw = ImageDraw.Draw(target)
        font = self._get_font()
        left, top, right, bottom = draw.textbbox((0, 0), style.label, font=font)
        text_x = (target.width - (right - left)) / 2 - left
        text_y = (target.height - (bottom - top)) / 2 - top
        draw.text((text_x, text_y), style.label, fill=style.text_color, font=font)

    def _draw_marker(
        self,
        target: Image.Image,
        marker_image: Image.Image,
        placement: Rect,
        scale: float,
    ) -> None:
        """Draw the marker at its placement, scaled to target pixels."""
        left, top, width, height = _pixel_box(
            placement.x * scale,
            placement.y * scale,
            placement.width * scale,
            placement.height * scale,
        )
        layer = marker_image if marker_image.mode == "RGBA" else marker_image.convert("RGBA")
        if layer.size != (width, height):
            layer = layer.resize((width, height), Image.Resampling.LANCZOS)

        target.alpha_composite(layer, dest=(max(0, left), max(0, top)))

    def _get_font(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        """Get font for the placeholder label, with fallback to default."""
        size = self.placeholder.font_size
        try:
            return ImageFont.truetype("DejaVuSans.ttf", size)
        except OSError:
            try:
                return ImageFont.truetype("Arial.ttf", size)
            except OSError:
                logger.warning(
                    "No TrueType fonts available (DejaVuSans.ttf, Arial.ttf). "
                    "Using Pillow's default font for the placeholder label."
                )
                return ImageFont.load_default(size=size)
