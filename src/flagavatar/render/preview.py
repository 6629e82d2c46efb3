"""Circular avatar preview.

Derives a circular crop of the square edit surface, simulating how the
avatar will look inside a circular profile frame.
"""

from __future__ import annotations

from PIL import Image, ImageDraw


class PreviewRenderer:
    """Draws the edit surface into a preview target through a circular mask.

    The mask is built fresh on every call and never stored, so one
    render cannot affect the next.
    """

    def render(self, preview_target: Image.Image, edit_surface: Image.Image) -> Image.Image:
        """Render the circular preview onto ``preview_target`` in place.

        The clip circle is centered in the target with radius
        min(width, height) / 2. Pixels outside it are left transparent.
        When the target and the edit surface differ in size, the edit
        surface is scaled to the target first so the whole composite is
        shown.

        Args:
            preview_target: RGBA surface to draw on.
            edit_surface: Rendered edit surface.

        Returns:
            The preview target, for chaining.

        Raises:
            ValueError: If the preview target is not RGBA.
        """
        if preview_target.mode != "RGBA":
            raise ValueError(f"preview_target must be RGBA, got {preview_target.mode}")

        width, height = preview_target.size
        preview_target.paste((0, 0, 0, 0), (0, 0, width, height))

        source = edit_surface if edit_surface.mode == "RGBA" else edit_surface.convert("RGBA")
        if source.size != preview_target.size:
            source = source.resize(preview_target.size, Image.Resampling.LANCZOS)

        preview_target.paste(source, (0, 0), self.circle_mask(preview_target.size))
        return preview_target

    @staticmethod
    def circle_mask(size: tuple[int, int]) -> Image.Image:
        """Build an "L" mask with an opaque centered circle.

        Args:
            size: (width, height) of the mask.

        Returns:
            Mask image: 255 inside the circle, 0 outside.
        """
        width, height = size
        radius = min(width, height) / 2
        center_x, center_y = width / 2, height / 2

        mask = Image.new("L", size, 0)
        draw = ImageDraw.Draw(mask)
        draw.ellipse(
            (
                center_x - radius,
                center_y - radius,
                center_x + radius - 1,
                center_y + radius - 1,
            ),
            fill=255,
        )
        return mask
