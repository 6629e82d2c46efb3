"""Type definitions for decoded images.

Both types are immutable: an uploaded image and its true dimensions are
one value, so replacing the current image never mixes an old picture
with new dimensions.
"""

from dataclasses import dataclass

from PIL import Image


@dataclass(frozen=True)
class LoadedImage:
    """An uploaded image decoded at its native resolution.

    Attributes:
        image: Decoded RGBA image.
        width: Native width in pixels, captured at decode time.
        height: Native height in pixels, captured at decode time.
        media_type: Declared media type of the upload (e.g. "image/png").
        name: Original file name, if known.
    """

    image: Image.Image
    width: int
    height: int
    media_type: str
    name: str | None = None

    @property
    def dimensions(self) -> tuple[int, int]:
        """Return native dimensions as (width, height)."""
        return (self.width, self.height)


@dataclass(frozen=True)
class MarkerAsset:
    """The decoded marker graphic, loaded once and shared read-only.

    Attributes:
        image: Decoded RGBA image.
        width: Intrinsic width in pixels.
        height: Intrinsic height in pixels.
    """

    image: Image.Image
    width: int
    height: int
