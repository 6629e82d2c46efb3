"""Decoding of user-supplied image files.

Uploads are accepted by declared media type: anything declaring
``image/*`` is decoded, everything else is rejected before a single byte
is read. Decoding runs on a worker thread so the event loop stays free
for pointer events.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, TypeGuard

from PIL import Image, ImageOps, UnidentifiedImageError

from flagavatar.exceptions import DecodeFailureError, InvalidFileTypeError
from flagavatar.media.types import LoadedImage

logger = logging.getLogger(__name__)

IMAGE_MEDIA_PREFIX = "image/"


def is_image_media_type(media_type: str | None) -> TypeGuard[str]:
    """Return True if the declared media type is an image type."""
    return media_type is not None and media_type.lower().startswith(IMAGE_MEDIA_PREFIX)


def media_type_for_path(path: str | Path) -> str | None:
    """Derive the declared media type of a file from its name."""
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type


def decode_image(data: bytes, source: str | None = None) -> Image.Image:
    """Decode image bytes into an upright RGBA image.

    EXIF orientation is applied so that the native dimensions match what
    a viewer shows.

    Args:
        data: Encoded image bytes.
        source: Name used in error messages.

    Returns:
        Decoded RGBA image, fully loaded into memory.

    Raises:
        DecodeFailureError: If the bytes cannot be decoded.
    """
    try:
        with Image.open(BytesIO(data)) as opened:
            opened.load()
            image = ImageOps.exif_transpose(opened).convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        raise DecodeFailureError(f"Failed to decode image: {e}", source) from e

    if image.width == 0 or image.height == 0:
        raise DecodeFailureError("Decoded image has no pixels", source)
    return image


class ImageIngestion:
    """Turns an uploaded file into a LoadedImage.

    Usage:
        ingestion = ImageIngestion()
        loaded = await ingestion.ingest(fileobj, "image/png", name="me.png")
        print(loaded.dimensions)
    """

    async def ingest(
        self,
        source: BinaryIO | bytes,
        media_type: str | None,
        name: str | None = None,
    ) -> LoadedImage:
        """Validate, read and decode an upload.

        Args:
            source: File-like byte source or raw bytes.
            media_type: Declared media type of the upload.
            name: Original file name, for messages and metadata.

        Returns:
            LoadedImage with the decoded image and its native dimensions.

        Raises:
            InvalidFileTypeError: If media_type is not an image type.
            DecodeFailureError: If the bytes cannot be decoded.
        """
        if not is_image_media_type(media_type):
            raise InvalidFileTypeError(
                "Please upload an image file.", name, media_type=media_type
            )

        data = source if isinstance(source, bytes) else source.read()
        image = await asyncio.to_thread(decode_image, data, name)

        loaded = LoadedImage(
            image=image,
            width=image.width,
            height=image.height,
            media_type=media_type,
            name=name,
        )
        logger.info(
            "Decoded upload %s (%dx%d, %s)",
            name or "<stream>",
            loaded.width,
            loaded.height,
            media_type,
        )
        return loaded

    async def ingest_path(self, path: str | Path) -> LoadedImage:
        """Ingest a file from disk, declaring its type from the file name.

        Raises:
            InvalidFileTypeError: If the file name does not declare an image type.
            DecodeFailureError: If the file cannot be read or decoded.
        """
        path = Path(path)
        media_type = media_type_for_path(path)
        if not is_image_media_type(media_type):
            raise InvalidFileTypeError(
                "Please upload an image file.", path.name, media_type=media_type
            )
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise DecodeFailureError(f"Cannot read upload: {e}", path.name) from e
        return await self.ingest(data, media_type, name=path.name)
