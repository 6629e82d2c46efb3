"""Loading of the bundled marker graphic."""

from __future__ import annotations

import asyncio
import logging
from importlib import resources
from pathlib import Path

from flagavatar.exceptions import DecodeFailureError
from flagavatar.media.ingestion import decode_image
from flagavatar.media.types import MarkerAsset

logger = logging.getLogger(__name__)

MARKER_ASSET_NAME = "flag.png"


def marker_asset_bytes() -> bytes:
    """Read the bundled marker graphic shipped inside the package."""
    return (resources.files("flagavatar") / "assets" / MARKER_ASSET_NAME).read_bytes()


def load_marker_asset(path: str | Path | None = None) -> MarkerAsset:
    """Decode the marker graphic.

    Args:
        path: Alternate file to decode instead of the bundled asset. Used by
            tests; the application always loads the bundled one.

    Returns:
        MarkerAsset with the RGBA image and its intrinsic size.

    Raises:
        DecodeFailureError: If the asset is missing or cannot be decoded.
    """
    source = str(path) if path is not None else MARKER_ASSET_NAME
    try:
        data = Path(path).read_bytes() if path is not None else marker_asset_bytes()
    except OSError as e:
        raise DecodeFailureError(f"Marker asset unreadable: {e}", source) from e

    image = decode_image(data, source)
    logger.debug("Marker asset decoded (%dx%d)", image.width, image.height)
    return MarkerAsset(image=image, width=image.width, height=image.height)


async def load_marker_asset_async(path: str | Path | None = None) -> MarkerAsset:
    """Decode the marker graphic on a worker thread."""
    return await asyncio.to_thread(load_marker_asset, path)
