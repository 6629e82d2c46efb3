"""Decoding of uploaded images and the bundled marker asset.

Key Components:
    - ImageIngestion: validates the declared type and decodes an upload
    - load_marker_asset: decodes the bundled marker graphic
    - LoadedImage / MarkerAsset: immutable decoded results
"""

from flagavatar.media.assets import load_marker_asset, load_marker_asset_async
from flagavatar.media.ingestion import (
    ImageIngestion,
    decode_image,
    is_image_media_type,
    media_type_for_path,
)
from flagavatar.media.types import LoadedImage, MarkerAsset

__all__ = [
    "ImageIngestion",
    "LoadedImage",
    "MarkerAsset",
    "decode_image",
    "is_image_media_type",
    "load_marker_asset",
    "load_marker_asset_async",
    "media_type_for_path",
]
