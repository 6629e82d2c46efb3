"""Rendering of the edit surface, the export surface and the circular preview."""

from flagavatar.render.composite import CompositeRenderer, PlaceholderStyle
from flagavatar.render.preview import PreviewRenderer

__all__ = ["CompositeRenderer", "PlaceholderStyle", "PreviewRenderer"]
