"""Full-resolution export of the composited avatar."""

from flagavatar.export.pipeline import (
    EXPORT_FILENAME,
    ExportArtifact,
    ExportPipeline,
)

__all__ = ["EXPORT_FILENAME", "ExportArtifact", "ExportPipeline"]
