"""Custom exceptions for flag-avatar.

These exceptions describe the recoverable failures of an editing session.
Components raise them; the editor session turns them into user-visible
notices so that no failure is fatal to the session.
"""

from pathlib import Path


class FlagAvatarError(Exception):
    """Base exception for all flag-avatar errors."""

    def __init__(self, message: str, source: Path | str | None = None) -> None:
        """Initialize error with optional source context.

        Args:
            message: Human-readable error description.
            source: Name or path of the file that caused the error.
        """
        self.source = str(source) if source else None
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with source context if available."""
        if self.source:
            return f"{self.message} (source: {self.source})"
        return self.message


class InvalidFileTypeError(FlagAvatarError):
    """Raised when an uploaded file does not declare an image media type.

    Nothing is read or decoded when this is raised; session state is
    left untouched.
    """

    def __init__(
        self,
        message: str,
        source: Path | str | None = None,
        *,
        media_type: str | None = None,
    ) -> None:
        """Initialize with the rejected media type.

        Args:
            message: Human-readable error description.
            source: Name or path of the rejected file.
            media_type: The declared media type that was rejected.
        """
        self.media_type = media_type
        super().__init__(message, source)

    def _format_message(self) -> str:
        parts = [self.message]
        if self.source:
            parts.append(f"source={self.source}")
        parts.append(f"media_type={self.media_type or 'unknown'}")
        return f"{parts[0]} ({', '.join(parts[1:])})"


class DecodeFailureError(FlagAvatarError):
    """Raised when an upload or the bundled marker asset cannot be decoded.

    This error is raised when:
    - The bytes are not a format Pillow recognises
    - The file is truncated or otherwise corrupted
    - The decoded image has no pixels
    """

    pass


class MissingRenderSurfaceError(FlagAvatarError):
    """Raised when a surface is required but has not been mounted yet.

    A render pass triggered before mounting is skipped silently instead;
    this error is only raised to callers that explicitly require surfaces.
    """

    pass


class ExportWithoutImageError(FlagAvatarError):
    """Raised when an export is requested before any image was uploaded."""

    pass
