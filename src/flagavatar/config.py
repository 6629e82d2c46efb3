"""flag-avatar configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files. Values that the compositing engine relies on as invariants
(edit surface size, marker margins, export filename) are module constants
and are not read from here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Circular preview surface (square, pixels)
    PREVIEW_SIZE: int = 500

    # Placeholder shown on the edit surface before an image is uploaded
    PLACEHOLDER_COLOR: str = "#E0E0E0"
    PLACEHOLDER_TEXT_COLOR: str = "#616161"
    PLACEHOLDER_LABEL: str = "Please upload an image"
    PLACEHOLDER_FONT_SIZE: int = 16

    # Where the CLI writes the exported avatar by default
    EXPORT_DIR: str = "."

    # On-screen size of the desktop editor's edit canvas
    EDITOR_DISPLAY_SIZE: int = 500


# Singleton instance for import convenience
settings = Settings()
