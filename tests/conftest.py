"""Shared pytest fixtures and configuration."""

from collections.abc import Callable, Iterator
from io import BytesIO

import pytest
from PIL import Image

from flagavatar.config import Settings
from flagavatar.editor.session import EditorSession, Notice
from flagavatar.media.types import LoadedImage, MarkerAsset
from flagavatar.utils.logging import clear_correlation_context, configure_logging

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Factory for solid-color PNG bytes."""

    def _make(
        width: int = 1000,
        height: int = 1000,
        color: tuple[int, int, int, int] = BLUE,
    ) -> bytes:
        buffer = BytesIO()
        Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def loaded_image() -> Callable[..., LoadedImage]:
    """Factory for decoded uploads without going through ingestion."""

    def _make(
        width: int = 1000,
        height: int = 1000,
        color: tuple[int, int, int, int] = BLUE,
    ) -> LoadedImage:
        image = Image.new("RGBA", (width, height), color)
        return LoadedImage(
            image=image,
            width=width,
            height=height,
            media_type="image/png",
            name="upload.png",
        )

    return _make


@pytest.fixture
def marker() -> MarkerAsset:
    """A solid red 3:1 marker."""
    image = Image.new("RGBA", (300, 100), RED)
    return MarkerAsset(image=image, width=300, height=100)


@pytest.fixture
def notices() -> list[Notice]:
    """Collects notices emitted by a session."""
    return []


@pytest.fixture
def mounted_session(notices: list[Notice], marker: MarkerAsset) -> EditorSession:
    """A mounted session with the red test marker installed."""
    session = EditorSession(notice_handler=notices.append)
    session.mount()
    session.on_marker_decoded(marker)
    return session
