"""Unit tests for the editor window's download action.

The window methods are called unbound on a stand-in object, so no display
is needed; the module is skipped when tkinter or customtkinter is missing.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from flagavatar.editor.session import EditorSession, Notice, NoticeLevel
from flagavatar.media.types import LoadedImage

window = pytest.importorskip("flagavatar.app.window")


@pytest.fixture
def host(
    mounted_session: EditorSession, loaded_image: Callable[..., LoadedImage]
) -> SimpleNamespace:
    mounted_session.on_image_decoded(loaded_image(600, 600))
    return SimpleNamespace(_session=mounted_session)


def test_download_writes_chosen_file(host: SimpleNamespace, tmp_path: Path) -> None:
    target = tmp_path / "avatar.png"
    with patch.object(window.filedialog, "asksaveasfilename", return_value=str(target)):
        window.EditorWindow._handle_download(host)
    assert target.read_bytes().startswith(b"\x89PNG")


def test_download_cancelled_writes_nothing(
    host: SimpleNamespace, notices: list[Notice], tmp_path: Path
) -> None:
    with patch.object(window.filedialog, "asksaveasfilename", return_value=""):
        window.EditorWindow._handle_download(host)
    assert list(tmp_path.iterdir()) == []
    assert notices == []


def test_download_write_failure_becomes_error_notice(
    host: SimpleNamespace, notices: list[Notice], tmp_path: Path
) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    with patch.object(
        window.filedialog, "asksaveasfilename", return_value=str(blocker / "avatar.png")
    ):
        window.EditorWindow._handle_download(host)
    assert len(notices) == 1
    assert notices[0].level is NoticeLevel.error
    assert notices[0].message.startswith("Could not save the avatar:")
