"""Desktop editor window.

Hosts an EditorSession: shows the edit surface and the circular preview
on tk canvases, forwards mouse events as pointer events, and turns
session notices into dialogs.
"""

from __future__ import annotations

import asyncio
import logging
import tkinter as tk
from pathlib import Path
from tkinter import TclError, filedialog, messagebox

import customtkinter as ctk
from PIL import Image, ImageTk

from flagavatar.config import settings
from flagavatar.editor.drag import PointerEvent
from flagavatar.editor.session import EditorSession, Notice, NoticeLevel

logger = logging.getLogger(__name__)

# tk cursor names for the session's cursor hints
_CURSORS = {"grab": "hand2", "grabbing": "fleur"}

_PREVIEW_DISPLAY_SIZE = 250


class EditorWindow(ctk.CTk):
    """Main window: edit canvas on the left, preview and actions on the right."""

    def __init__(self, session: EditorSession | None = None) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("Flag Avatar")
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        display = settings.EDITOR_DISPLAY_SIZE
        self._canvas = tk.Canvas(
            self, width=display, height=display, highlightthickness=0, cursor=_CURSORS["grab"]
        )
        self._canvas.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=12)

        side = ctk.CTkFrame(self)
        side.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=12)

        self._preview = tk.Canvas(
            side,
            width=_PREVIEW_DISPLAY_SIZE,
            height=_PREVIEW_DISPLAY_SIZE,
            highlightthickness=0,
        )
        self._preview.grid(row=0, column=0, padx=12, pady=(12, 6))

        self._open_button = ctk.CTkButton(side, text="Upload image", command=self._handle_open_file)
        self._open_button.grid(row=1, column=0, sticky="ew", padx=12, pady=6)

        self._download_button = ctk.CTkButton(
            side, text="Download", command=self._handle_download, state="disabled"
        )
        self._download_button.grid(row=2, column=0, sticky="ew", padx=12, pady=(6, 12))

        self._tk_edit: ImageTk.PhotoImage | None = None
        self._tk_preview: ImageTk.PhotoImage | None = None

        self._session = session or EditorSession(notice_handler=self._show_notice)
        self._session.subscribe(self._on_rendered)

        self._canvas.bind("<ButtonPress-1>", self._on_press)
        self._canvas.bind("<B1-Motion>", self._on_drag)
        self._canvas.bind("<ButtonRelease-1>", self._on_release)
        self._canvas.bind("<Leave>", self._on_leave)
        self._canvas.bind("<Configure>", lambda _event: self._draw())

        self._session.mount()
        asyncio.run(self._session.load_marker())

    @property
    def session(self) -> EditorSession:
        return self._session

    # ---- Public API ----

    def open_image(self, path: str | Path) -> None:
        """Upload an image file into the session."""
        asyncio.run(self._session.upload_path(path))

    # ---- Handlers ----

    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Choose an image",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            return

        if not file_path:
            return
        self.open_image(file_path)

    def _handle_download(self) -> None:
        artifact = self._session.export()
        if artifact is None:
            return

        target = filedialog.asksaveasfilename(
            title="Save avatar",
            initialfile=artifact.filename,
            defaultextension=".png",
            filetypes=(("PNG", "*.png"),),
        )
        if not target:
            return
        path = self._session.save_as(artifact, target)
        if path is not None:
            logger.info("Avatar saved to %s", path)

    def _pointer(self, event: tk.Event) -> PointerEvent:
        return PointerEvent(
            event.x,
            event.y,
            max(1, self._canvas.winfo_width()),
            max(1, self._canvas.winfo_height()),
        )

    def _on_press(self, event: tk.Event) -> None:
        self._session.pointer_down(self._pointer(event))
        self._update_cursor()

    def _on_drag(self, event: tk.Event) -> None:
        self._session.pointer_move(self._pointer(event))

    def _on_release(self, _event: tk.Event) -> None:
        self._session.pointer_up()
        self._update_cursor()

    def _on_leave(self, _event: tk.Event) -> None:
        self._session.pointer_leave()
        self._update_cursor()

    # ---- Drawing ----

    def _on_rendered(self, session: EditorSession) -> None:
        self._download_button.configure(state="normal" if session.can_export else "disabled")
        self._draw()

    def _draw(self) -> None:
        surfaces = self._session.surfaces
        if surfaces is None:
            return

        width = max(1, self._canvas.winfo_width())
        height = max(1, self._canvas.winfo_height())
        self._tk_edit = ImageTk.PhotoImage(
            surfaces.edit.resize((width, height), Image.Resampling.LANCZOS)
        )
        self._canvas.delete("all")
        self._canvas.create_image(0, 0, image=self._tk_edit, anchor="nw")

        side = _PREVIEW_DISPLAY_SIZE
        self._tk_preview = ImageTk.PhotoImage(
            surfaces.preview.resize((side, side), Image.Resampling.LANCZOS)
        )
        self._preview.delete("all")
        self._preview.create_image(0, 0, image=self._tk_preview, anchor="nw")

    def _update_cursor(self) -> None:
        self._canvas.configure(cursor=_CURSORS[self._session.cursor])

    def _show_notice(self, notice: Notice) -> None:
        if notice.level is NoticeLevel.error:
            messagebox.showerror("Flag Avatar", notice.message, parent=self)
        elif notice.level is NoticeLevel.warning:
            messagebox.showwarning("Flag Avatar", notice.message, parent=self)
        else:
            messagebox.showinfo("Flag Avatar", notice.message, parent=self)


def run_editor(image_path: Path | None = None) -> None:
    """Create the editor window, optionally open an image, and run it."""
    window = EditorWindow()
    if image_path is not None:
        window.open_image(image_path)
    window.mainloop()
