"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики декодирования).
- DIP: зависит от сервиса как от роли; декодер PNM инкапсулирован в `ImageService`.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog, messagebox
from typing import Optional, Tuple

import customtkinter as ctk

from pnm_viewer.models.image_model import ImageData
from pnm_viewer.services.image_service import ImageService, PNMDecodeError
from pnm_viewer.ui.bottom_bar import BottomBar
from pnm_viewer.ui.image_viewer import ImageViewer
from pnm_viewer.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

OPEN_FILETYPES = (
    ("PNM", "*.pbm *.pgm *.ppm *.pnm"),
    ("Images", "*.pbm *.pgm *.ppm *.pnm *.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
    ("All files", "*.*"),
)
SAVE_FILETYPES = (
    ("PNG", "*.png"),
    ("BMP", "*.bmp"),
    ("GIF", "*.gif"),
)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер), горячие клавиши окна.
    - Загрузка и экспорт изображений через `ImageService`.
    - Показ ошибок декодирования пользователю.
    - Синхронизация состояния зума и видимости панелей.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _current_image: Optional[ImageData] = None
    _panels_hidden: bool = False

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Сохраняет слабую связность: компоненты UI ничего не знают друг о друге,
        общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_save_file = self._handle_save_file
        self.sidebar.on_hide_panels = self._handle_toggle_panels
        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        # Bottom bar bindings
        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit

        # Keyboard shortcuts
        self.window.bind("<Control-o>", lambda _e: self._handle_open_file())
        self.window.bind("<Control-s>", lambda _e: self._handle_save_file())
        self.window.bind("<Control-h>", lambda _e: self._handle_toggle_panels())
        self.window.bind("<Control-q>", lambda _e: self.window.destroy())

    def open_path(self, file_path: str | Path) -> bool:
        """Загружает файл и показывает его; при ошибке выводит сообщение и возвращает False."""
        try:
            image_data = self._image_service.load_image(file_path)
        except PNMDecodeError as exc:
            logger.warning("Cannot display %s: %s", file_path, exc.error.value)
            self._show_error("Ошибка PNM", str(exc))
            return False
        except (FileNotFoundError, ValueError, OSError) as exc:
            logger.warning("Cannot open %s: %s", file_path, exc)
            self._show_error("Ошибка открытия", str(exc))
            return False

        self._current_image = image_data
        self.viewer.set_image(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self.window.title(f"PNM Viewer — {image_data.path.name}")
        # Reset zoom to fit
        self._handle_zoom_fit()
        return True

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(title="Выберите изображение", filetypes=OPEN_FILETYPES)
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.open_path(file_path)

    def _handle_save_file(self) -> None:
        if self._current_image is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить изображение",
                filetypes=SAVE_FILETYPES,
                defaultextension=".png",
                initialfile=f"{self._current_image.path.stem}.png",
            )
        except TclError:
            return

        if not file_path:
            return
        try:
            self._image_service.save_image(self._current_image.pil_image, file_path)
        except (ValueError, OSError) as exc:
            logger.warning("Cannot save %s: %s", file_path, exc)
            self._show_error("Ошибка сохранения", str(exc))

    def _handle_toggle_panels(self) -> None:
        # остаётся только изображение
        self._panels_hidden = not self._panels_hidden
        if self._panels_hidden:
            self.sidebar.grid_remove()
            self.bottom.grid_remove()
        else:
            self.sidebar.grid()
            self.bottom.grid()

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync bottom slider/value when user zooms with mouse wheel
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _show_error(self, title: str, message: str) -> None:
        try:
            messagebox.showerror(title, message, parent=self.window)
        except TclError:
            logger.error("%s: %s", title, message)
