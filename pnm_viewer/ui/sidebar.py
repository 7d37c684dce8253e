"""Боковая панель: открытие и сохранение файла, информация об изображении, курсор.

Принципы:
- SRP: управляет только UI, не содержит логики декодирования.
- ISP: события наружу через компактные колбэки `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from pnm_viewer.models.image_model import ImageData


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_save_file: Optional[Callable[[], None]] = None
        self.on_hide_panels: Optional[Callable[[], None]] = None

        # File section
        self._title = ctk.CTkLabel(self, text="Файл", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть…  (Ctrl+O)", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._save_btn = ctk.CTkButton(self, text="Сохранить как…  (Ctrl+S)", command=self._emit_save_file)
        self._save_btn.grid(row=2, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._save_btn.configure(state="disabled")

        self._hide_btn = ctk.CTkButton(
            self, text="Скрыть панели  (Ctrl+H)", fg_color="transparent", border_width=1, command=self._emit_hide_panels
        )
        self._hide_btn.grid(row=3, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=4, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")
        self._format_val = ctk.StringVar(value="—")
        self._max_val = ctk.StringVar(value="—")
        self._note_val = ctk.StringVar(value="")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")
        self._info_format = ctk.CTkLabel(self, textvariable=self._format_val, anchor="w", justify="left")
        self._info_max = ctk.CTkLabel(self, textvariable=self._max_val, anchor="w", justify="left")
        self._info_note = ctk.CTkLabel(
            self, textvariable=self._note_val, wraplength=250, anchor="w", justify="left", text_color="#D9822B"
        )

        self._info_path.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_format.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_max.grid(row=10, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_note.grid(row=11, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=12, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=14, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=15, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, image_data: ImageData) -> None:
        """Отображает метаданные загруженного изображения."""
        self._path_val.set(str(image_data.path))
        self._size_val.set(self._format_size(image_data.size_bytes))
        self._dims_val.set(f"{image_data.width} × {image_data.height} px")
        self._mode_val.set(image_data.mode)
        self._format_val.set(f"Формат: {image_data.source_format}")
        self._max_val.set("—" if image_data.max_value is None else f"Максимум: {image_data.max_value}")
        self._note_val.set("Данных меньше, чем заявлено в заголовке" if image_data.truncated else "")
        self._save_btn.configure(state="normal")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        """Обновляет информацию по курсору (координаты, RGBA, HEX)."""
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b, a = rgba
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_save_file(self) -> None:
        if self.on_save_file:
            self.on_save_file()

    def _emit_hide_panels(self) -> None:
        if self.on_hide_panels:
            self.on_hide_panels()

    # ---- Helpers ----
    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        size = float(size_bytes)
        for unit in ("Б", "КБ", "МБ", "ГБ"):
            if size < 1024 or unit == "ГБ":
                return f"{size:.0f} {unit}" if unit == "Б" else f"{size:.1f} {unit}"
            size /= 1024
        return f"{size_bytes} Б"
