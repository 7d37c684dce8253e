import customtkinter as ctk

from pnm_viewer.config import Config
from pnm_viewer.controllers.app_controller import AppController
from pnm_viewer.ui.image_viewer import ImageViewer
from pnm_viewer.ui.sidebar import Sidebar
from pnm_viewer.ui.bottom_bar import BottomBar


class PNMViewerApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode(Config.APPEARANCE_MODE)
        ctk.set_default_color_theme(Config.COLOR_THEME)

        self.title("PNM Viewer")
        self.minsize(Config.MIN_WIDTH, Config.MIN_HEIGHT)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()

    def open_path(self, file_path: str) -> None:
        """Открывает файл после того, как окно получит реальные размеры."""
        self.after(100, lambda: self._controller.open_path(file_path))
