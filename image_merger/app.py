import customtkinter as ctk

from image_merger.config import Config
from image_merger.controllers.app_controller import AppController
from image_merger.ui.image_viewer import ImageViewer
from image_merger.ui.sidebar import Sidebar
from image_merger.ui.bottom_bar import BottomBar


class ImageMergerApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        config = Config()
        ctk.set_appearance_mode(config.GUI_APPEARANCE)
        ctk.set_default_color_theme(config.GUI_THEME)

        self.title(config.GUI_TITLE)
        self.minsize(config.GUI_MIN_WIDTH, config.GUI_MIN_HEIGHT)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self, default_format=config.DEFAULT_FORMAT)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self)
        self._controller.bind_events()
