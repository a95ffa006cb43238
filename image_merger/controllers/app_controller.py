"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики склейки).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import List, Optional, Tuple

import customtkinter as ctk
import requests

from image_merger.errors import MergerError
from image_merger.models.image_model import MergeResult, SourceImage
from image_merger.services.encode_service import EncodeService
from image_merger.services.image_service import ImageService, to_pil_image
from image_merger.services.merge_service import MergeService
from image_merger.ui.bottom_bar import BottomBar
from image_merger.ui.image_viewer import ImageViewer
from image_merger.ui.sidebar import Sidebar

log = logging.getLogger(__name__)

# Ошибки, которые показываются пользователю вместо падения окна
_USER_ERRORS = (MergerError, OSError, requests.RequestException)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка источников через `ImageService`.
    - Склейка через `MergeService` и запись через `EncodeService`.
    - Синхронизация состояния зума.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _merge_service: MergeService = field(default_factory=MergeService)
    _encode_service: EncodeService = field(default_factory=EncodeService)
    _sources: List[SourceImage] = field(default_factory=list)
    _result: Optional[MergeResult] = None
    _horizontal: bool = True

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_add_files = self._handle_add_files
        self.sidebar.on_add_url = self._handle_add_url
        self.sidebar.on_clear = self._handle_clear
        self.sidebar.on_merge = self._handle_merge
        self.sidebar.on_save = self._handle_save
        self.sidebar.on_orientation_change = self._handle_orientation_change

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit

    # ---- Handlers ----
    def _handle_add_files(self) -> None:
        try:
            file_paths = filedialog.askopenfilenames(
                title="Выберите изображения",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_paths:
            return
        failures = [error for error in map(self._add_source, file_paths) if error]
        self.sidebar.set_status("\n".join(failures))

    def _handle_add_url(self, url: str) -> None:
        error = self._add_source(url)
        self.sidebar.set_status(error or "")
        if error is None:
            self.sidebar.clear_url()

    def _handle_clear(self) -> None:
        self._sources.clear()
        self._result = None
        self.sidebar.set_sources(self._sources)
        self.sidebar.set_result_info(None)
        self.sidebar.set_status("")
        self.viewer.set_image(None)

    def _handle_orientation_change(self, horizontal: bool) -> None:
        self._horizontal = horizontal
        if self._result is not None:
            self._handle_merge()

    def _handle_merge(self) -> None:
        try:
            result = self._merge_service.merge([src.image for src in self._sources], horizontal=self._horizontal)
        except MergerError as exc:
            self.sidebar.set_status(f"Ошибка: {exc}")
            return

        self._result = result
        self.sidebar.set_result_info(result)
        self.sidebar.set_status("")
        self.viewer.set_image(to_pil_image(result.image))
        self._sync_zoom()

    def _handle_save(self) -> None:
        if self._result is None:
            self.sidebar.set_status("Сначала склейте изображения")
            return

        fmt = self.sidebar.get_save_format()
        try:
            path = filedialog.asksaveasfilename(
                title="Сохранить результат",
                defaultextension=f".{fmt.lower()}",
                filetypes=((fmt, f"*.{fmt.lower()}"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not path:
            return

        try:
            saved = self._encode_service.save(self._result.image, path, fmt)
        except _USER_ERRORS as exc:
            self.sidebar.set_status(f"Ошибка сохранения: {exc}")
            return
        self.sidebar.set_status(f"Сохранено: {saved}")

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgb: Optional[Tuple[int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgb)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # mouse wheel zoom -> bottom bar
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self._sync_zoom()

    # ---- Helpers ----
    def _add_source(self, source: str) -> Optional[str]:
        """Добавляет источник; возвращает текст ошибки или None при успехе."""
        try:
            loaded = self._image_service.load_source(source)
        except _USER_ERRORS as exc:
            log.debug("Failed to load %s", source, exc_info=True)
            return f"Не удалось загрузить {source}: {exc}"

        self._sources.append(loaded)
        self.sidebar.set_sources(self._sources)
        return None

    def _sync_zoom(self) -> None:
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
