"""Боковая панель: список источников, направление склейки, сохранение, информация.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import customtkinter as ctk

from image_merger.models.image_model import MergeResult, SourceImage

ORIENTATION_HORIZONTAL = "Горизонтально"
ORIENTATION_VERTICAL = "Вертикально"
SAVE_FORMATS = ("JPEG", "PNG", "BMP", "TIFF", "WEBP")


def _rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    r, g, b = rgb[:3]
    return f"#{r:02X}{g:02X}{b:02X}"


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
    for label, limit in thresholds:
        if size_bytes < limit:
            if label == "Б":
                return f"{size_bytes} {label}"
            value = size_bytes / (limit // 1024)
            return f"{value:.1f} {label}"
    return f"{size_bytes / (1024**4):.1f} ГБ"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: источники, склейка, результат, курсор."""
    def __init__(self, master: ctk.CTk, default_format: str = "JPEG", **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_add_files: Optional[Callable[[], None]] = None
        self.on_add_url: Optional[Callable[[str], None]] = None
        self.on_clear: Optional[Callable[[], None]] = None
        self.on_merge: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None
        self.on_orientation_change: Optional[Callable[[bool], None]] = None

        # Sources
        self._src_title = ctk.CTkLabel(self, text="Источники", font=ctk.CTkFont(size=16, weight="bold"))
        self._src_title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._add_files_btn = ctk.CTkButton(self, text="Добавить файлы…", command=self._emit_add_files)
        self._add_files_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._url_val = ctk.StringVar(value="")
        self._url_entry = ctk.CTkEntry(self, textvariable=self._url_val)
        self._url_entry.grid(row=2, column=0, padx=8, pady=(0, 4), sticky="ew")
        self._url_entry.bind("<Return>", lambda _e: self._emit_add_url())
        self._add_url_btn = ctk.CTkButton(self, text="Добавить URL", command=self._emit_add_url)
        self._add_url_btn.grid(row=3, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._sources_box = ctk.CTkTextbox(self, height=140, wrap="none")
        self._sources_box.grid(row=4, column=0, padx=8, pady=(0, 4), sticky="nsew")
        self._sources_box.configure(state="disabled")
        self.grid_rowconfigure(4, weight=1)

        self._clear_btn = ctk.CTkButton(self, text="Очистить", command=self._emit_clear)
        self._clear_btn.grid(row=5, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Merge
        self._merge_title = ctk.CTkLabel(self, text="Склейка", font=ctk.CTkFont(size=16, weight="bold"))
        self._merge_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        self._orientation = ctk.CTkSegmentedButton(
            self,
            values=[ORIENTATION_HORIZONTAL, ORIENTATION_VERTICAL],
            command=self._on_orientation,
        )
        self._orientation.set(ORIENTATION_HORIZONTAL)
        self._orientation.grid(row=7, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._merge_btn = ctk.CTkButton(self, text="Склеить", command=self._emit_merge)
        self._merge_btn.grid(row=8, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._format_menu = ctk.CTkOptionMenu(self, values=list(SAVE_FORMATS))
        self._format_menu.set(default_format.upper() if default_format.upper() in SAVE_FORMATS else "JPEG")
        self._format_menu.grid(row=9, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._save_btn = ctk.CTkButton(self, text="Сохранить…", command=self._emit_save)
        self._save_btn.grid(row=10, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Result
        self._info_title = ctk.CTkLabel(self, text="Результат", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=11, column=0, padx=8, pady=(8, 4), sticky="w")

        self._dims_val = ctk.StringVar(value="—")
        self._count_val = ctk.StringVar(value="—")
        self._status_val = ctk.StringVar(value="")

        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_count = ctk.CTkLabel(self, textvariable=self._count_val, anchor="w", justify="left")
        self._info_status = ctk.CTkLabel(
            self, textvariable=self._status_val, wraplength=250, anchor="w", justify="left"
        )
        self._info_dims.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_count.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_status.grid(row=14, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Cursor
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=15, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")
        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")
        self._cursor_xy.grid(row=16, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=17, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_sources(self, sources: Sequence[SourceImage]) -> None:
        """Перерисовывает список источников: размеры, режим и объём."""
        lines = [
            f"{i + 1}. {src.width}x{src.height} {src.mode} {_format_size(src.size_bytes)}  {src.source}"
            for i, src in enumerate(sources)
        ]
        self._sources_box.configure(state="normal")
        self._sources_box.delete("1.0", "end")
        self._sources_box.insert("1.0", "\n".join(lines))
        self._sources_box.configure(state="disabled")

    def set_result_info(self, result: Optional[MergeResult]) -> None:
        if result is None:
            self._dims_val.set("—")
            self._count_val.set("—")
            return
        self._dims_val.set(f"Размер: {result.width}×{result.height}")
        self._count_val.set(f"Изображений: {result.count}")

    def set_status(self, text: str) -> None:
        self._status_val.set(text)

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgb: Optional[Tuple[int, int, int]]) -> None:
        if x is None or y is None or rgb is None:
            self._cursor_xy_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"X: {x}, Y: {y}")
        self._cursor_hex_val.set(f"RGB: {rgb[0]}, {rgb[1]}, {rgb[2]}  {_rgb_to_hex(rgb)}")

    def clear_url(self) -> None:
        self._url_val.set("")

    def get_save_format(self) -> str:
        return self._format_menu.get()

    # ---- Events ----
    def _emit_add_files(self) -> None:
        if self.on_add_files:
            self.on_add_files()

    def _emit_add_url(self) -> None:
        url = self._url_val.get().strip()
        if url and self.on_add_url:
            self.on_add_url(url)

    def _emit_clear(self) -> None:
        if self.on_clear:
            self.on_clear()

    def _emit_merge(self) -> None:
        if self.on_merge:
            self.on_merge()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    def _on_orientation(self, value: str) -> None:
        if self.on_orientation_change:
            self.on_orientation_change(value != ORIENTATION_VERTICAL)
