from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

ZOOM_PRESETS = (25, 50, 100, 200, 400)


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_preset: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)  # slider stretches

        self._zoom_label = ctk.CTkLabel(self, text="Масштаб")
        self._zoom_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_slider = ctk.CTkSlider(self, from_=10, to=400, number_of_steps=390, command=self._on_slider_change)
        self._zoom_slider.set(100)
        self._zoom_slider.grid(row=0, column=1, padx=6, pady=8, sticky="ew")
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=48, anchor="w")
        self._zoom_value_label.grid(row=0, column=2, padx=(6, 12), pady=8, sticky="w")

        # Presets + Fit
        self._preset_buttons = ctk.CTkSegmentedButton(
            self,
            values=["Fit"] + [f"{p}%" for p in ZOOM_PRESETS],
            command=self._on_preset_click,
        )
        self._preset_buttons.set("Fit")
        self._preset_buttons.grid(row=0, column=3, padx=(6, 10), pady=8, sticky="w")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_slider.set(percent)
        self._zoom_value.set(f"{percent}%")
        if percent in ZOOM_PRESETS:
            self._preset_buttons.set(f"{percent}%")

    # events
    def _on_slider_change(self, value: float) -> None:
        percent = int(round(value))
        self._zoom_value.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_preset_click(self, value: str) -> None:
        if value == "Fit":
            if self.on_zoom_fit:
                self.on_zoom_fit()
            return
        if value.endswith("%") and self.on_zoom_preset:
            self.on_zoom_preset(int(value[:-1]))
