"""Конфигурация приложения (синглтон) и настройка логирования."""
from __future__ import annotations

import logging
import os
from typing import Optional

from image_merger.errors import ConfigError

_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() == "true"


class Config:
    """Singleton configuration class."""

    _instance: Optional["Config"] = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialize()
            cls._instance = instance
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Сбрасывает экземпляр, чтобы перечитать переменные окружения."""
        cls._instance = None

    def _initialize(self) -> None:
        # Encoding
        self.DEFAULT_FORMAT: str = os.environ.get("MERGER_DEFAULT_FORMAT", "jpeg")

        # Network
        timeout = os.environ.get("MERGER_HTTP_TIMEOUT", "15")
        try:
            self.HTTP_TIMEOUT: float = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"MERGER_HTTP_TIMEOUT must be a number, got {timeout!r}") from exc
        if not self.HTTP_TIMEOUT > 0:
            raise ConfigError("MERGER_HTTP_TIMEOUT must be positive")

        # Logging
        self.DEBUG: bool = _env_flag("MERGER_DEBUG")
        self.LOG_FILE: Optional[str] = os.environ.get("MERGER_LOG_FILE") or None

        # GUI settings
        self.GUI_TITLE: str = "Image Merger"
        self.GUI_MIN_WIDTH: int = 900
        self.GUI_MIN_HEIGHT: int = 600
        self.GUI_APPEARANCE: str = "system"
        self.GUI_THEME: str = "blue"

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.DEBUG else logging.INFO


def configure_logging(config: Optional[Config] = None) -> None:
    """Настраивает корневой логгер по значениям из `Config`."""
    config = config or Config()
    if config.LOG_FILE:
        logging.basicConfig(
            level=config.log_level,
            filename=config.LOG_FILE,
            filemode="w",
            format=_LOG_FORMAT,
            datefmt=_LOG_DATEFMT,
        )
    else:
        logging.basicConfig(level=config.log_level, format=_LOG_FORMAT, datefmt=_LOG_DATEFMT)
