"""Иерархия исключений склейки изображений.

Ошибки ввода-вывода (`FileNotFoundError`, `OSError`, `requests.RequestException`)
здесь не переопределяются и пробрасываются вызывающему коду как есть.
"""
from __future__ import annotations


class MergerError(Exception):
    """Базовый класс для ошибок пакета."""


class InvalidInputError(MergerError, ValueError):
    """Некорректные входные данные: пустой список, неверные размеры буфера."""


class ResourceExhaustedError(MergerError, MemoryError):
    """Не удалось выделить память под холст результата."""


class ImageLoadError(MergerError, ValueError):
    """Источник прочитан, но не распознан как изображение."""


class EncodeError(MergerError, ValueError):
    """Кодировщик не поддерживает запрошенный формат."""


class ConfigError(MergerError, ValueError):
    """Некорректное значение переменной окружения `MERGER_*`."""
