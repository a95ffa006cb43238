"""Модели данных для изображений и результата склейки.

Принципы:
- SRP: только структура данных, без логики загрузки и склейки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from image_merger.errors import InvalidInputError

PIXEL_DTYPE = np.uint32
RGB_MASK = 0xFFFFFF


@dataclass(frozen=True, eq=False)
class PixelImage:
    """Растровое изображение в памяти: размеры и плоский буфер пикселей.

    Fields:
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
        pixels: Плоский массив `width * height` значений 0xRRGGBB, построчно.
            Хранится как read-only `uint32`; исходный буфер копируется.
    """
    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(f"Размеры должны быть положительными: {self.width}x{self.height}")
        try:
            values = np.array(self.pixels, dtype=np.int64).reshape(-1)
        except (OverflowError, TypeError, ValueError) as exc:
            raise InvalidInputError(f"Буфер пикселей не является массивом целых: {exc}") from exc
        if values.size and values.min() < 0:
            raise InvalidInputError("Значения пикселей не могут быть отрицательными")
        # старший байт (альфа) отбрасывается, как в 24-битном RGB
        pixels = (values & RGB_MASK).astype(PIXEL_DTYPE)
        if pixels.size != self.width * self.height:
            raise InvalidInputError(
                f"Длина буфера {pixels.size} не равна {self.width}x{self.height}={self.width * self.height}"
            )
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def as_grid(self) -> np.ndarray:
        """Двумерное представление (строки × столбцы) без копирования."""
        return self.pixels.reshape(self.height, self.width)

    def pixel_at(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Координаты ({x}, {y}) вне {self.width}x{self.height}")
        return int(self.pixels[y * self.width + x])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelImage):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.pixels, other.pixels))

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class MergeResult:
    """Результат склейки: итоговые размеры, число исходных изображений и холст."""
    width: int
    height: int
    count: int
    image: PixelImage


@dataclass(frozen=True, eq=False)
class SourceImage:
    """Загруженный источник и его метаданные для отображения.

    Fields:
        source: Путь к файлу или URL.
        image: Декодированное изображение в формате RGB.
        mode: Режим PIL до преобразования, например "RGBA".
        size_bytes: Размер исходных данных, если доступен.
    """
    source: str
    image: PixelImage
    mode: str
    size_bytes: Optional[int]

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height
