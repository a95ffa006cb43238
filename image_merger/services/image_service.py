"""Загрузка изображений с диска или по URL и упаковка пикселей.

Принципы:
- SRP: класс отвечает только за загрузку и приведение к `PixelImage`.
- OCP: новые источники добавляются отдельными методами, диспетчер — `load`.
- Ошибки ввода-вывода не перехватываются: вызывающий код получает их как есть.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import requests
from PIL import Image, UnidentifiedImageError

from image_merger.config import Config
from image_merger.errors import ImageLoadError
from image_merger.models.image_model import PIXEL_DTYPE, PixelImage, SourceImage

log = logging.getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")


def is_url(source: str) -> bool:
    return source.lower().startswith(_URL_PREFIXES)


def to_pixel_image(image: Image.Image) -> PixelImage:
    """Переводит изображение PIL в `PixelImage` (0xRRGGBB, альфа отбрасывается)."""
    rgb = image if image.mode == "RGB" else image.convert("RGB")
    arr = np.asarray(rgb, dtype=PIXEL_DTYPE)
    packed = (arr[..., 0] << 16) | (arr[..., 1] << 8) | arr[..., 2]
    width, height = rgb.size
    return PixelImage(width=width, height=height, pixels=packed.reshape(-1))


def to_pil_image(image: PixelImage) -> Image.Image:
    """Обратное преобразование: `PixelImage` -> `PIL.Image.Image` в режиме RGB."""
    grid = image.as_grid()
    channels = np.stack(((grid >> 16) & 0xFF, (grid >> 8) & 0xFF, grid & 0xFF), axis=-1)
    return Image.fromarray(channels.astype(np.uint8))


class ImageService:
    def __init__(self, timeout: Optional[float] = None) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else Config().HTTP_TIMEOUT

    def load_image(self, file_path: str | Path) -> PixelImage:
        """Загружает изображение с диска.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `PixelImage` в 24-битном RGB.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ImageLoadError: если файл не распознан как изображение.
        """
        return self._load_from_path(Path(file_path))[0]

    def load_image_from_url(self, url: str, timeout: Optional[float] = None) -> PixelImage:
        """Скачивает изображение по URL.

        Raises:
            requests.RequestException: сетевая ошибка или HTTP-статус >= 400.
            ImageLoadError: если ответ не является изображением.
        """
        return self._load_from_url(url, timeout)[0]

    def load(self, source: str | Path) -> PixelImage:
        """Загружает изображение из пути или URL (по префиксу http/https)."""
        return self.load_source(source).image

    def load_source(self, source: str | Path) -> SourceImage:
        """Как `load`, но дополнительно возвращает режим и размер исходника."""
        text = str(source)
        if isinstance(source, str) and is_url(source):
            image, mode, size_bytes = self._load_from_url(source, None)
        else:
            image, mode, size_bytes = self._load_from_path(Path(source))
        return SourceImage(source=text, image=image, mode=mode, size_bytes=size_bytes)

    # ---- Internals ----
    def _load_from_path(self, path: Path) -> Tuple[PixelImage, str, Optional[int]]:
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as pil_image:
                mode = pil_image.mode
                pixel_image = to_pixel_image(pil_image)
        except UnidentifiedImageError as exc:
            raise ImageLoadError(f"Файл не является изображением: {path}") from exc

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        log.debug("Loaded %s: %dx%d (%s)", path, pixel_image.width, pixel_image.height, mode)
        return pixel_image, mode, size_bytes

    def _load_from_url(self, url: str, timeout: Optional[float]) -> Tuple[PixelImage, str, Optional[int]]:
        response = requests.get(url, timeout=timeout if timeout is not None else self.timeout)
        response.raise_for_status()
        content = response.content

        try:
            with Image.open(BytesIO(content)) as pil_image:
                mode = pil_image.mode
                pixel_image = to_pixel_image(pil_image)
        except UnidentifiedImageError as exc:
            raise ImageLoadError(f"Ответ не является изображением: {url}") from exc

        log.debug("Fetched %s: %dx%d (%s)", url, pixel_image.width, pixel_image.height, mode)
        return pixel_image, mode, len(content)
