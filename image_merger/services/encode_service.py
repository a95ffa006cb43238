"""Кодирование `PixelImage` в байты или файл через Pillow.

По умолчанию используется JPEG: компактен и удобен для передачи по сети.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional

from PIL import Image

from image_merger.config import Config
from image_merger.errors import EncodeError
from image_merger.models.image_model import PixelImage
from image_merger.services.image_service import to_pil_image

log = logging.getLogger(__name__)

_FORMAT_ALIASES = {"JPG": "JPEG", "TIF": "TIFF"}


def normalize_format(format: str) -> str:
    """Приводит имя формата к виду Pillow ("jpg" -> "JPEG") и проверяет поддержку."""
    name = format.strip().lstrip(".").upper()
    name = _FORMAT_ALIASES.get(name, name)
    Image.init()
    if name not in Image.SAVE:
        raise EncodeError(f"Формат не поддерживается для записи: {format!r}")
    return name


def format_from_suffix(path: str | Path) -> Optional[str]:
    """Формат по расширению файла или None, если расширение неизвестно."""
    Image.init()
    return Image.EXTENSION.get(Path(path).suffix.lower())


class EncodeService:
    def __init__(self, default_format: Optional[str] = None) -> None:
        self._default_format = default_format

    @property
    def default_format(self) -> str:
        return self._default_format or Config().DEFAULT_FORMAT

    def encode(self, image: PixelImage, format: Optional[str] = None) -> bytes:
        """Кодирует изображение в буфер в памяти.

        Raises:
            EncodeError: если формат неизвестен Pillow или кодировщик отказал.
        """
        buffer = BytesIO()
        self._write(image, buffer, format)
        return buffer.getvalue()

    def save(self, image: PixelImage, path: str | Path, format: Optional[str] = None) -> Path:
        """Записывает изображение в файл (создаётся или перезаписывается).

        Изображение сначала кодируется в память, поэтому при ошибке
        кодирования файл не создаётся.

        Raises:
            EncodeError: если Pillow не может записать изображение в этом формате.
            OSError: если файл нельзя открыть на запись.
        """
        target = Path(path)
        name = normalize_format(format or self.default_format)
        data = self.encode(image, name)
        target.write_bytes(data)
        log.debug("Saved %dx%d image to %s as %s", image.width, image.height, target, name)
        return target

    def _write(self, image: PixelImage, fp: BinaryIO, format: Optional[str]) -> None:
        name = normalize_format(format or self.default_format)
        try:
            to_pil_image(image).save(fp, format=name)
        except (OSError, ValueError) as exc:
            raise EncodeError(f"Не удалось закодировать {image.width}x{image.height} в {name}: {exc}") from exc
