"""Склейка списка изображений в один холст по горизонтали или вертикали."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from image_merger.errors import InvalidInputError, ResourceExhaustedError
from image_merger.models.image_model import PIXEL_DTYPE, MergeResult, PixelImage

log = logging.getLogger(__name__)

BACKGROUND = 0x000000


class MergeService:
    def merge(self, images: Sequence[PixelImage], horizontal: bool = True) -> MergeResult:
        """Склеивает изображения в порядке следования.

        Размер холста: по оси склейки — сумма размеров, по поперечной оси —
        максимум. Каждое изображение прижато к верхнему (горизонтально) или
        левому (вертикально) краю; непокрытая область остаётся цветом фона.

        Raises:
            InvalidInputError: если список пуст.
            ResourceExhaustedError: если не удалось выделить холст.
        """
        images = list(images)
        if not images:
            raise InvalidInputError("Нечего склеивать: список изображений пуст")

        for index, image in enumerate(images):
            log.debug("Source #%d: %dx%d", index, image.width, image.height)

        if horizontal:
            width = sum(image.width for image in images)
            height = max(image.height for image in images)
        else:
            width = max(image.width for image in images)
            height = sum(image.height for image in images)

        try:
            canvas = np.full((height, width), BACKGROUND, dtype=PIXEL_DTYPE)
        except MemoryError as exc:
            # numpy's _ArrayMemoryError is a MemoryError subclass
            raise ResourceExhaustedError(f"Не удалось выделить холст {width}x{height}") from exc

        offset = 0
        for image in images:
            grid = image.as_grid()
            if horizontal:
                canvas[: image.height, offset : offset + image.width] = grid
                offset += image.width
            else:
                canvas[offset : offset + image.height, : image.width] = grid
                offset += image.height

        try:
            merged = PixelImage(width=width, height=height, pixels=canvas.reshape(-1))
        except MemoryError as exc:
            raise ResourceExhaustedError(f"Не удалось выделить холст {width}x{height}") from exc

        log.debug("Merged %d images into %dx%d", len(images), width, height)
        return MergeResult(width=width, height=height, count=len(images), image=merged)


def merge_images(images: Sequence[PixelImage], horizontal: bool = True) -> MergeResult:
    """Сокращение для `MergeService().merge(...)`."""
    return MergeService().merge(images, horizontal=horizontal)
