from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from image_merger.config import Config
from image_merger.models.image_model import PixelImage

_ENV_VARS = ("MERGER_DEFAULT_FORMAT", "MERGER_HTTP_TIMEOUT", "MERGER_DEBUG", "MERGER_LOG_FILE")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def make_image() -> Callable[..., PixelImage]:
    """Фабрика изображений с различимыми пикселями: база + индекс пикселя."""
    def _make(width: int, height: int, base: int = 0x010000) -> PixelImage:
        pixels = (base + np.arange(width * height)) & 0xFFFFFF
        return PixelImage(width=width, height=height, pixels=pixels)

    return _make
