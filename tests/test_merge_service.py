from io import BytesIO

import pytest
from PIL import Image

from image_merger.errors import InvalidInputError, ResourceExhaustedError
from image_merger.models.image_model import PixelImage
from image_merger.services import merge_service
from image_merger.services.encode_service import EncodeService
from image_merger.services.image_service import to_pixel_image
from image_merger.services.merge_service import BACKGROUND, MergeService, merge_images


@pytest.fixture
def service() -> MergeService:
    return MergeService()


def test_horizontal_uniform_height(service, make_image):
    images = [make_image(2, 3, base=0x100), make_image(4, 3, base=0x200), make_image(1, 3, base=0x300)]
    result = service.merge(images, horizontal=True)

    assert (result.width, result.height, result.count) == (7, 3, 3)
    assert result.image.size == (7, 3)
    offset = 0
    for image in images:
        for y in range(image.height):
            for x in range(image.width):
                assert result.image.pixel_at(offset + x, y) == image.pixel_at(x, y)
        offset += image.width


def test_vertical_uniform_width(service, make_image):
    images = [make_image(3, 2, base=0x100), make_image(3, 5, base=0x200)]
    result = service.merge(images, horizontal=False)

    assert (result.width, result.height, result.count) == (3, 7, 2)
    offset = 0
    for image in images:
        for y in range(image.height):
            for x in range(image.width):
                assert result.image.pixel_at(x, offset + y) == image.pixel_at(x, y)
        offset += image.height


@pytest.mark.parametrize("horizontal", [True, False])
def test_single_image_is_unchanged(service, make_image, horizontal):
    image = make_image(5, 4)
    result = service.merge([image], horizontal=horizontal)
    assert result.count == 1
    assert (result.width, result.height) == (5, 4)
    assert result.image == image


def test_horizontal_mixed_heights_fill_background(service, make_image):
    tall = make_image(2, 4, base=0x100)
    short = make_image(3, 1, base=0x200)
    result = service.merge([tall, short], horizontal=True)

    assert (result.width, result.height) == (5, 4)
    grid = result.image.as_grid()
    assert (grid[0, 2:5] == short.as_grid()[0]).all()
    assert (grid[1:, 2:5] == BACKGROUND).all()
    assert (grid[:, 0:2] == tall.as_grid()).all()


def test_vertical_mixed_widths_fill_background(service, make_image):
    narrow = make_image(1, 2, base=0x100)
    wide = make_image(4, 1, base=0x200)
    result = service.merge([narrow, wide], horizontal=False)

    assert (result.width, result.height) == (4, 3)
    grid = result.image.as_grid()
    assert (grid[0:2, 1:] == BACKGROUND).all()
    assert (grid[0:2, 0] == narrow.pixels).all()
    assert (grid[2] == wide.pixels).all()


def test_copies_of_same_image(service, make_image):
    image = make_image(3, 2)
    result = service.merge([image] * 4, horizontal=True)
    assert (result.width, result.height, result.count) == (12, 2, 4)
    for i in range(4):
        assert (result.image.as_grid()[:, i * 3 : (i + 1) * 3] == image.as_grid()).all()


def test_inputs_are_not_mutated(service, make_image):
    image = make_image(2, 2)
    before = image.pixels.copy()
    service.merge([image, image], horizontal=False)
    assert (image.pixels == before).all()


def test_accepts_any_iterable(service, make_image):
    result = service.merge(iter([make_image(1, 1), make_image(1, 1)]))
    assert result.count == 2


@pytest.mark.parametrize("horizontal", [True, False])
def test_empty_input_raises(service, horizontal):
    with pytest.raises(InvalidInputError):
        service.merge([], horizontal=horizontal)


def test_allocation_failure_is_resource_exhausted(service, make_image, monkeypatch):
    def fail(*_args, **_kwargs):
        raise MemoryError("too big")

    monkeypatch.setattr(merge_service.np, "full", fail)
    with pytest.raises(ResourceExhaustedError):
        service.merge([make_image(2, 2)])


def test_merge_images_defaults_to_horizontal(make_image):
    result = merge_images([make_image(2, 1), make_image(3, 1)])
    assert (result.width, result.height) == (5, 1)


def test_png_round_trip_is_lossless(service):
    rgba = Image.new("RGBA", (3, 2), (10, 20, 30, 40))
    rgba.putpixel((1, 1), (200, 100, 50, 0))
    rgb = Image.new("RGB", (2, 3), (1, 2, 3))
    images = [to_pixel_image(rgba), to_pixel_image(rgb)]

    result = service.merge(images, horizontal=True)
    data = EncodeService().encode(result.image, "png")

    with Image.open(BytesIO(data)) as decoded:
        assert to_pixel_image(decoded) == result.image
    assert result.image.pixel_at(1, 1) == 0xC86432
    assert result.image.pixel_at(0, 2) == BACKGROUND
    assert result.image.pixel_at(3, 2) == 0x010203
