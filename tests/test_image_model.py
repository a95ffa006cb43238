import numpy as np
import pytest

from image_merger.errors import InvalidInputError
from image_merger.models.image_model import MergeResult, PixelImage


def test_pixel_buffer_must_match_dimensions():
    with pytest.raises(InvalidInputError):
        PixelImage(width=2, height=2, pixels=[0, 1, 2])


@pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (-3, 2)])
def test_dimensions_must_be_positive(width, height):
    with pytest.raises(InvalidInputError):
        PixelImage(width=width, height=height, pixels=[])


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        PixelImage(width=1, height=1, pixels=[])


def test_pixel_at_is_row_major():
    image = PixelImage(width=3, height=2, pixels=[0, 1, 2, 3, 4, 5])
    assert image.pixel_at(0, 0) == 0
    assert image.pixel_at(2, 0) == 2
    assert image.pixel_at(0, 1) == 3
    assert image.pixel_at(2, 1) == 5
    with pytest.raises(IndexError):
        image.pixel_at(3, 0)


def test_as_grid_shape(make_image):
    image = make_image(4, 3)
    assert image.as_grid().shape == (3, 4)
    assert image.size == (4, 3)


def test_pixels_are_copied_and_read_only():
    source = np.array([1, 2, 3, 4], dtype=np.uint32)
    image = PixelImage(width=2, height=2, pixels=source)
    source[0] = 99
    assert image.pixel_at(0, 0) == 1
    with pytest.raises(ValueError):
        image.pixels[0] = 7


def test_value_equality(make_image):
    assert make_image(2, 2) == make_image(2, 2)
    assert make_image(2, 2) != make_image(2, 2, base=0x20)
    assert make_image(4, 1) != make_image(2, 2)


def test_merge_result_is_frozen(make_image):
    result = MergeResult(width=2, height=2, count=1, image=make_image(2, 2))
    with pytest.raises(AttributeError):
        result.count = 3


def test_high_byte_is_dropped():
    image = PixelImage(width=2, height=1, pixels=[0xFF112233, 0x01ABCDEF])
    assert image.pixel_at(0, 0) == 0x112233
    assert image.pixel_at(1, 0) == 0xABCDEF


def test_merge_keeps_only_rgb_bits():
    from image_merger.services.merge_service import MergeService

    result = MergeService().merge([PixelImage(width=1, height=1, pixels=[0xFF112233])])
    assert result.image.pixel_at(0, 0) == 0x112233


@pytest.mark.parametrize("pixels", [[-1], [0, -0x10]])
def test_negative_values_rejected(pixels):
    with pytest.raises(InvalidInputError):
        PixelImage(width=len(pixels), height=1, pixels=pixels)


def test_non_numeric_buffer_rejected():
    with pytest.raises(InvalidInputError):
        PixelImage(width=1, height=1, pixels=["red"])
