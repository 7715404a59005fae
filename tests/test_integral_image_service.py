import numpy as np
import pytest

from fax_binarizer.models import IntegralImage, UnsupportedPixelFormat
from fax_binarizer.repositories.buffer_repository import BufferRepository
from fax_binarizer.services.integral_image_service import IntegralImageService


@pytest.mark.parametrize("width,height,value", [(1, 1, 9), (10, 10, 128), (37, 5, 255), (4, 60, 1)])
def test_uniform_total(uniform_gray, width, height, value):
    integral = IntegralImageService.build(uniform_gray(width, height, value))
    assert integral.total == value * width * height
    assert integral.value(width - 1, height - 1) == value * width * height


def test_matches_column_major_loop(rng, reference_integral):
    pixels = rng.integers(0, 256, size=(13, 21), dtype=np.uint8)
    integral = IntegralImageService.build(BufferRepository.from_array(pixels))
    np.testing.assert_array_equal(integral.table, reference_integral(pixels))


def test_rectangle_from_origin(rng):
    pixels = rng.integers(0, 256, size=(8, 6), dtype=np.uint8)
    integral = IntegralImageService.build(BufferRepository.from_array(pixels))
    assert integral.value(3, 5) == int(pixels[:6, :4].astype(np.int64).sum())


def test_monotonic_along_both_axes(rng):
    pixels = rng.integers(0, 256, size=(16, 16), dtype=np.uint8)
    table = IntegralImageService.build(BufferRepository.from_array(pixels)).table
    assert (np.diff(table, axis=0) >= 0).all()
    assert (np.diff(table, axis=1) >= 0).all()


def test_table_is_int64(uniform_gray):
    integral = IntegralImageService.build(uniform_gray(3, 3, 255))
    assert integral.table.dtype == np.int64
    assert integral.table.shape == (3, 3)


def test_rejects_color_buffer():
    color = BufferRepository.from_array(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(UnsupportedPixelFormat):
        IntegralImageService.build(color)


def test_source_table_stays_writable():
    table = np.zeros((2, 3), dtype=np.int64)
    integral = IntegralImage(width=3, height=2, table=table)
    table[0, 0] = 5
    assert table.flags.writeable
    assert not integral.table.flags.writeable
