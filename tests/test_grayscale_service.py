import math

import numpy as np
import pytest

from fax_binarizer.models import UnsupportedPixelFormat
from fax_binarizer.repositories.buffer_repository import BufferRepository
from fax_binarizer.services.grayscale_service import GrayscaleService, LUMINANCE_COEFFICIENTS


@pytest.fixture
def service():
    return GrayscaleService()


def _scalar_gray(pixel):
    k0, k1, k2 = (np.float32(k) for k in LUMINANCE_COEFFICIENTS)
    p = [np.float32(v) for v in pixel]
    if len(p) == 3:
        value = k0 * p[0] + k1 * p[1] + k2 * p[2]
    else:
        value = (p[0] / np.float32(255.0)) * (k0 * p[1] + k1 * p[2] + k2 * p[3])
    return int(value) & 0xFF


def test_coefficients_sum_to_one():
    assert LUMINANCE_COEFFICIENTS == (0.2126, 0.7152, 0.0722)
    assert math.fsum(LUMINANCE_COEFFICIENTS) == pytest.approx(1.0, abs=1e-12)


def test_single_channel_passes_through(service):
    gray = BufferRepository.from_array(np.array([[0, 17], [200, 255]], dtype=np.uint8))
    assert service.to_grayscale(gray) is gray


@pytest.mark.parametrize("pixel,expected", [
    ((100, 0, 0), 21),
    ((0, 100, 0), 71),
    ((0, 0, 100), 7),
    ((0, 0, 0), 0),
])
def test_three_channel_weights_follow_byte_order(service, pixel, expected):
    buf = BufferRepository.from_array(np.array([[pixel]], dtype=np.uint8))
    assert service.to_grayscale(buf).pixel(0, 0) == expected


@pytest.mark.parametrize("pixel,expected", [
    ((255, 100, 0, 0), 21),
    ((255, 0, 200, 0), 143),
    ((0, 200, 200, 200), 0),
])
def test_first_of_four_bytes_scales_luminance(service, pixel, expected):
    buf = BufferRepository.from_array(np.array([[pixel]], dtype=np.uint8))
    assert service.to_grayscale(buf).pixel(0, 0) == expected


@pytest.mark.parametrize("channels", [3, 4])
def test_matches_scalar_formula(service, rng, channels):
    pixels = rng.integers(0, 256, size=(7, 9, channels), dtype=np.uint8)
    gray = service.to_grayscale(BufferRepository.from_array(pixels))

    expected = np.array(
        [[_scalar_gray(pixels[y, x]) for x in range(9)] for y in range(7)], dtype=np.uint8
    )
    np.testing.assert_array_equal(gray.view(), expected)


def test_output_is_packed_for_padded_input(service, rng):
    pixels = rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)
    row_bytes = 5 * 3
    stride = row_bytes + 1
    raw = np.zeros((4, stride), dtype=np.uint8)
    raw[:, :row_bytes] = pixels.reshape(4, row_bytes)

    padded = BufferRepository.from_bytes(raw.tobytes(), width=5, height=4, channels=3, stride=stride)
    gray = service.to_grayscale(padded)

    assert gray.channels == 1
    assert gray.stride == gray.width == 5
    np.testing.assert_array_equal(
        gray.view(), service.to_grayscale(BufferRepository.from_array(pixels)).view()
    )


def test_two_channel_input_never_reaches_conversion():
    with pytest.raises(UnsupportedPixelFormat):
        BufferRepository.from_bytes(bytes(8), width=2, height=2, channels=2)
