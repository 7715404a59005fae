import numpy as np
import pytest

from fax_binarizer.repositories.buffer_repository import BufferRepository


def _reference_integral(gray: np.ndarray) -> np.ndarray:
    h, w = gray.shape
    table = np.zeros((h, w), dtype=np.int64)
    for i in range(w):
        col_sum = 0
        for j in range(h):
            col_sum += int(gray[j, i])
            table[j, i] = col_sum if i == 0 else int(table[j, i - 1]) + col_sum
    return table


def _reference_threshold(gray: np.ndarray, brightness_diff_limit: float) -> np.ndarray:
    """Pixel-by-pixel Bradley loop; needs width >= 2 and a window that fits the height."""
    h, w = gray.shape
    table = _reference_integral(gray)
    s = w // 14
    half_s = s // 2
    t = np.float32(1.0) - np.float32(brightness_diff_limit)
    out = np.zeros((h, w), dtype=np.uint8)

    for i in range(w):
        x1, x2 = i - half_s, i + half_s
        if x1 < 0:
            x1 = 0
        elif x2 >= w:
            x2 = w - 1
        for j in range(h):
            y1, y2 = j - half_s, j + half_s
            if y1 < 0:
                y1 = 0
            elif y2 >= h:
                y2 = h - 1
            count = (x2 - x1) * (y2 - y1)
            x1m1, y1m1 = abs(x1 - 1), abs(y1 - 1)
            total = (int(table[y2, x2]) - int(table[y1m1, x2])
                     - int(table[y2, x1m1]) + int(table[y1m1, x1m1]))
            if np.float32(int(gray[j, i]) * count) <= np.float32(total) * t:
                out[j, i] = 0
            else:
                out[j, i] = 255
    return out


@pytest.fixture
def reference_integral():
    return _reference_integral


@pytest.fixture
def reference_threshold():
    return _reference_threshold


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def uniform_gray():
    def _make(width: int, height: int, value: int):
        return BufferRepository.from_array(np.full((height, width), value, dtype=np.uint8))
    return _make
