"""
Bradley adaptive thresholding over an integral image.

Reference: D. Bradley, G. Roth, "Adaptive Thresholding Using the Integral
Image", Journal of Graphics Tools 12(2), 2007.

A pixel turns black when its value is at most (1 - brightness_diff_limit)
times the mean of the s x s window around it, s being width / 14.
"""
from __future__ import annotations
import logging
from typing import Tuple
import numpy as np

from ..models.errors import UnsupportedPixelFormat
from ..models.integral_image import IntegralImage
from ..models.pixel_buffer import PixelBuffer, BLACK, WHITE
from ..repositories.buffer_repository import BufferRepository

logger = logging.getLogger(__name__)

WINDOW_DIVISOR = 14


def window_size(width: int) -> Tuple[int, int]:
    """(s, s // 2) for an image `width` pixels wide."""
    s = width // WINDOW_DIVISOR
    return s, s // 2


def window_bounds(index: int, length: int, half_s: int) -> Tuple[int, int]:
    """
    Clamp the window [index - half_s, index + half_s] along one axis.

    Only one side is adjusted: the low end when it falls below 0, otherwise
    the high end when it passes the last sample. The final pin keeps `hi`
    inside the axis when the window is wider than the axis itself.
    """
    lo = index - half_s
    hi = index + half_s
    if lo < 0:
        lo = 0
    elif hi >= length:
        hi = length - 1
    return lo, min(hi, length - 1)


def _axis_bounds(length: int, half_s: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorised window_bounds for every index of an axis, plus |lo - 1|."""
    idx = np.arange(length, dtype=np.int64)
    lo = idx - half_s
    hi = idx + half_s

    below = lo < 0
    lo = np.where(below, 0, lo)
    hi = np.where(~below & (hi >= length), length - 1, hi)
    hi = np.minimum(hi, length - 1)

    # |lo - 1| keeps the inclusion-exclusion branch-free at lo == 0
    outer = np.minimum(np.abs(lo - 1), length - 1)
    return lo, hi, outer


class ThresholdService:
    """
    Turns a grayscale buffer into a 0/255 buffer with Bradley's method.
    """

    def __init__(self) -> None:
        self.buffer_repository = BufferRepository()

    @staticmethod
    def window_sums(integral: IntegralImage, half_s: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns
        -------
        sums  : (H, W) int64, I(x2,y2) - I(x2,|y1-1|) - I(|x1-1|,y2) + I(|x1-1|,|y1-1|)
        count : (H, W) int64, (x2 - x1) * (y2 - y1)
        """
        x1, x2, x1_outer = _axis_bounds(integral.width, half_s)
        y1, y2, y1_outer = _axis_bounds(integral.height, half_s)

        table = integral.table
        rows_in = y2[:, None]
        rows_out = y1_outer[:, None]
        cols_in = x2[None, :]
        cols_out = x1_outer[None, :]

        sums = (table[rows_in, cols_in]
                - table[rows_out, cols_in]
                - table[rows_in, cols_out]
                + table[rows_out, cols_out])
        count = (y2 - y1)[:, None] * (x2 - x1)[None, :]
        return sums, count

    def threshold(
        self,
        gray: PixelBuffer,
        integral: IntegralImage,
        brightness_diff_limit: float,
    ) -> PixelBuffer:
        """
        Args:
            gray (PixelBuffer): single-channel source.
            integral (IntegralImage): summed-area table of `gray`.
            brightness_diff_limit (float): expected in (0, 1), not checked here.

        Returns:
            PixelBuffer: single channel, BLACK where
            value * count <= window_sum * (1 - brightness_diff_limit), WHITE elsewhere.
            Both sides are compared in single precision.
        """
        if gray.channels != 1:
            raise UnsupportedPixelFormat(gray.channels, "thresholding needs a single-channel buffer")
        if (integral.width, integral.height) != (gray.width, gray.height):
            raise ValueError(
                f"Integral image {integral.width}x{integral.height} does not match "
                f"buffer {gray.width}x{gray.height}"
            )

        s, half_s = window_size(gray.width)
        t = np.float32(1.0) - np.float32(brightness_diff_limit)
        logger.debug(f"Thresholding {gray.width}x{gray.height}: s={s} halfS={half_s} t={t}")

        sums, count = self.window_sums(integral, half_s)
        lhs = (gray.view().astype(np.int64) * count).astype(np.float32)
        rhs = sums.astype(np.float32) * t

        binary = np.where(lhs <= rhs, BLACK, WHITE).astype(np.uint8)
        return self.buffer_repository.from_array(binary)
