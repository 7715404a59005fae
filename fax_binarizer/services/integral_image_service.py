import numpy as np

from ..models.errors import UnsupportedPixelFormat
from ..models.integral_image import IntegralImage
from ..models.pixel_buffer import PixelBuffer


class IntegralImageService:
    """Builds summed-area tables over grayscale buffers."""

    @staticmethod
    def build(gray: PixelBuffer) -> IntegralImage:
        """
        Column-major construction: a running sum down each column (colSum),
        then each column adds the finished column to its left,
        I(x, y) = colSum(0..y) + I(x-1, y).

        Accumulation is int64, wide enough for width*height*255.
        """
        if gray.channels != 1:
            raise UnsupportedPixelFormat(gray.channels, "integral image needs a single-channel buffer")

        samples = gray.view().astype(np.int64)
        col_sums = np.cumsum(samples, axis=0, dtype=np.int64)
        table = np.cumsum(col_sums, axis=1, dtype=np.int64)
        return IntegralImage(width=gray.width, height=gray.height, table=table)
