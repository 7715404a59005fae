import numpy as np

from ..models.pixel_buffer import PixelBuffer
from ..repositories.buffer_repository import BufferRepository

# Rec. 709 luma weights, applied to the 1st, 2nd and 3rd colour byte.
LUMINANCE_COEFFICIENTS = (0.2126, 0.7152, 0.0722)

_K0, _K1, _K2 = (np.float32(k) for k in LUMINANCE_COEFFICIENTS)
_SCALE_MAX = np.float32(255.0)


class GrayscaleService:
    """
    Reduces 3- and 4-channel buffers to one luminance byte per pixel.
    Arithmetic is single precision and truncates toward zero.
    """

    def __init__(self) -> None:
        self.buffer_repository = BufferRepository()

    @staticmethod
    def _luminance(c0: np.ndarray, c1: np.ndarray, c2: np.ndarray) -> np.ndarray:
        return _K0 * c0 + _K1 * c1 + _K2 * c2

    def to_grayscale(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Args:
            buffer (PixelBuffer): 1, 3 or 4 channels, any stride.

        Returns:
            PixelBuffer: single channel, tightly packed. A single-channel
            input is returned as is.

        A 4-channel pixel's first byte scales the luminance of the other three:
        gray = (c0 / 255) * (0.2126*c1 + 0.7152*c2 + 0.0722*c3).
        """
        if buffer.channels == 1:
            return buffer

        pixels = buffer.view().astype(np.float32)
        if buffer.channels == 3:
            gray = self._luminance(pixels[..., 0], pixels[..., 1], pixels[..., 2])
        else:
            # PixelBuffer only admits 1, 3 or 4 channels
            gray = (pixels[..., 0] / _SCALE_MAX) * self._luminance(
                pixels[..., 1], pixels[..., 2], pixels[..., 3]
            )

        # float -> int truncation, then keep the low byte
        gray_u8 = gray.astype(np.int32).astype(np.uint8)
        return self.buffer_repository.from_array(gray_u8)
