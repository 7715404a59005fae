import logging

from ..models.conversion_params import check_brightness_diff_limit
from ..models.pixel_buffer import PixelBuffer
from .grayscale_service import GrayscaleService
from .integral_image_service import IntegralImageService
from .threshold_service import ThresholdService

logger = logging.getLogger(__name__)


class BinarizationService:
    """
    grayscale -> integral image -> adaptive threshold.
    Every stage returns a fresh buffer, nothing is shared between calls.
    """

    def __init__(self):
        self.grayscale_service = GrayscaleService()
        self.integral_image_service = IntegralImageService()
        self.threshold_service = ThresholdService()

    def binarize(self, color_buffer: PixelBuffer, brightness_diff_limit: float) -> PixelBuffer:
        """
        Args:
            color_buffer (PixelBuffer): 1, 3 or 4 channels.
            brightness_diff_limit (float): in the open interval (0, 1).

        Returns:
            PixelBuffer: single channel, samples in {0, 255}.
        """
        check_brightness_diff_limit(brightness_diff_limit)

        gray = self.grayscale_service.to_grayscale(color_buffer)
        integral = self.integral_image_service.build(gray)
        binary = self.threshold_service.threshold(gray, integral, brightness_diff_limit)

        logger.debug(
            f"Binarized {color_buffer.width}x{color_buffer.height}x{color_buffer.channels} "
            f"(limit={brightness_diff_limit})"
        )
        return binary


def binarize(color_buffer: PixelBuffer, brightness_diff_limit: float) -> PixelBuffer:
    """Module-level shortcut for BinarizationService().binarize()."""
    return BinarizationService().binarize(color_buffer, brightness_diff_limit)
