from .errors import BinarizationError, UnsupportedPixelFormat, InvalidParameter, EncoderNotFound
from .pixel_buffer import PixelBuffer, BLACK, WHITE, SUPPORTED_CHANNELS, is_binary
from .integral_image import IntegralImage
from .conversion_params import ConversionParams, check_brightness_diff_limit
from .batch_result import BatchResult
