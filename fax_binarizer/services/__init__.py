from .grayscale_service import GrayscaleService, LUMINANCE_COEFFICIENTS
from .integral_image_service import IntegralImageService
from .threshold_service import ThresholdService, window_bounds, window_size
from .binarization_service import BinarizationService, binarize
from .image_service import ImageService
