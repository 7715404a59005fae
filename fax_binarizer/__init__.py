"""
Bradley adaptive binarization of color scans for CCITT Group 4 fax TIFF.
"""
from .models import (
    PixelBuffer,
    IntegralImage,
    ConversionParams,
    BatchResult,
    BinarizationError,
    UnsupportedPixelFormat,
    InvalidParameter,
    EncoderNotFound,
)
from .services.binarization_service import BinarizationService, binarize

__version__ = "1.0.0"
