from __future__ import annotations
from pathlib import Path
from typing import Union, Iterable, Iterator
import logging
import os
import numpy as np
import cv2
from PIL import Image as PILImage
from PIL import features
from dotenv import load_dotenv

from ..models.conversion_params import parse_extensions
from ..models.errors import EncoderNotFound, UnsupportedPixelFormat
from ..models.pixel_buffer import PixelBuffer
from .buffer_repository import BufferRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

CCITT4_CONTAINER = "TIFF"
BILEVEL_MODE = "1"
PALETTE_MODE = "P"


class ImageRepository:
    """
    Handles file I/O for PixelBuffer values.

    • Decoding keeps the byte order of the file's native bitmap layout
      (OpenCV's BGR / BGRA), so channel 0 is the first byte of each pixel.
    • Encoding writes 1-bit CCITT Group 4 TIFF through Pillow/libtiff.
    """
    def __init__(self):
        self.VALID_EXTS = set(parse_extensions(os.getenv("VALID_IMAGE_EXTENSIONS", ".jpg")))
        self.buffer_repository = BufferRepository()

    # ---------- decoding ----------
    @staticmethod
    def is_bilevel(path: Union[str, Path]) -> bool:
        """True if the file is already stored as a 1-bit image."""
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image not found: {path}")
        with PILImage.open(path) as im:
            return im.mode == BILEVEL_MODE

    def load_buffer(self, path: Union[str, Path]) -> PixelBuffer:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image not found: {path}")

        with PILImage.open(path) as im:
            mode = im.mode
            if mode == PALETTE_MODE:
                # Palette indices are taken as gray levels.
                return self.buffer_repository.from_array(np.asarray(im, dtype=np.uint8))
            if mode == BILEVEL_MODE:
                return self.buffer_repository.from_array(np.asarray(im.convert("L"), dtype=np.uint8))

        arr = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if arr is None:
            raise FileNotFoundError(f"Image not found or unreadable: {path}")
        if arr.dtype != np.uint8:
            channels = arr.shape[2] if arr.ndim == 3 else 1
            raise UnsupportedPixelFormat(channels, f"{arr.dtype} samples in {path.name}")

        logger.debug(f"Decoded {path.name}: shape={arr.shape} mode={mode}")
        return self.buffer_repository.from_array(arr)

    # ---------- encoding ----------
    @staticmethod
    def has_ccitt4_encoder() -> bool:
        PILImage.init()
        return CCITT4_CONTAINER in PILImage.SAVE and bool(features.check("libtiff"))

    def require_ccitt4_encoder(self) -> None:
        if not self.has_ccitt4_encoder():
            raise EncoderNotFound(f"{CCITT4_CONTAINER} (CCITT Group 4)")

    def save_ccitt4(self, binary: PixelBuffer, path: Union[str, Path], dpi: float) -> Path:
        """
        Write `binary` (single channel, 0/255) as a Group 4 compressed
        1-bit TIFF at `dpi` x `dpi`.
        """
        self.require_ccitt4_encoder()
        if binary.channels != 1:
            raise UnsupportedPixelFormat(binary.channels, "CCITT4 output needs a single-channel buffer")

        path = Path(path)
        bilevel = PILImage.fromarray(self.buffer_repository.to_array(binary)).convert(
            BILEVEL_MODE, dither=PILImage.Dither.NONE
        )
        bilevel.save(path, format=CCITT4_CONTAINER, compression="group4", dpi=(dpi, dpi))
        return path

    @staticmethod
    def remove_existing(path: Union[str, Path]) -> None:
        path = Path(path)
        if path.exists():
            path.unlink()

    # ---------- directory listing ----------
    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image paths one at a time, sorted by name.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            if not p.is_file():
                logger.debug(f"Skipping because not file: {p}")
                continue
            yield p
