from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, Union

from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No thresholding logic here."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        """Decode a single image file into a PixelBuffer."""
        return self.image_repository.load_buffer(path)

    def is_bilevel(self, path: Union[str, Path]) -> bool:
        return self.image_repository.is_bilevel(path)

    def stream_folder(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image paths lazily instead of returning a list.
        """
        return self.image_repository.iter_dir(folder, recursive=recursive, exts=exts)

    def ensure_ccitt4_encoder(self) -> None:
        """Raise EncoderNotFound before any conversion work is done."""
        self.image_repository.require_ccitt4_encoder()

    def save_ccitt4(self, binary: PixelBuffer, path: Union[str, Path], dpi: float) -> Path:
        """
        Business-level save: replaces whatever sits at `path`, then writes a
        Group 4 TIFF. Not atomic.
        """
        self.image_repository.remove_existing(path)
        return self.image_repository.save_ccitt4(binary, path, dpi)
