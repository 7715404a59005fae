from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .errors import UnsupportedPixelFormat

SUPPORTED_CHANNELS = (1, 3, 4)
BLACK = 0
WHITE = 255


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Row-major 8-bit raster: width x height pixels of `channels` bytes each.
    Rows start `stride` bytes apart, stride may exceed width*channels when
    the producer pads rows for alignment.
    All pixel access goes through `offset()` / `view()`, never raw math.
    """
    width: int
    height: int
    channels: int
    stride: int
    data: np.ndarray  # 1-D uint8, read-only, length stride*height

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {self.width}x{self.height}")
        if self.channels not in SUPPORTED_CHANNELS:
            raise UnsupportedPixelFormat(self.channels)
        if self.stride < self.width * self.channels:
            raise ValueError(
                f"Stride {self.stride} is smaller than a row of {self.width}x{self.channels} bytes"
            )
        if self.data.dtype != np.uint8 or self.data.ndim != 1:
            raise ValueError("Buffer data must be a flat uint8 array")
        if self.data.size != self.stride * self.height:
            raise ValueError(
                f"Buffer holds {self.data.size} bytes, expected stride*height = {self.stride * self.height}"
            )
        frozen = self.data.view()
        frozen.flags.writeable = False
        object.__setattr__(self, "data", frozen)

    @property
    def row_bytes(self) -> int:
        """Number of meaningful bytes per row (no padding)."""
        return self.width * self.channels

    @property
    def is_packed(self) -> bool:
        return self.stride == self.row_bytes

    def offset(self, x: int, y: int, c: int = 0) -> int:
        """Flat byte offset of channel `c` of pixel (x, y), bounds-checked."""
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= c < self.channels):
            raise IndexError(
                f"Pixel ({x}, {y}, c={c}) outside {self.width}x{self.height}x{self.channels} buffer"
            )
        return y * self.stride + x * self.channels + c

    def pixel(self, x: int, y: int):
        """Sample at (x, y): an int for single-channel buffers, a tuple otherwise."""
        base = self.offset(x, y)
        if self.channels == 1:
            return int(self.data[base])
        return tuple(int(v) for v in self.data[base:base + self.channels])

    def view(self) -> np.ndarray:
        """
        Logical pixels without row padding.

        Returns
        -------
        (H, W) array for single-channel buffers, (H, W, C) otherwise.
        """
        rows = self.data.reshape(self.height, self.stride)[:, :self.row_bytes]
        if self.channels == 1:
            return rows
        return rows.reshape(self.height, self.width, self.channels)


def is_binary(buffer: PixelBuffer) -> bool:
    """True when `buffer` is single-channel and only holds BLACK/WHITE samples."""
    if buffer.channels != 1:
        return False
    values = np.unique(buffer.view())
    return bool(np.isin(values, (BLACK, WHITE)).all())
