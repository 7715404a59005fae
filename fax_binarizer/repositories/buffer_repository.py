from typing import Optional, Union
import numpy as np

from ..models.errors import UnsupportedPixelFormat
from ..models.pixel_buffer import PixelBuffer, SUPPORTED_CHANNELS


class BufferRepository:
    """
    Moves bytes between PixelBuffer values and the flat / ndarray
    representations image libraries hand in and out.

    • Buffers produced here are always tightly packed (stride == width*channels).
    • Source row padding is dropped at this boundary, byte-wise, so padding
      that is not a multiple of the channel count is handled as well.
    """

    # ---------- ndarray ----------
    @staticmethod
    def from_array(pixels: np.ndarray) -> PixelBuffer:
        """
        Args
        ----
        pixels : np.ndarray  (H, W) or (H, W, C)  uint8

        Returns
        -------
        PixelBuffer holding a private copy of the pixels.
        """
        if pixels.dtype != np.uint8:
            channels = pixels.shape[2] if pixels.ndim == 3 else 1
            raise UnsupportedPixelFormat(channels, f"{pixels.dtype} samples, expected uint8")
        if pixels.ndim == 2:
            height, width = pixels.shape
            channels = 1
        elif pixels.ndim == 3:
            height, width, channels = pixels.shape
        else:
            raise ValueError(f"Expected a 2-D or 3-D pixel array, got shape {pixels.shape}")
        if channels not in SUPPORTED_CHANNELS:
            raise UnsupportedPixelFormat(channels)

        flat = np.ascontiguousarray(pixels).reshape(-1).copy()
        return PixelBuffer(width=width, height=height, channels=channels,
                           stride=width * channels, data=flat)

    @staticmethod
    def to_array(buffer: PixelBuffer) -> np.ndarray:
        """Writable (H, W) / (H, W, C) copy of the logical pixels."""
        return np.array(buffer.view(), dtype=np.uint8, copy=True)

    # ---------- flat bytes ----------
    @staticmethod
    def from_bytes(
        data: Union[bytes, bytearray, memoryview, np.ndarray],
        width: int,
        height: int,
        channels: int,
        stride: Optional[int] = None,
    ) -> PixelBuffer:
        """
        Wrap a flat row-major byte sequence.

        `stride` defaults to width*channels. When the source pads its rows,
        pass the real stride: the padding is stripped and the returned buffer
        is tightly packed. A trailing partial row (last row without padding)
        is accepted.
        """
        if channels not in SUPPORTED_CHANNELS:
            raise UnsupportedPixelFormat(channels)
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")

        row_bytes = width * channels
        stride = row_bytes if stride is None else stride
        if stride < row_bytes:
            raise ValueError(f"Stride {stride} is smaller than a row of {row_bytes} bytes")

        raw = np.frombuffer(data, dtype=np.uint8) if not isinstance(data, np.ndarray) else data.reshape(-1)
        if raw.dtype != np.uint8:
            raise UnsupportedPixelFormat(channels, f"{raw.dtype} samples, expected uint8")

        needed = stride * (height - 1) + row_bytes
        if raw.size < needed:
            raise ValueError(
                f"Got {raw.size} bytes, need at least {needed} for {width}x{height}x{channels} "
                f"with stride {stride}"
            )

        if stride == row_bytes:
            packed = raw[:row_bytes * height].copy()
        else:
            padded = np.zeros(stride * height, dtype=np.uint8)
            padded[:min(raw.size, padded.size)] = raw[:padded.size]
            packed = padded.reshape(height, stride)[:, :row_bytes].reshape(-1).copy()

        return PixelBuffer(width=width, height=height, channels=channels,
                           stride=row_bytes, data=packed)

    @staticmethod
    def to_bytes(buffer: PixelBuffer) -> bytes:
        """Tightly packed bytes, width*height*channels long."""
        return np.ascontiguousarray(buffer.view()).tobytes()

    @classmethod
    def normalize(cls, buffer: PixelBuffer) -> PixelBuffer:
        """Return `buffer` itself if already packed, else a packed copy."""
        if buffer.is_packed:
            return buffer
        return cls.from_array(buffer.view())
