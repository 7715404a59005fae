from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True, eq=False)
class IntegralImage:
    """
    Summed-area table over a grayscale buffer.
    table[y, x] == sum of every sample in [0, x] x [0, y].
    """
    width: int
    height: int
    table: np.ndarray  # Shape (H, W), dtype int64.

    def __post_init__(self):
        if self.table.shape != (self.height, self.width):
            raise ValueError(
                f"Integral table shape {self.table.shape} does not match {self.width}x{self.height}"
            )
        if self.table.dtype != np.int64:
            raise ValueError(f"Integral table must be int64, got {self.table.dtype}")
        frozen = self.table.view()
        frozen.flags.writeable = False
        object.__setattr__(self, "table", frozen)

    def value(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} integral image")
        return int(self.table[y, x])

    @property
    def total(self) -> int:
        """Sum of the whole image."""
        return int(self.table[-1, -1])
