from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


@dataclass
class BatchResult:
    """
    Outcome of one directory run.
    """
    output_dir: Path
    converted: List[Path] = field(default_factory=list)  # Written TIFF files.
    skipped: List[Path] = field(default_factory=list)    # Sources already 1-bit.
    failed: Dict[Path, str] = field(default_factory=dict)  # Source -> error message.
    elapsed: float = 0.0  # Seconds.

    @property
    def ok(self) -> bool:
        return not self.failed
