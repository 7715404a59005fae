from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import os
import tempfile
from typing import Tuple

from dotenv import load_dotenv

from .errors import InvalidParameter

# Load environment variables
load_dotenv()

DEFAULT_BRIGHTNESS_DIFF_LIMIT = 0.18
DEFAULT_OUTPUT_RESOLUTION = 200.0
DEFAULT_EXTENSIONS = (".jpg",)
OUTPUT_SUBDIR = "BinarizeBradley"


def parse_extensions(raw: str) -> Tuple[str, ...]:
    exts = []
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        exts.append(ext if ext.startswith(".") else f".{ext}")
    return tuple(exts)


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidParameter(name, raw, "a number") from None


@dataclass
class ConversionParams:
    """
    Settings for one conversion run.

    brightness_diff_limit: how far (as a fraction) a pixel may sit below its
        local mean and still count as background. 0.15 works reasonably well
        for most scans; must lie in the open interval (0, 1).
    output_resolution: DPI written into the output file, not used by the math.
    working_path: root of the output tree, results land in
        <working_path>/BinarizeBradley.
    """
    brightness_diff_limit: float = DEFAULT_BRIGHTNESS_DIFF_LIMIT
    output_resolution: float = DEFAULT_OUTPUT_RESOLUTION
    working_path: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS

    @classmethod
    def from_env(cls) -> "ConversionParams":
        working_path = os.getenv("WORKING_PATH") or tempfile.gettempdir()
        return cls(
            brightness_diff_limit=_float_from_env("BRIGHTNESS_DIFF_LIMIT", DEFAULT_BRIGHTNESS_DIFF_LIMIT),
            output_resolution=_float_from_env("OUTPUT_RESOLUTION", DEFAULT_OUTPUT_RESOLUTION),
            working_path=Path(working_path),
            extensions=parse_extensions(os.getenv("VALID_IMAGE_EXTENSIONS", ",".join(DEFAULT_EXTENSIONS))),
        )

    @property
    def output_dir(self) -> Path:
        return Path(self.working_path) / OUTPUT_SUBDIR

    def validate(self) -> "ConversionParams":
        check_brightness_diff_limit(self.brightness_diff_limit)
        if not self.output_resolution > 0:
            raise InvalidParameter("output_resolution", self.output_resolution, "a positive DPI value")
        if not self.extensions:
            raise InvalidParameter("extensions", self.extensions, "at least one file extension")
        return self


def check_brightness_diff_limit(value: float) -> float:
    if not 0.0 < value < 1.0:
        raise InvalidParameter("brightness_diff_limit", value, "a value in the open interval (0, 1)")
    return value
