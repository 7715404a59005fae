# pipeline/fax_converter.py
"""
Color scan -> CCITT Group 4 TIFF conversion.

• convert_to_ccitt4   one file, returns the written path (None if the
                      source is already 1-bit).
• convert_directory   every matching file of a folder, sequentially.
"""
from __future__ import annotations
from pathlib import Path
import logging
import time
from typing import Iterable, Optional

from ..models.batch_result import BatchResult
from ..models.conversion_params import ConversionParams
from ..models.errors import BinarizationError
from ..services.binarization_service import BinarizationService
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".TIFF"


def output_path_for(source: str | Path, params: ConversionParams) -> Path:
    """<output_dir>/<source file name>.TIFF, e.g. scan.jpg -> scan.jpg.TIFF"""
    return params.output_dir / f"{Path(source).name}{OUTPUT_SUFFIX}"


def convert_to_ccitt4(
    path: str | Path,
    params: Optional[ConversionParams] = None,
    *,
    image_service: ImageService = ImageService(),
    binarization_service: BinarizationService = BinarizationService(),
) -> Optional[Path]:
    """
    Convert one image file to a 1-bit Group 4 TIFF using Bradley adaptive
    thresholding.

    Steps:
        1. already 1-bit source → nothing to do, return None
        2. make sure the Group 4 encoder exists (EncoderNotFound otherwise)
        3. decode, binarize
        4. replace <output_dir>/<name>.TIFF and write it at the configured DPI

    Returns:
        Optional[Path]: the written file, or None when no conversion was needed.
    """
    params = (params or ConversionParams.from_env()).validate()
    path = Path(path)

    if image_service.is_bilevel(path):
        logger.info(f"{path.name} is already 1-bit, skipping")
        return None

    image_service.ensure_ccitt4_encoder()

    color = image_service.load(path)

    output_dir = params.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_path_for(path, params)

    binary = binarization_service.binarize(color, params.brightness_diff_limit)
    image_service.save_ccitt4(binary, target, params.output_resolution)

    logger.debug(f"Wrote {target} ({binary.width}x{binary.height} @ {params.output_resolution} dpi)")
    return target


def convert_directory(
    folder: str | Path,
    params: Optional[ConversionParams] = None,
    *,
    recursive: bool = False,
    exts: Iterable[str] | None = None,
    image_service: ImageService = ImageService(),
    binarization_service: BinarizationService = BinarizationService(),
) -> BatchResult:
    """
    Convert every matching image in *folder*, one after the other.

    A missing encoder or bad parameters abort the run before any file is
    touched. A file that fails to decode or convert is logged, recorded in
    BatchResult.failed, and the run moves on.
    """
    params = (params or ConversionParams.from_env()).validate()
    image_service.ensure_ccitt4_encoder()

    result = BatchResult(output_dir=params.output_dir)
    started = time.perf_counter()

    for path in image_service.stream_folder(folder, recursive=recursive, exts=exts or params.extensions):
        logger.info(f"Binarizing file {path.name}")
        try:
            written = convert_to_ccitt4(
                path,
                params,
                image_service=image_service,
                binarization_service=binarization_service,
            )
        except (BinarizationError, OSError) as err:
            logger.error(f"Failed to convert {path.name}: {err}")
            result.failed[path] = str(err)
            continue

        if written is None:
            result.skipped.append(path)
        else:
            result.converted.append(written)

    result.elapsed = time.perf_counter() - started
    logger.info(f"Output directory is: {result.output_dir}")
    logger.info(
        f"Converted {len(result.converted)}, skipped {len(result.skipped)}, "
        f"failed {len(result.failed)} in {result.elapsed:.2f}s"
    )
    return result
