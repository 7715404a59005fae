import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.conversion_params import ConversionParams, parse_extensions
from ..models.errors import BinarizationError
from ..pipeline.fax_converter import convert_directory

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fax-binarize",
        description="Convert color scans to 1-bit CCITT Group 4 TIFF with Bradley adaptive thresholding.",
    )
    ap.add_argument("folder", nargs="?", default=".",
                    help="directory holding the images (default: current directory)")
    ap.add_argument("--brightness", type=float, default=None,
                    help="brightness difference limit in (0, 1) (env BRIGHTNESS_DIFF_LIMIT, default 0.18)")
    ap.add_argument("--dpi", type=float, default=None,
                    help="output resolution (env OUTPUT_RESOLUTION, default 200)")
    ap.add_argument("--output", default=None,
                    help="working path, files go to <output>/BinarizeBradley (env WORKING_PATH, default TEMP)")
    ap.add_argument("--ext", action="append", default=None,
                    help="file extension to convert, repeatable (env VALID_IMAGE_EXTENSIONS, default .jpg)")
    ap.add_argument("--recursive", action="store_true", help="descend into sub-directories")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def params_from_args(args: argparse.Namespace) -> ConversionParams:
    params = ConversionParams.from_env()
    if args.brightness is not None:
        params.brightness_diff_limit = args.brightness
    if args.dpi is not None:
        params.output_resolution = args.dpi
    if args.output is not None:
        params.working_path = Path(args.output)
    if args.ext:
        params.extensions = parse_extensions(",".join(args.ext))
    return params


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt='%H:%M:%S'
    )
    logger = logging.getLogger("fax_binarizer.cli")

    try:
        params = params_from_args(args).validate()
        result = convert_directory(args.folder, params, recursive=args.recursive)
    except (BinarizationError, NotADirectoryError) as err:
        logger.error(str(err))
        return 2

    logger.info(f"Time elapsed: {result.elapsed:.2f}s")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
