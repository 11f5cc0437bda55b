#!/usr/bin/env python
"""
Command-line interface for the OCR to LaTeX converter.

Usage:
    ocr2latex <image_path> [language] [options]

Examples:
    # Convert an image using English OCR
    ocr2latex equation.png

    # Indonesian OCR, write files to ./out
    ocr2latex equation.png ind --output-dir ./out

    # Generate a sample image to try things out
    ocr2latex --create-sample
"""

import sys
import argparse
import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import LOG_FORMAT, PipelineConfig, get_config
from .utils.converter import LatexConverter
from .utils.export import DocumentExporter
from .utils.images import save_sample_image
from .utils.io import ensure_dir, is_image_file, save_json
from .utils.ocr_text import InvalidInputError, OCRError, TextOCR

# Setup logging
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger("ocr2latex")


DEFAULT_SAMPLE_PATH = "sample_equation.png"


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="ocr2latex",
        description="OCR to LaTeX - Convert an image of text and equations to LaTeX",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Convert an image (English):
    ocr2latex equation.png

  Convert with another Tesseract language:
    ocr2latex equation.png ind

  Create a sample image:
    ocr2latex --create-sample
        """
    )

    parser.add_argument(
        "image",
        nargs="?",
        help="Input image file"
    )

    parser.add_argument(
        "language",
        nargs="?",
        default=None,
        help="Tesseract language code (default: eng)"
    )

    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        help="Directory for output.tex and preview.tex (default: current directory)"
    )

    parser.add_argument(
        "--create-sample",
        nargs="?",
        const=DEFAULT_SAMPLE_PATH,
        default=None,
        metavar="PATH",
        help=f"Write a sample equation image and exit (default: {DEFAULT_SAMPLE_PATH})"
    )

    parser.add_argument(
        "--preprocess",
        action="store_true",
        help="Binarize and denoise the image before OCR"
    )

    parser.add_argument(
        "--tesseract-cmd",
        default=None,
        help="Path to the tesseract executable (default: search common locations)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for Tesseract (default: 30, 0 = no limit)"
    )

    parser.add_argument(
        "--no-placeholder",
        action="store_true",
        help="Fail instead of using placeholder text when OCR is unavailable"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Also write a JSON report with per-line classification"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-error output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args) -> PipelineConfig:
    """Apply command-line options on top of the environment configuration."""
    config = get_config()
    ocr = config.ocr

    if args.language:
        ocr = replace(ocr, language=args.language)
    if args.tesseract_cmd:
        ocr = replace(ocr, tesseract_cmd=args.tesseract_cmd)
    if args.timeout is not None:
        ocr = replace(ocr, timeout=args.timeout)
    if args.no_placeholder:
        ocr = replace(ocr, allow_placeholder=False)
    if args.preprocess:
        ocr = replace(ocr, preprocess=True)

    return replace(config, ocr=ocr)


def run_pipeline(args, config: PipelineConfig) -> int:
    """Run OCR and LaTeX conversion for one image."""
    start_time = time.time()

    image_path = Path(args.image)
    if not image_path.is_file():
        logger.error(f"File not found: {image_path}")
        return 1
    if not is_image_file(image_path):
        logger.warning(f"Unrecognized image extension, trying anyway: {image_path.suffix}")

    logger.info(f"Processing image: {image_path}")
    logger.info(f"OCR language: {config.ocr.language}")

    ocr = TextOCR(config.ocr)
    try:
        ocr_result = ocr.recognize(image_path, language=config.ocr.language)
    except InvalidInputError as e:
        logger.error(str(e))
        return 1
    except OCRError as e:
        logger.error(f"Text extraction failed: {e}")
        if config.debug_mode:
            raise
        return 1

    converter = LatexConverter()
    conversion = converter.convert_lines(ocr_result.text)
    body = conversion.latex

    output_dir = ensure_dir(args.output_dir)
    exporter = DocumentExporter(output_dir, config.export)
    paths = exporter.export(body)

    if args.json:
        report = {
            "image": str(image_path),
            "ocr": ocr_result.to_dict(),
            "conversion": conversion.to_dict(),
        }
        paths["report"] = save_json(report, output_dir / config.export.report_filename)
        logger.info(f"Saved JSON report: {paths['report']}")

    elapsed = time.time() - start_time

    if not args.quiet:
        if ocr_result.is_placeholder:
            print("\nNOTE: Tesseract was not used; the text below is placeholder sample text.")
        print(f"\nDetected text:\n{ocr_result.text}")
        print("\n" + "=" * 60)
        print("LaTeX CONVERSION RESULT:")
        print("=" * 60)
        print(body)
        print()
        print(f"Result saved to: {paths['body']}")
        print(f"Full LaTeX preview created: {paths['preview']}")
        if "report" in paths:
            print(f"JSON report: {paths['report']}")
        print(f"Processing time: {elapsed:.2f}s")
        print("\nTo compile the LaTeX file:")
        print(f"pdflatex {paths['preview'].name}")

    return 0


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    if args.create_sample:
        try:
            path = save_sample_image(args.create_sample)
        except (IOError, ValueError) as e:
            logger.error(f"Failed to create sample image: {e}")
            sys.exit(1)
        if not args.quiet:
            print(f"Sample image created: {path}")
        sys.exit(0)

    if not args.image:
        parser.print_usage(sys.stderr)
        logger.error("An image path is required (or use --create-sample)")
        sys.exit(1)

    config = build_config(args)

    try:
        exit_code = run_pipeline(args, config)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.verbose or config.debug_mode:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
