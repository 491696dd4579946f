#!/usr/bin/env python
"""
Command-line interface for the pick-list extraction pipeline.

Usage:
    picklist-recon --input <image> [options]
    picklist-recon --text <ocr_text.txt> [options]

Examples:
    # OCR a photo and reconstruct the table
    picklist-recon --input picklist.jpg --output ./output

    # Re-run reconstruction on previously captured OCR text
    picklist-recon --text output/PicklistLogs/ocr_raw_20240131_142501123.txt --no-save

    # Print only the JSON array (or the analysis report)
    picklist-recon --input picklist.jpg --json-only
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from picklist_recon import __version__

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("picklist_recon")


def setup_argparser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="picklist-recon",
        description="Pick-list Reconstruction - Convert pick-list photos to structured rows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  OCR a photo and save logs:
    picklist-recon --input picklist.jpg --output ./output

  Reconstruct from saved OCR text:
    picklist-recon --text ocr_raw.txt --no-save

  Also copy logs to a shared folder:
    picklist-recon --input picklist.jpg --public-dir ~/Downloads
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input", "-i",
        help="Pick-list photo (PNG, JPG, TIFF, BMP)"
    )
    source.add_argument(
        "--text", "-t",
        help="Text file with previously captured OCR output"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory for log files (default: ./output or PICKLIST_OUTPUT_DIR)"
    )

    parser.add_argument(
        "--public-dir",
        default=None,
        help="Additional directory that receives a copy of every log file"
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write log files"
    )

    parser.add_argument(
        "--ocr-engine",
        choices=["tesseract", "easyocr"],
        default=None,
        help="OCR engine (default: tesseract)"
    )

    parser.add_argument(
        "--lang",
        default=None,
        help="OCR language code (default: eng)"
    )

    parser.add_argument(
        "--json-only",
        action="store_true",
        help="Print only the JSON rows, or the analysis report when none were found"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (re-raise unexpected errors)"
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


def check_dependencies() -> bool:
    """Check that OCR dependencies are available."""
    missing = []

    try:
        import cv2
    except ImportError:
        missing.append("opencv-python")

    try:
        import numpy
    except ImportError:
        missing.append("numpy")

    try:
        import pytesseract
        # Test if tesseract is actually installed
        try:
            pytesseract.get_tesseract_version()
        except Exception:
            missing.append("tesseract-ocr (system package)")
    except ImportError:
        missing.append("pytesseract")

    if missing:
        logger.error("Missing required dependencies:")
        for dep in missing:
            logger.error(f"  - {dep}")
        logger.error("\nInstall with: pip install picklist-recon")
        return False

    return True


def build_config(args):
    """Apply command line overrides to the environment configuration."""
    from picklist_recon.config import get_config

    config = get_config()

    if args.output:
        config.output.output_dir = Path(args.output)
    if args.public_dir:
        config.output.public_dir = Path(args.public_dir).expanduser()
    if args.no_save:
        config.output.save_logs = False
    if args.ocr_engine:
        config.ocr.engine = args.ocr_engine
    if args.lang:
        config.ocr.language = args.lang
    if args.debug:
        config.debug_mode = True

    return config


def run_pipeline(args, config=None) -> int:
    """Run the pick-list extraction pipeline."""
    from picklist_recon.utils.assembler import PicklistAssembler
    from picklist_recon.utils.export import NO_TABLE_MARKER
    from picklist_recon.utils.io import load_text

    start_time = time.time()
    if config is None:
        config = build_config(args)
    assembler = PicklistAssembler.from_config(config)

    if args.text:
        try:
            raw_text = load_text(args.text)
        except FileNotFoundError as e:
            logger.error(str(e))
            return 1
        result = assembler.process_text(raw_text)
    else:
        if not check_dependencies():
            return 1
        result = assembler.process_image(args.input)

    if result.error is not None:
        print(result.error, file=sys.stderr)
        return 1

    if args.json_only:
        if result.rows:
            print(result.to_json(config.output.json_indent))
        else:
            print(f"{NO_TABLE_MARKER}\n\n{result.report}")
    elif not args.quiet:
        print(result.to_display_text(config.output.json_indent))

    for path in result.saved_paths:
        logger.info(f"Saved: {path}")

    logger.info(f"Finished in {time.time() - start_time:.2f}s ({len(result.rows)} row(s))")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    config = build_config(args)

    try:
        exit_code = run_pipeline(args, config)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if config.debug_mode:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
