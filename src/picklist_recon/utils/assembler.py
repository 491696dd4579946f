"""
Pipeline assembler for pick-list captures.

Orchestrates:
1. Image loading
2. OCR
3. Table reconstruction
4. Diagnostics fallback when no rows are found
5. Log file output

Each capture runs to completion on a single background worker, so two
captures never reconstruct concurrently.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from .diagnostics import build_report
from .export import ResultExporter, render_display_text, rows_to_json
from .io import get_file_size, get_timestamp, load_image
from .ocr_text import OCRError, TextOCR
from .tables import TableRow, reconstruct_table

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class ExtractionResult:
    """Outcome of one capture."""
    raw_text: str = ""
    rows: List[TableRow] = field(default_factory=list)
    report: Optional[str] = None
    error: Optional[str] = None
    timestamp: str = ""
    saved_paths: List[Path] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.error is None and bool(self.rows)

    def to_json(self, indent: int = 2) -> str:
        return rows_to_json(self.rows, indent)

    def to_display_text(self, indent: int = 2) -> str:
        if self.error is not None:
            return self.error
        return render_display_text(self.raw_text, self.rows, self.report, indent)


# ============================================================================
# Assembler
# ============================================================================

class PicklistAssembler:
    """
    Run OCR and table reconstruction for captured pick-list photos.

    Example:
        assembler = PicklistAssembler(output_dirs=["./output"])
        result = assembler.process_image("picklist.jpg")
        print(result.to_display_text())
    """

    def __init__(
        self,
        ocr_engine: str = "tesseract",
        language: str = "eng",
        tesseract_config: str = "--oem 3 --psm 3",
        use_gpu: bool = False,
        output_dirs: Optional[List[Union[str, Path]]] = None,
        log_dir_name: str = "PicklistLogs",
        json_indent: int = 2,
        context_before: int = 3,
        context_after: int = 5,
        ocr: Optional[Any] = None
    ):
        self.ocr_engine = ocr_engine
        self.language = language
        self.tesseract_config = tesseract_config
        self.use_gpu = use_gpu
        self.json_indent = json_indent
        self.context_before = context_before
        self.context_after = context_after
        self.exporter = ResultExporter(output_dirs or [], log_dir_name, json_indent)

        self._ocr = ocr
        self._executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def from_config(cls, config, ocr: Optional[Any] = None) -> "PicklistAssembler":
        """Build an assembler from a PipelineConfig."""
        return cls(
            ocr_engine=config.ocr.engine,
            language=config.ocr.language,
            tesseract_config=config.ocr.tesseract_config,
            use_gpu=config.ocr.use_gpu,
            output_dirs=config.output.directories if config.output.save_logs else [],
            log_dir_name=config.output.log_dir_name,
            json_indent=config.output.json_indent,
            context_before=config.diagnostics.context_before,
            context_after=config.diagnostics.context_after,
            ocr=ocr,
        )

    @property
    def ocr(self):
        """OCR engine, created on first use."""
        if self._ocr is None:
            self._ocr = TextOCR(
                engine=self.ocr_engine,
                language=self.language,
                tesseract_config=self.tesseract_config,
                use_gpu=self.use_gpu
            )
        return self._ocr

    def process_text(self, raw_text: str, timestamp: Optional[str] = None) -> ExtractionResult:
        """
        Reconstruct rows from OCR text, falling back to diagnostics.

        Args:
            raw_text: Full OCR text
            timestamp: Filename timestamp (defaults to now)

        Returns:
            ExtractionResult with rows, or with a report when none were found
        """
        timestamp = timestamp or get_timestamp()
        result = ExtractionResult(raw_text=raw_text, timestamp=timestamp)

        result.rows = reconstruct_table(raw_text)

        if not result.rows:
            logger.info("No table data found, building analysis report")
            result.report = build_report(raw_text, self.context_before, self.context_after)
            result.saved_paths.extend(self.exporter.export_report(result.report, timestamp))
        else:
            logger.info(f"Parsed {len(result.rows)} row(s)")
            result.saved_paths.extend(self.exporter.export_rows(result.rows, timestamp))

        return result

    def process_image(self, image_path: Union[str, Path]) -> ExtractionResult:
        """
        Run the full capture pipeline on an image file.

        Image and OCR failures are logged and returned as the result's
        error message; they are never raised.
        """
        timestamp = get_timestamp()

        try:
            image = load_image(image_path)
        except (FileNotFoundError, ValueError) as e:
            error = f"Error loading image: {e}"
            logger.error(error)
            return ExtractionResult(error=error, timestamp=timestamp)

        logger.debug(f"Image loaded: {image_path} ({get_file_size(image_path)})")
        return self.process_array(image, timestamp)

    def process_array(self, image, timestamp: Optional[str] = None) -> ExtractionResult:
        """Run OCR and reconstruction on an already decoded image."""
        timestamp = timestamp or get_timestamp()

        try:
            ocr_result = self.ocr.recognize(image)
        except (OCRError, ImportError, ValueError) as e:
            error = f"Processing failed: {e}"
            logger.error(error)
            return ExtractionResult(error=error, timestamp=timestamp)

        raw_paths = self.exporter.export_raw_text(ocr_result.text, timestamp)

        result = self.process_text(ocr_result.text, timestamp)
        result.saved_paths[:0] = raw_paths
        return result

    def submit(
        self,
        image_path: Union[str, Path],
        callback: Optional[Callable[[ExtractionResult], None]] = None
    ) -> "Future[ExtractionResult]":
        """
        Process an image in the background.

        Captures are queued on one worker and handled in submission order.
        The callback, if given, receives the finished result.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="picklist")

        future = self._executor.submit(self.process_image, image_path)

        if callback is not None:
            future.add_done_callback(lambda f: callback(f.result()))

        return future

    def shutdown(self, wait: bool = True):
        """Stop the background worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
