"""
Utility modules for the pick-list extraction pipeline.
"""

from .io import load_image, load_text, ensure_dir, get_timestamp, save_log_to_file
from .classify import TokenClass, RawLine, ClassifiedLine, classify_line, split_lines
from .tables import TableRow, TokenBuckets, reconstruct_table
from .diagnostics import DiagnosticsReport, analyze_failure, build_report
from .ocr_text import TextOCR, OCRResult, OCRError
from .export import ResultExporter, rows_to_json, render_display_text
from .assembler import PicklistAssembler, ExtractionResult

__all__ = [
    # IO
    "load_image", "load_text", "ensure_dir", "get_timestamp", "save_log_to_file",
    # Classification
    "TokenClass", "RawLine", "ClassifiedLine", "classify_line", "split_lines",
    # Tables
    "TableRow", "TokenBuckets", "reconstruct_table",
    # Diagnostics
    "DiagnosticsReport", "analyze_failure", "build_report",
    # OCR
    "TextOCR", "OCRResult", "OCRError",
    # Export
    "ResultExporter", "rows_to_json", "render_display_text",
    # Assembly
    "PicklistAssembler", "ExtractionResult",
]
