"""
Export module for pick-list extraction results.

Supports:
- JSON array of the five surfaced row fields
- Operator display text (raw OCR, parsed JSON or analysis report)
- Writing raw text, JSON and reports as timestamped log files
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .io import save_log_to_file
from .tables import TableRow

logger = logging.getLogger(__name__)


NO_TABLE_MARKER = "NO TABLE DATA FOUND"


def rows_to_records(rows: Sequence[TableRow]) -> List[Dict[str, Any]]:
    return [row.to_dict() for row in rows]


def rows_to_json(rows: Sequence[TableRow], indent: int = 2) -> str:
    """Serialize rows as a JSON array with the external record keys."""
    if not rows:
        return "[]"
    return json.dumps(rows_to_records(rows), indent=indent, ensure_ascii=False)


def render_display_text(
    raw_text: str,
    rows: Sequence[TableRow],
    report: Optional[str] = None,
    indent: int = 2
) -> str:
    """
    Build the text shown to the operator after a capture.

    Rows found:
        RAW OCR OUTPUT, then PARSED JSON
    No rows:
        RAW OCR OUTPUT, the no-table marker, then ANALYSIS REPORT
    """
    text = f"RAW OCR OUTPUT:\n\n{raw_text}"

    if rows:
        text += f"\n\nPARSED JSON:\n\n{rows_to_json(rows, indent)}"
    else:
        text += f"\n\n{NO_TABLE_MARKER}"
        if report is not None:
            text += f"\n\nANALYSIS REPORT:\n\n{report}"

    return text


class ResultExporter:
    """Write extraction outputs as timestamped log files."""

    def __init__(
        self,
        directories: Sequence[Union[str, Path]],
        log_dir_name: str = "PicklistLogs",
        json_indent: int = 2
    ):
        self.directories = [Path(d) for d in directories]
        self.log_dir_name = log_dir_name
        self.json_indent = json_indent

    def _save(self, content: str, filename: str) -> List[Path]:
        if not self.directories:
            return []
        return save_log_to_file(content, filename, self.directories, self.log_dir_name)

    def export_raw_text(self, raw_text: str, timestamp: str) -> List[Path]:
        paths = self._save(raw_text, f"ocr_raw_{timestamp}.txt")
        logger.debug(f"Raw OCR saved to: {[str(p) for p in paths]}")
        return paths

    def export_rows(self, rows: Sequence[TableRow], timestamp: str) -> List[Path]:
        json_output = rows_to_json(rows, self.json_indent)
        logger.debug(f"PARSED JSON DATA:\n{json_output}")
        paths = self._save(json_output, f"parsed_data_{timestamp}.json")
        logger.debug(f"Parsed JSON saved to: {[str(p) for p in paths]}")
        return paths

    def export_report(self, report: str, timestamp: str) -> List[Path]:
        paths = self._save(report, f"analysis_report_{timestamp}.txt")
        logger.debug(f"Analysis report saved to: {[str(p) for p in paths]}")
        return paths
