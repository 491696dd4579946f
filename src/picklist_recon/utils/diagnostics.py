"""
Diagnostics report for failed table reconstruction.

When no rows can be rebuilt, the operator gets a plain-text report with
the header search result, the lines around the header and per-pattern
match counts over the whole text.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .classify import (
    TokenClass,
    count_pattern_matches,
    find_header_index,
    is_header_line,
    split_lines,
)

logger = logging.getLogger(__name__)


REPORT_TITLE = "=== OCR ANALYSIS REPORT ==="
CONTEXT_TITLE = "=== CONTEXT AROUND HEADER ==="
COUNTS_TITLE = "=== PATTERN COUNTS ==="

PATTERN_LABELS = (
    (TokenClass.ITEM_CODE, "Res Items"),
    (TokenClass.COMPONENT_CODE, "Components"),
    (TokenClass.QUANTITY, "Quantities"),
    (TokenClass.STORAGE_BIN, "Storage Bins"),
)


@dataclass(frozen=True)
class ContextLine:
    """A line shown in the header context window."""
    index: int
    text: str
    is_header: bool = False

    def render(self) -> str:
        marker = "-> " if self.is_header else "   "
        return f"{marker}{self.index}: {self.text}"


@dataclass(frozen=True)
class DiagnosticsReport:
    """Summary of a text that produced no table rows."""
    total_lines: int
    header_found: bool
    header_index: Optional[int]
    context: Tuple[ContextLine, ...] = ()
    pattern_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def header_location(self) -> str:
        if self.header_index is None:
            return "Not found"
        return f"Line {self.header_index}"

    def render(self) -> str:
        """Render the report as operator-facing text."""
        parts = [f"{REPORT_TITLE}\n\n"]

        parts.append(f"Total lines: {self.total_lines}\n")
        parts.append(f"Header found: {str(self.header_found).lower()}\n")
        parts.append(f"Header location: {self.header_location}\n\n")

        if self.header_index is not None:
            parts.append(f"{CONTEXT_TITLE}\n")
            for line in self.context:
                parts.append(f"{line.render()}\n")

        parts.append(f"\n{COUNTS_TITLE}\n")
        for label, count in self.pattern_counts.items():
            parts.append(f"{label} found: {count}\n")

        return "".join(parts)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_lines": self.total_lines,
            "header_found": self.header_found,
            "header_location": self.header_location,
            "context": [
                {"index": c.index, "text": c.text, "is_header": c.is_header}
                for c in self.context
            ],
            "pattern_counts": dict(self.pattern_counts),
        }


def analyze_failure(
    text: str,
    context_before: int = 3,
    context_after: int = 5
) -> DiagnosticsReport:
    """
    Build a diagnostics report for OCR text.

    The "header found" flag and the header location are computed
    separately, so a text with several header-like lines still reports
    the first one as the location.

    Args:
        text: Full OCR text
        context_before: Lines shown before the header
        context_after: Lines shown after the header

    Returns:
        DiagnosticsReport (never fails, including for empty text)
    """
    lines = split_lines(text)

    header_found = any(is_header_line(line.text) for line in lines)
    header_index = find_header_index(lines)

    context: Tuple[ContextLine, ...] = ()
    if header_index is not None:
        start = max(0, header_index - context_before)
        end = min(header_index + context_after, len(lines) - 1)
        context = tuple(
            ContextLine(index=i, text=lines[i].text, is_header=(i == header_index))
            for i in range(start, end + 1)
        )

    matches = count_pattern_matches(lines)
    pattern_counts = {label: matches[token] for token, label in PATTERN_LABELS}

    logger.debug(
        f"Diagnostics: {len(lines)} lines, header at {header_index}, counts {pattern_counts}"
    )

    return DiagnosticsReport(
        total_lines=len(lines),
        header_found=header_found,
        header_index=header_index,
        context=context,
        pattern_counts=pattern_counts,
    )


def build_report(text: str, context_before: int = 3, context_after: int = 5) -> str:
    """Analyze text and return the rendered report."""
    return analyze_failure(text, context_before, context_after).render()
