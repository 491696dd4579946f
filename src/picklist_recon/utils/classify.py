"""
Line classification for pick-list OCR text.

Provides:
- Splitting raw OCR text into indexed lines
- Header anchor detection ("Res Item" + "Component")
- Pattern classification of table tokens (item code, component code,
  quantity, storage bin)
- Whole-text pattern counts used by the diagnostics report
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


# ============================================================================
# Patterns
# ============================================================================

HEADER_TERMS = ("res item", "component")

# Table tokens, applied with fullmatch() to the trimmed line
ITEM_CODE_PATTERN = re.compile(r"\d{4}|\|?\s*\d{4}\.?", re.ASCII)
COMPONENT_CODE_PATTERN = re.compile(r"\d{4}\.\d{3}\.\d{5}|\|?\s*\d{4}\.\d{3}\.\d{5}", re.ASCII)
QUANTITY_PATTERN = re.compile(r"\d+\.\d{3}", re.ASCII)
# Searched anywhere in the line
STORAGE_BIN_PATTERN = re.compile(r"[A-Z]\d+-[A-Z]\d+-[A-Z]\d+", re.ASCII)

# Strict forms counted by the diagnostics report (no pipe prefix allowed)
STRICT_ITEM_CODE_PATTERN = re.compile(r"\d{4}", re.ASCII)
STRICT_COMPONENT_CODE_PATTERN = re.compile(r"\d{4}\.\d{3}\.\d{5}", re.ASCII)


# ============================================================================
# Data Classes and Enums
# ============================================================================

class TokenClass(Enum):
    """Semantic type of a single OCR line."""
    ITEM_CODE = "item_code"
    COMPONENT_CODE = "component_code"
    QUANTITY = "quantity"
    STORAGE_BIN = "storage_bin"
    HEADER_MARKER = "header_marker"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class RawLine:
    """One line of OCR output with its 0-based position in the text."""
    index: int
    text: str

    @property
    def stripped(self) -> str:
        return self.text.strip()


@dataclass(frozen=True)
class ClassifiedLine:
    """A line tagged with its token class and normalized value."""
    line: RawLine
    token_class: TokenClass
    value: str = ""

    @property
    def is_token(self) -> bool:
        return self.token_class not in (TokenClass.UNCLASSIFIED, TokenClass.HEADER_MARKER)


# ============================================================================
# Line Handling
# ============================================================================

def split_lines(text: str) -> List[RawLine]:
    """
    Split OCR text into indexed lines.

    Only "\\n" separates lines. A trailing newline produces a final empty
    line, and empty text produces a single empty line.
    """
    return [RawLine(index=i, text=line) for i, line in enumerate(text.split("\n"))]


def _strip_pipe(text: str) -> str:
    if text.startswith("|"):
        text = text[1:]
    return text.strip()


def is_header_line(text: str) -> bool:
    """Check whether a line names both the "Res Item" and "Component" columns."""
    lowered = text.lower()
    return all(term in lowered for term in HEADER_TERMS)


def find_header_index(lines: Sequence[RawLine]) -> Optional[int]:
    """Return the index of the first header line, or None."""
    for line in lines:
        if is_header_line(line.text):
            return line.index
    return None


def classify_line(text: str) -> TokenClass:
    """Classify a line into a table token class (header excluded)."""
    return classify(RawLine(index=-1, text=text)).token_class


def classify(line: RawLine) -> ClassifiedLine:
    """
    Classify a line and normalize its value.

    Rules are tried in priority order and the first match wins:
    item code, component code, quantity, storage bin.
    """
    text = line.stripped

    if ITEM_CODE_PATTERN.fullmatch(text):
        return ClassifiedLine(line, TokenClass.ITEM_CODE, _strip_pipe(text))
    if COMPONENT_CODE_PATTERN.fullmatch(text):
        return ClassifiedLine(line, TokenClass.COMPONENT_CODE, _strip_pipe(text))
    if QUANTITY_PATTERN.fullmatch(text):
        return ClassifiedLine(line, TokenClass.QUANTITY, text)
    if STORAGE_BIN_PATTERN.search(text):
        return ClassifiedLine(line, TokenClass.STORAGE_BIN, text)

    return ClassifiedLine(line, TokenClass.UNCLASSIFIED, text)


def tag_lines(lines: Sequence[RawLine], header_index: int) -> List[ClassifiedLine]:
    """Tag the header line and classify every line after it."""
    tagged = []
    for line in lines:
        if line.index < header_index:
            continue
        if line.index == header_index:
            tagged.append(ClassifiedLine(line, TokenClass.HEADER_MARKER, line.stripped))
        else:
            tagged.append(classify(line))
    return tagged


def is_valid_item_code(value: str) -> bool:
    return STRICT_ITEM_CODE_PATTERN.fullmatch(value) is not None


def is_valid_component_code(value: str) -> bool:
    return STRICT_COMPONENT_CODE_PATTERN.fullmatch(value) is not None


# ============================================================================
# Whole-text Counts
# ============================================================================

def count_pattern_matches(lines: Sequence[RawLine]) -> Dict[TokenClass, int]:
    """
    Count lines matching each token pattern in isolation.

    Runs over every line (not only those after the header) on the
    untrimmed text, so counts can differ from the reconstruction buckets.
    """
    counts = {
        TokenClass.ITEM_CODE: 0,
        TokenClass.COMPONENT_CODE: 0,
        TokenClass.QUANTITY: 0,
        TokenClass.STORAGE_BIN: 0,
    }

    for line in lines:
        if STRICT_ITEM_CODE_PATTERN.fullmatch(line.text):
            counts[TokenClass.ITEM_CODE] += 1
        if STRICT_COMPONENT_CODE_PATTERN.fullmatch(line.text):
            counts[TokenClass.COMPONENT_CODE] += 1
        if QUANTITY_PATTERN.fullmatch(line.text):
            counts[TokenClass.QUANTITY] += 1
        if STORAGE_BIN_PATTERN.search(line.text):
            counts[TokenClass.STORAGE_BIN] += 1

    return counts
