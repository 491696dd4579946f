"""
Tests for line classification module.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from picklist_recon.utils.classify import (
    TokenClass,
    RawLine,
    classify,
    classify_line,
    count_pattern_matches,
    find_header_index,
    is_header_line,
    split_lines,
    tag_lines,
)


class TestSplitLines:
    """Tests for splitting OCR text."""

    def test_indices_and_order(self):
        lines = split_lines("a\nb\nc")
        assert [l.index for l in lines] == [0, 1, 2]
        assert [l.text for l in lines] == ["a", "b", "c"]

    def test_trailing_newline_keeps_empty_line(self):
        lines = split_lines("a\nb\n")
        assert len(lines) == 3
        assert lines[-1].text == ""

    def test_empty_text_is_one_line(self):
        lines = split_lines("")
        assert lines == [RawLine(index=0, text="")]

    def test_text_is_not_trimmed(self):
        lines = split_lines("  0001  ")
        assert lines[0].text == "  0001  "
        assert lines[0].stripped == "0001"


class TestHeaderDetection:
    """Tests for the header anchor."""

    def test_header_line(self):
        assert is_header_line("Res Item Component Description Req Qty")

    def test_header_case_insensitive(self):
        assert is_header_line("RES ITEM  component")

    def test_header_needs_both_terms(self):
        assert not is_header_line("Res Item")
        assert not is_header_line("Component")
        assert not is_header_line("ResItem Component")

    def test_first_header_wins(self):
        lines = split_lines("title\nRes Item Component\nRes Item Component")
        assert find_header_index(lines) == 1

    def test_no_header(self):
        lines = split_lines("no header here\njust text\n")
        assert find_header_index(lines) is None


class TestClassifyLine:
    """Tests for token classification rules."""

    @pytest.mark.parametrize("text", ["0001", "|0001", "| 0001", "0001.", "|0002."])
    def test_item_codes(self, text):
        assert classify_line(text) == TokenClass.ITEM_CODE

    @pytest.mark.parametrize("text", ["4022.678.06504", "|4022.678.06504", "| 4022.678.06504"])
    def test_component_codes(self, text):
        assert classify_line(text) == TokenClass.COMPONENT_CODE

    @pytest.mark.parametrize("text", ["1.000", "12.500", "0.250"])
    def test_quantities(self, text):
        assert classify_line(text) == TokenClass.QUANTITY

    @pytest.mark.parametrize("text", ["S1-S30-B1", "V1-S01-A1", "Bin: S1-S30-B1 (upper)"])
    def test_storage_bins(self, text):
        assert classify_line(text) == TokenClass.STORAGE_BIN

    @pytest.mark.parametrize("text", [
        "", "001", "00001", "1.00", "1.0000", "4022.678.0650", "s1-s30-b1",
        "Description", "PCS", "0001 4022.678.06504",
    ])
    def test_unclassified(self, text):
        assert classify_line(text) == TokenClass.UNCLASSIFIED

    def test_surrounding_whitespace_is_trimmed(self):
        assert classify_line("   0001  ") == TokenClass.ITEM_CODE
        assert classify_line("\t1.000 ") == TokenClass.QUANTITY

    def test_non_ascii_digits_rejected(self):
        # Arabic-Indic digits
        assert classify_line("١٢٣٤") == TokenClass.UNCLASSIFIED

    def test_item_code_normalization(self):
        result = classify(RawLine(3, "| 0007 "))
        assert result.token_class == TokenClass.ITEM_CODE
        assert result.value == "0007"
        assert result.line.index == 3

    def test_item_code_keeps_trailing_dot(self):
        assert classify(RawLine(0, "|0001.")).value == "0001."

    def test_component_normalization(self):
        assert classify(RawLine(0, "| 4022.678.06504")).value == "4022.678.06504"

    def test_storage_bin_keeps_full_line(self):
        assert classify(RawLine(0, " Bin S1-S30-B1 ")).value == "Bin S1-S30-B1"

    def test_priority_item_before_quantity(self):
        # "1234." is an item code, never a quantity
        assert classify_line("1234.") == TokenClass.ITEM_CODE


class TestTagLines:
    """Tests for tagging lines relative to the header."""

    def test_lines_before_header_skipped(self):
        lines = split_lines("0001\nRes Item Component\n0002")
        tagged = tag_lines(lines, 1)
        assert [t.token_class for t in tagged] == [TokenClass.HEADER_MARKER, TokenClass.ITEM_CODE]
        assert tagged[1].value == "0002"

    def test_header_is_not_a_token(self):
        lines = split_lines("Res Item Component")
        tagged = tag_lines(lines, 0)
        assert not tagged[0].is_token


class TestPatternCounts:
    """Tests for whole-text counts used by diagnostics."""

    def test_counts_whole_text(self):
        text = "0001\nRes Item Component\n0002\n4022.678.06504\n1.000\nS1-S30-B1\n"
        counts = count_pattern_matches(split_lines(text))
        assert counts[TokenClass.ITEM_CODE] == 2
        assert counts[TokenClass.COMPONENT_CODE] == 1
        assert counts[TokenClass.QUANTITY] == 1
        assert counts[TokenClass.STORAGE_BIN] == 1

    def test_counts_are_strict(self):
        # Pipe prefixes and padding do not count
        counts = count_pattern_matches(split_lines("|0001\n 0002\n|4022.678.06504"))
        assert counts[TokenClass.ITEM_CODE] == 0
        assert counts[TokenClass.COMPONENT_CODE] == 0

    def test_empty_text_counts_zero(self):
        counts = count_pattern_matches(split_lines(""))
        assert all(v == 0 for v in counts.values())
