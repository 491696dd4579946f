"""
Tests for export and I/O helpers.
"""

import json
import pytest
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from picklist_recon.utils.tables import TableRow
from picklist_recon.utils.export import (
    NO_TABLE_MARKER,
    ResultExporter,
    render_display_text,
    rows_to_json,
)
from picklist_recon.utils.io import (
    get_file_size,
    get_timestamp,
    load_text,
    save_log_to_file,
)


@pytest.fixture
def sample_row():
    return TableRow(
        item_code="0001",
        component_code="4022.678.06504",
        req_qty="1.000",
        comm_qty="1.000",
        storage_bin="S1-S30-B1",
    )


class TestRowsToJson:
    """Tests for JSON serialization."""

    def test_two_space_indent(self, sample_row):
        expected = (
            '[\n'
            '  {\n'
            '    "Res Item": "0001",\n'
            '    "Component": "4022.678.06504",\n'
            '    "Req Qty": "1.000",\n'
            '    "Comm Qty": "1.000",\n'
            '    "Storage Bin": "S1-S30-B1"\n'
            '  }\n'
            ']'
        )
        assert rows_to_json([sample_row]) == expected

    def test_empty(self):
        assert rows_to_json([]) == "[]"

    def test_parses_back(self, sample_row):
        data = json.loads(rows_to_json([sample_row, sample_row]))
        assert len(data) == 2
        assert list(data[0].keys()) == ["Res Item", "Component", "Req Qty", "Comm Qty", "Storage Bin"]


class TestDisplayText:
    """Tests for operator display text."""

    def test_success(self, sample_row):
        text = render_display_text("raw", [sample_row])
        assert text.startswith("RAW OCR OUTPUT:\n\nraw\n\nPARSED JSON:\n\n[")
        assert NO_TABLE_MARKER not in text

    def test_failure(self):
        text = render_display_text("raw", [], report="REPORT")
        assert text == f"RAW OCR OUTPUT:\n\nraw\n\n{NO_TABLE_MARKER}\n\nANALYSIS REPORT:\n\nREPORT"


class TestIO:
    """Tests for I/O helpers."""

    def test_timestamp_format(self):
        ts = get_timestamp(datetime(2024, 1, 31, 14, 25, 1, 123456))
        assert ts == "20240131_142501123"

    def test_save_log_to_multiple_dirs(self, tmp_path):
        paths = save_log_to_file("hello", "a.txt", [tmp_path / "app", tmp_path / "public"], "Logs")
        assert paths == [tmp_path / "app" / "Logs" / "a.txt", tmp_path / "public" / "Logs" / "a.txt"]
        assert all(p.read_text(encoding="utf-8") == "hello" for p in paths)

    def test_save_log_failure_is_logged_not_raised(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        paths = save_log_to_file("x", "a.txt", [tmp_path / "ok", blocker])
        assert paths == [tmp_path / "ok" / "PicklistLogs" / "a.txt"]

    def test_load_text(self, tmp_path):
        path = tmp_path / "ocr.txt"
        path.write_text("Res Item Component\n0001\n", encoding="utf-8")
        assert load_text(path) == "Res Item Component\n0001\n"

    def test_load_text_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_text(tmp_path / "missing.txt")

    def test_file_size(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"0" * 4096)
        assert get_file_size(path) == "4 KB"
        assert get_file_size(tmp_path / "missing") == "Unknown size"


class TestResultExporter:
    """Tests for timestamped log output."""

    def test_filenames(self, tmp_path, sample_row):
        exporter = ResultExporter([tmp_path], log_dir_name="Logs")
        raw = exporter.export_raw_text("raw", "TS")
        rows = exporter.export_rows([sample_row], "TS")
        report = exporter.export_report("report", "TS")

        assert raw == [tmp_path / "Logs" / "ocr_raw_TS.txt"]
        assert rows == [tmp_path / "Logs" / "parsed_data_TS.json"]
        assert report == [tmp_path / "Logs" / "analysis_report_TS.txt"]
        assert json.loads(rows[0].read_text(encoding="utf-8"))[0]["Res Item"] == "0001"

    def test_no_directories(self, sample_row):
        assert ResultExporter([]).export_rows([sample_row], "TS") == []
