"""
Tests for workbook parsing and download (ingestion.py).
Workbooks are generated in memory; urlopen is monkeypatched.
"""
import io
import urllib.error

import pytest
from factories import make_row, make_workbook_bytes

from sheet_quiz import ingestion
from sheet_quiz.ingestion import IngestionFailure, LoadInProgress, fetch_workbook, read_workbook


class TestReadWorkbook:
    def test_sheet_order_and_names(self, workbook_bytes):
        sheets = read_workbook(workbook_bytes)
        assert [name for name, _ in sheets] == ["Europe", "Empty"]

    def test_row_counts(self, workbook_bytes):
        sheets = dict(read_workbook(workbook_bytes))
        assert len(sheets["Europe"]) == 5
        assert sheets["Empty"] == []

    def test_blank_cells_become_empty_string(self, workbook_bytes):
        rows = dict(read_workbook(workbook_bytes))["Europe"]
        no_options = rows[4]
        assert no_options["Option A"] == ""
        assert rows[3]["Question"] == ""

    def test_numbers_kept_as_numbers(self, workbook_bytes):
        rows = dict(read_workbook(workbook_bytes))["Europe"]
        assert rows[2]["Option A"] == 1815

    def test_column_labels_are_strings(self):
        data = make_workbook_bytes({"S": [{"Question": "Q", 7: "numeric header"}]})
        rows = dict(read_workbook(data))["S"]
        assert all(isinstance(k, str) for k in rows[0])

    def test_alternate_column_spelling(self):
        data = make_workbook_bytes({"S": [{"Questions": "Q", "OptionA": "a", "Answer": "A"}]})
        rows = dict(read_workbook(data))["S"]
        assert rows[0]["OptionA"] == "a"

    @pytest.mark.parametrize("word", ["None", "null", "NA", "N/A", "NaN", "n/a", "nan", "NULL"])
    def test_na_like_text_kept_verbatim(self, word):
        data = make_workbook_bytes({"S": [make_row("Q", options={"A": word, "B": "x"}, correct=word)]})
        row = dict(read_workbook(data))["S"][0]
        assert row["Option A"] == word
        assert row["Correct Answer"] == word

    def test_blank_cells_still_empty_with_na_detection_off(self):
        data = make_workbook_bytes({"S": [make_row("Q", explanation=None)]})
        row = dict(read_workbook(data))["S"][0]
        assert row["Explanation"] == ""

    def test_empty_bytes_raise(self):
        with pytest.raises(IngestionFailure):
            read_workbook(b"")

    def test_garbage_bytes_raise(self):
        with pytest.raises(IngestionFailure) as info:
            read_workbook(b"this is not a spreadsheet")
        assert info.value.__cause__ is not None


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class TestFetchWorkbook:
    def test_returns_body(self, monkeypatch, workbook_bytes):
        seen = {}

        def fake_urlopen(url, timeout):
            seen["url"], seen["timeout"] = url, timeout
            return _FakeResponse(workbook_bytes)

        monkeypatch.setattr(ingestion.urllib.request, "urlopen", fake_urlopen)
        data = fetch_workbook("https://example.com/quiz.xlsx", timeout=5)
        assert data == workbook_bytes
        assert seen == {"url": "https://example.com/quiz.xlsx", "timeout": 5}

    def test_network_error_raises_ingestion_failure(self, monkeypatch):
        def fake_urlopen(url, timeout):
            raise urllib.error.URLError("unreachable")

        monkeypatch.setattr(ingestion.urllib.request, "urlopen", fake_urlopen)
        with pytest.raises(IngestionFailure):
            fetch_workbook("https://example.com/quiz.xlsx")

    def test_timeout_raises_ingestion_failure(self, monkeypatch):
        def fake_urlopen(url, timeout):
            raise TimeoutError("timed out")

        monkeypatch.setattr(ingestion.urllib.request, "urlopen", fake_urlopen)
        with pytest.raises(IngestionFailure):
            fetch_workbook("https://example.com/quiz.xlsx")


class TestErrorHierarchy:
    def test_load_in_progress_is_ingestion_failure(self):
        assert issubclass(LoadInProgress, IngestionFailure)
