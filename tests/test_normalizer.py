"""
Tests for the Row Normalizer and Question Set Builder (normalizer.py).
Column alias resolution, option gaps, text coercion, invalid-row dropping.
"""
import math

import pytest
from factories import make_row

from sheet_quiz.models import Question
from sheet_quiz.normalizer import (
    build_question_set,
    build_sheet,
    cell_text,
    normalize_row,
)


# ─── cell_text ────────────────────────────────────────────────────────────────

class TestCellText:
    @pytest.mark.parametrize("value,expected", [
        (None,        ""),
        (math.nan,    ""),
        ("",          ""),
        ("Paris",     "Paris"),
        (42,          "42"),
        (2.0,         "2"),
        (1.5,         "1.5"),
        (True,        "TRUE"),
        ("  padded ", "  padded "),
    ])
    def test_coercion(self, value, expected):
        assert cell_text(value) == expected


# ─── normalize_row ────────────────────────────────────────────────────────────

class TestNormalizeRow:
    def test_common_spelling(self):
        q = normalize_row(make_row())
        assert q.question == "What is the capital of France?"
        assert [o.key for o in q.options] == ["A", "B", "C"]
        assert [o.text for o in q.options] == ["London", "Paris", "Rome"]
        assert q.correct == "B"
        assert q.explanation.startswith("Paris")
        assert q.domain == "Geography"
        assert q.competency == "Capitals"

    @pytest.mark.parametrize("key", ["Question", "question", "Questions"])
    def test_question_aliases(self, key):
        q = normalize_row({key: "Q?", "A": "x"})
        assert q.question == "Q?"

    def test_question_alias_precedence(self):
        q = normalize_row({"Question": "first", "question": "second"})
        assert q.question == "first"

    def test_empty_alias_falls_through(self):
        q = normalize_row({"Question": "", "Questions": "fallback"})
        assert q.question == "fallback"

    @pytest.mark.parametrize("template", ["Option {}", "Option{}", "{}"])
    def test_option_aliases(self, template):
        row = {"Question": "Q", template.format("A"): "alpha", template.format("E"): "echo"}
        q = normalize_row(row)
        assert [(o.key, o.text) for o in q.options] == [("A", "alpha"), ("E", "echo")]

    def test_option_alias_falls_through_empty_value(self):
        q = normalize_row({"Question": "Q", "Option A": "", "OptionA": "", "A": "bare"})
        assert q.options[0].text == "bare"

    def test_option_gaps_preserved(self):
        q = normalize_row({"Question": "Q", "Option A": "a", "Option C": "c", "Option D": "d"})
        assert q.option_keys() == ["A", "C", "D"]

    def test_options_in_letter_order_regardless_of_columns(self):
        row = {"Option C": "c", "Question": "Q", "Option A": "a"}
        assert normalize_row(row).option_keys() == ["A", "C"]

    def test_no_sixth_option(self):
        q = normalize_row({"Question": "Q", "Option A": "a", "Option F": "f"})
        assert q.option_keys() == ["A"]

    def test_numeric_option_text(self):
        q = normalize_row({"Question": "Year?", "Option A": 1815, "Option B": 1066.0})
        assert [o.text for o in q.options] == ["1815", "1066"]

    @pytest.mark.parametrize("key", ["Correct Answer", "Correct", "Answer"])
    def test_correct_aliases(self, key):
        assert normalize_row({key: "C"}).correct == "C"

    def test_correct_is_trimmed(self):
        assert normalize_row({"Correct": "  Paris \n"}).correct == "Paris"

    def test_numeric_correct_code(self):
        assert normalize_row({"Answer": 2.0}).correct == "2"

    @pytest.mark.parametrize("key", ["Explanation", "Notes"])
    def test_explanation_aliases(self, key):
        assert normalize_row({key: "because"}).explanation == "because"

    def test_missing_fields_default_empty(self):
        q = normalize_row({})
        assert q.question == ""
        assert q.options == []
        assert q.correct == ""
        assert q.explanation == ""
        assert q.domain == ""
        assert q.competency == ""
        assert not q.is_valid

    def test_unknown_columns_ignored(self):
        q = normalize_row({**make_row(), "Difficulty": "hard", "Unnamed: 9": ""})
        assert q == normalize_row(make_row())

    def test_idempotent(self):
        row = make_row(options={"A": "1", "C": 3.0}, correct=" c ")
        assert normalize_row(row) == normalize_row(row)

    def test_returns_question_type(self):
        assert isinstance(normalize_row(make_row()), Question)


# ─── build_sheet / build_question_set ─────────────────────────────────────────

class TestBuildQuestionSet:
    def test_drops_rows_without_question(self):
        rows = [make_row(), make_row(question="")]
        assert len(build_sheet(rows)) == 1

    def test_drops_rows_without_options(self):
        rows = [make_row(), make_row(options={})]
        assert len(build_sheet(rows)) == 1

    def test_keeps_row_order(self):
        rows = [make_row(question=f"Q{i}") for i in range(5)]
        assert [q.question for q in build_sheet(rows)] == [f"Q{i}" for i in range(5)]

    def test_output_never_larger_than_input(self):
        rows = [make_row(), make_row(question=""), make_row(options={}), {}]
        assert len(build_sheet(rows)) <= len(rows)

    def test_every_sheet_gets_an_entry(self):
        qs = build_question_set([
            ("One",   [make_row()]),
            ("Blank", [make_row(question="")]),
            ("None",  []),
        ])
        assert list(qs) == ["One", "Blank", "None"]
        assert len(qs["One"]) == 1
        assert qs["Blank"] == []
        assert qs["None"] == []

    def test_sheet_order_preserved(self):
        names = ["Zeta", "Alpha", "Mid"]
        qs = build_question_set([(n, [make_row()]) for n in names])
        assert list(qs) == names

    def test_all_questions_valid(self):
        qs = build_question_set([("S", [make_row(), {}, make_row(options={})])])
        assert all(q.is_valid for q in qs["S"])
