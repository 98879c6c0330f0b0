"""
normalizer.py — Row Normalizer & Question Set Builder
=====================================================
Turns raw spreadsheet rows into canonical ``Question`` records.

Spreadsheets exported from different sources name their columns
differently ("Option A" vs "OptionA" vs "A", "Correct Answer" vs "Answer").
Each canonical field has an ordered alias list; the first alias holding a
non-empty cell wins.

Public API
----------
  normalize_row(row)          RawRow → Question (may be invalid)
  build_question_set(sheets)  [(sheet_name, rows)] → QuestionSet

Rows without question text or without any option are dropped by the
builder.  This is a tolerance policy: dropped rows are counted in a debug
log line, never reported per row.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Optional, Sequence

from sheet_quiz.models import LETTERS, Option, Question, QuestionSet

logger = logging.getLogger(__name__)

RawRow = Mapping[str, Any]


# ─── Column aliases ──────────────────────────────────────────────────────────

QUESTION_KEYS:    tuple[str, ...] = ("Question", "question", "Questions")
CORRECT_KEYS:     tuple[str, ...] = ("Correct Answer", "Correct", "Answer")
EXPLANATION_KEYS: tuple[str, ...] = ("Explanation", "Notes")
DOMAIN_KEYS:      tuple[str, ...] = ("Domain",)
COMPETENCY_KEYS:  tuple[str, ...] = ("Competency",)


def option_keys(letter: str) -> tuple[str, ...]:
    """Column names that may hold the text of option *letter*."""
    return (f"Option {letter}", f"Option{letter}", letter)


# ─── Cell helpers ────────────────────────────────────────────────────────────

def cell_text(value: Any) -> str:
    """
    Render a cell value as text.

    Missing cells (None / NaN) become "".  Integral floats drop the
    trailing ".0" so a numeric answer code 2 read back as 2.0 still
    displays and compares as "2".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


def _first_present(row: RawRow, keys: Sequence[str]) -> Optional[str]:
    """Return the text of the first non-empty cell among *keys*."""
    for key in keys:
        text = cell_text(row.get(key))
        if text != "":
            return text
    return None


# ─── Row Normalizer ──────────────────────────────────────────────────────────

def normalize_row(row: RawRow) -> Question:
    """Map one raw row onto the canonical schema."""
    options = []
    for letter in LETTERS:
        text = _first_present(row, option_keys(letter))
        if text is not None:
            options.append(Option(key=letter, text=text))

    return Question(
        question    = _first_present(row, QUESTION_KEYS) or "",
        options     = options,
        correct     = (_first_present(row, CORRECT_KEYS) or "").strip(),
        explanation = _first_present(row, EXPLANATION_KEYS) or "",
        domain      = _first_present(row, DOMAIN_KEYS) or "",
        competency  = _first_present(row, COMPETENCY_KEYS) or "",
    )


# ─── Question Set Builder ────────────────────────────────────────────────────

def build_sheet(rows: Iterable[RawRow]) -> list[Question]:
    """Normalize *rows* and keep only complete questions, in row order."""
    return [q for q in map(normalize_row, rows) if q.is_valid]


def build_question_set(
    sheets: Iterable[tuple[str, Sequence[RawRow]]],
) -> QuestionSet:
    """
    Build the per-sheet question mapping.

    Every sheet gets an entry, even when none of its rows survive.
    """
    question_set: QuestionSet = {}
    for name, rows in sheets:
        questions = build_sheet(rows)
        dropped = len(rows) - len(questions)
        if dropped:
            logger.debug("Sheet %r: dropped %d incomplete row(s)", name, dropped)
        question_set[name] = questions
    return question_set
