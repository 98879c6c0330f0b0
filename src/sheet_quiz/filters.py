"""
filters.py — domain / competency filtering over one sheet's questions.

Filtering is exact string equality on each axis; ``ALL`` disables an axis.
The indexed variant keeps each question's position in the unfiltered
sheet so answers recorded against that position survive filter changes.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from sheet_quiz.models import ALL, FilterSelection, Question


def _distinct(values: Iterable[str]) -> list[str]:
    """Distinct non-empty values in first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def distinct_domains(questions: Sequence[Question]) -> list[str]:
    return _distinct(q.domain for q in questions)


def distinct_competencies(questions: Sequence[Question]) -> list[str]:
    return _distinct(q.competency for q in questions)


def matches(question: Question, selection: FilterSelection) -> bool:
    if selection.domain != ALL and question.domain != selection.domain:
        return False
    if selection.competency != ALL and question.competency != selection.competency:
        return False
    return True


def apply_filter(
    questions: Sequence[Question],
    selection: FilterSelection,
) -> list[Question]:
    """Questions passing *selection*, in sheet order."""
    return [q for q in questions if matches(q, selection)]


def apply_filter_indexed(
    questions: Sequence[Question],
    selection: FilterSelection,
) -> list[tuple[int, Question]]:
    """Like apply_filter() but yields ``(sheet_index, question)`` pairs."""
    return [(i, q) for i, q in enumerate(questions) if matches(q, selection)]
