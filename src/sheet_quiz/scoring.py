"""
scoring.py — Correctness Evaluator & Score Aggregator
=====================================================
Decides whether a chosen option is right and tallies the result over the
questions currently on screen.

---------------------------------------------------------------------------
Ground-truth encodings
---------------------------------------------------------------------------
  The "correct answer" cell is free text and comes in two forms:

  Letter mode   correct.strip().upper() is one of A–E.
                The verdict is plain letter equality with the choice.
                Letter mode wins even when the letter also happens to be
                the text of some option.

  Text mode     anything else.  The verdict is CORRECT only if some option
                whose text (trimmed) equals the correct text (trimmed, case
                kept) also has the chosen key.  When no option text matches,
                every choice is INCORRECT.

---------------------------------------------------------------------------
Aggregation
---------------------------------------------------------------------------
  tally() walks ``(sheet_index, question)`` pairs from
  filters.apply_filter_indexed() and looks each answer up by its sheet
  index, so narrowing the filter never relabels a recorded answer.
  Nothing is cached; every call recomputes from the tracker.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sheet_quiz.answers import AnswerTracker
from sheet_quiz.models import LETTERS, Question, Score, Verdict


# ─── Correctness Evaluator ───────────────────────────────────────────────────

def _letter_answer(question: Question) -> Optional[str]:
    """The answer letter when ``correct`` is in letter mode, else None."""
    normalized = question.correct.strip().upper()
    return normalized if normalized in LETTERS else None


def evaluate(question: Question, chosen: Optional[str]) -> Verdict:
    """Judge *chosen* (an option letter, or None) against *question*."""
    if not chosen:
        return Verdict.UNANSWERED

    letter = _letter_answer(question)
    if letter is not None:
        return Verdict.CORRECT if letter == chosen else Verdict.INCORRECT

    target = question.correct.strip()
    hit = any(o.text.strip() == target and o.key == chosen for o in question.options)
    return Verdict.CORRECT if hit else Verdict.INCORRECT


def resolve_correct_key(question: Question) -> Optional[str]:
    """
    The letter of the correct option, for highlighting.

    Returns None in text mode when no option text matches.
    """
    letter = _letter_answer(question)
    if letter is not None:
        return letter
    target = question.correct.strip()
    return next((o.key for o in question.options if o.text.strip() == target), None)


# ─── Score Aggregator ────────────────────────────────────────────────────────

def tally(
    sheet_name: str,
    indexed_questions: Sequence[tuple[int, Question]],
    tracker: AnswerTracker,
) -> Score:
    """Count CORRECT verdicts over *indexed_questions*."""
    correct = sum(
        1 for i, q in indexed_questions
        if evaluate(q, tracker.get(sheet_name, i)) is Verdict.CORRECT
    )
    return Score(correct=correct, total=len(indexed_questions))


def breakdown(
    sheet_name: str,
    indexed_questions: Sequence[tuple[int, Question]],
    tracker: AnswerTracker,
    by: str = "domain",
) -> dict[str, Score]:
    """
    Per-group scores, grouped by the ``domain`` or ``competency`` field.

    Questions with an empty group value are skipped.
    """
    if by not in ("domain", "competency"):
        raise ValueError(f"Cannot group by {by!r}")

    group_correct: dict[str, int] = {}
    group_total:   dict[str, int] = {}

    for i, q in indexed_questions:
        group = getattr(q, by)
        if not group:
            continue
        is_correct = evaluate(q, tracker.get(sheet_name, i)) is Verdict.CORRECT
        group_correct[group] = group_correct.get(group, 0) + int(is_correct)
        group_total[group]   = group_total.get(group, 0) + 1

    return {
        g: Score(correct=group_correct[g], total=group_total[g])
        for g in group_total
    }
