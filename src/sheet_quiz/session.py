"""
session.py — Explicit quiz session state
========================================
``QuizSession`` holds everything a single user's dashboard needs: the
loaded question set, the selected sheet, the filter selection and the
answers.  Rendering layers (streamlit_app.py, cli.py) issue intents on it
and read back derived views; nothing here touches UI or globals.

Intents                         Derived views
-------                         -------------
  load_bytes(data)                questions         full sheet sequence
  load_url(url, timeout)          visible()         filtered (index, question)
  select_sheet(name)              domains()/competencies()
  set_domain(value)               verdict(index)
  set_competency(value)           score()
  answer(index, letter)           breakdown(by)
                                  report_lines() / export_pdf()

Loading
-------
  A load fully replaces the question set, selects the first sheet, resets
  the filters and starts a fresh AnswerTracker: indices from the previous
  workbook would point at unrelated questions.  If parsing fails the
  session is left exactly as it was.  Only one load may run at a time;
  a concurrent request raises LoadInProgress.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sheet_quiz import filters, scoring
from sheet_quiz.answers import AnswerTracker
from sheet_quiz.ingestion import LoadInProgress, fetch_workbook, read_workbook
from sheet_quiz.models import ALL, FilterSelection, Question, QuestionSet, Score, Verdict
from sheet_quiz.normalizer import build_question_set
from sheet_quiz.report import DEFAULT_LAYOUT, ReportLayout, ReportLine, layout_report, render_pdf

logger = logging.getLogger(__name__)


class QuizSession:
    """Mutable state for one user's quiz, plus the views derived from it."""

    def __init__(self, layout: ReportLayout = DEFAULT_LAYOUT) -> None:
        self.question_set:   QuestionSet = {}
        self.selected_sheet: str = ""
        self.selection:      FilterSelection = FilterSelection()
        self.answers:        AnswerTracker = AnswerTracker()
        self.layout = layout
        self._load_lock = threading.Lock()

    # ── Loading ──────────────────────────────────────────────────────────────

    def load_bytes(self, data: bytes) -> QuestionSet:
        """Parse *data* as a workbook and replace the session contents."""
        return self._guarded_load(lambda: data)

    def load_url(self, url: str, timeout: float = 30.0) -> QuestionSet:
        """Download a workbook export and load it."""
        return self._guarded_load(lambda: fetch_workbook(url, timeout))

    def _guarded_load(self, acquire: Callable[[], bytes]) -> QuestionSet:
        """Run *acquire* and the parse under the load lock, then replace."""
        if not self._load_lock.acquire(blocking=False):
            logger.warning("Rejected workbook load: another load is in progress")
            raise LoadInProgress("A workbook is already being loaded.")
        try:
            question_set = build_question_set(read_workbook(acquire()))
            self._replace(question_set)
            return question_set
        finally:
            self._load_lock.release()

    @property
    def is_loading(self) -> bool:
        return self._load_lock.locked()

    def _replace(self, question_set: QuestionSet) -> None:
        self.question_set = question_set
        self.selected_sheet = next(iter(question_set), "")
        self.selection = FilterSelection()
        self.answers = AnswerTracker()
        logger.info(
            "Loaded %d sheet(s), %d question(s)",
            len(question_set), sum(len(qs) for qs in question_set.values()),
        )

    # ── Intents ──────────────────────────────────────────────────────────────

    @property
    def sheet_names(self) -> list[str]:
        return list(self.question_set)

    def select_sheet(self, name: str) -> None:
        if name not in self.question_set:
            raise KeyError(f"Unknown sheet: {name!r}")
        self.selected_sheet = name

    def set_domain(self, value: str = ALL) -> None:
        self.selection = FilterSelection(value, self.selection.competency)

    def set_competency(self, value: str = ALL) -> None:
        self.selection = FilterSelection(self.selection.domain, value)

    def answer(self, index: int, letter: str) -> None:
        """Record *letter* for the question at *index* in the selected sheet."""
        self.answers.record(self.selected_sheet, index, letter)

    # ── Derived views ────────────────────────────────────────────────────────

    @property
    def questions(self) -> list[Question]:
        return self.question_set.get(self.selected_sheet, [])

    def visible(self) -> list[tuple[int, Question]]:
        """Filtered ``(sheet_index, question)`` pairs for the selected sheet."""
        return filters.apply_filter_indexed(self.questions, self.selection)

    def domains(self) -> list[str]:
        return filters.distinct_domains(self.questions)

    def competencies(self) -> list[str]:
        return filters.distinct_competencies(self.questions)

    def chosen(self, index: int) -> Optional[str]:
        return self.answers.get(self.selected_sheet, index)

    def verdict(self, index: int) -> Verdict:
        return scoring.evaluate(self.questions[index], self.chosen(index))

    def score(self) -> Score:
        return scoring.tally(self.selected_sheet, self.visible(), self.answers)

    def breakdown(self, by: str = "domain") -> dict[str, Score]:
        return scoring.breakdown(self.selected_sheet, self.visible(), self.answers, by=by)

    def report_lines(self, title: str = "Quiz Results") -> list[ReportLine]:
        return layout_report(
            self.visible(), self.selected_sheet, self.answers, self.layout, title=title,
        )

    def export_pdf(self, title: str = "Quiz Results") -> bytes:
        return render_pdf(self.report_lines(title), title=title)
