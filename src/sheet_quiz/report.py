"""
report.py — Paginated results report
====================================
Lays out the filtered questions, the learner's answers and their verdicts
as a stream of positioned text lines, then draws that stream into a PDF.

  layout_report(entries, sheet_name, tracker, layout) → list[ReportLine]
  render_pdf(lines, title)                             → bytes (PDF)

---------------------------------------------------------------------------
Layout rule
---------------------------------------------------------------------------
  Coordinates are millimetres from the top-left of an A4 page.
  The report title sits at ``title_y``; the cursor then starts at
  ``start_y``.  Each question block writes:

      "N. <question>"                     advance question_step
      "Your Answer: <letter> (<verdict>)" advance answer_step
      "Correct Answer: <correct>"         advance correct_step
      "Explanation: <text>"  (optional)   advance explanation_step

  After a block, if the cursor is past ``max_y`` the page index increments
  and the cursor returns to ``top_margin``.  A block is never split; it may
  run past ``max_y`` on the page where it started.

The line stream depends only on its inputs, so pagination is identical
whatever backend draws it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from sheet_quiz.answers import AnswerTracker
from sheet_quiz.models import Question, Verdict
from sheet_quiz.scoring import evaluate

logger = logging.getLogger(__name__)

NO_ANSWER = "—"


class LineKind(str, Enum):
    TITLE          = "title"
    QUESTION       = "question"
    YOUR_ANSWER    = "your_answer"
    CORRECT_ANSWER = "correct_answer"
    EXPLANATION    = "explanation"


@dataclass(frozen=True)
class ReportLayout:
    """Page geometry in millimetres and font sizes in points."""
    title_y:          float = 20.0
    start_y:          float = 30.0
    top_margin:       float = 20.0
    max_y:            float = 270.0
    left_margin:      float = 14.0
    question_step:    float = 6.0
    answer_step:      float = 5.0
    correct_step:     float = 7.0
    explanation_step: float = 7.0
    title_size:       float = 16.0
    question_size:    float = 12.0
    body_size:        float = 10.0


DEFAULT_LAYOUT = ReportLayout()


@dataclass(frozen=True)
class ReportLine:
    """One line of text placed on a page."""
    page:      int      # 0-based
    y:         float    # mm from the top edge
    x:         float    # mm from the left edge
    text:      str
    kind:      LineKind
    font_size: float


# ─── Layout ──────────────────────────────────────────────────────────────────

def _answer_text(chosen: Optional[str], verdict: Verdict) -> str:
    if verdict is Verdict.UNANSWERED:
        return f"Your Answer: {NO_ANSWER}"
    label = "Correct" if verdict is Verdict.CORRECT else "Incorrect"
    return f"Your Answer: {chosen} ({label})"


def layout_report(
    entries: Sequence[tuple[int, Question]],
    sheet_name: str,
    tracker: AnswerTracker,
    layout: ReportLayout = DEFAULT_LAYOUT,
    title: str = "Quiz Results",
) -> list[ReportLine]:
    """
    Build the positioned line stream for *entries*.

    *entries* are ``(sheet_index, question)`` pairs as returned by
    filters.apply_filter_indexed(); answers are looked up by sheet index,
    while the printed numbering follows the filtered order.
    """
    lines = [ReportLine(0, layout.title_y, layout.left_margin, title,
                        LineKind.TITLE, layout.title_size)]
    page = 0
    y = layout.start_y

    def emit(text: str, kind: LineKind, size: float, step: float) -> None:
        nonlocal y
        lines.append(ReportLine(page, y, layout.left_margin, text, kind, size))
        y += step

    for number, (index, q) in enumerate(entries, start=1):
        chosen = tracker.get(sheet_name, index)
        verdict = evaluate(q, chosen)

        emit(f"{number}. {q.question}", LineKind.QUESTION,
             layout.question_size, layout.question_step)
        emit(_answer_text(chosen, verdict), LineKind.YOUR_ANSWER,
             layout.body_size, layout.answer_step)
        emit(f"Correct Answer: {q.correct}", LineKind.CORRECT_ANSWER,
             layout.body_size, layout.correct_step)
        if q.explanation:
            emit(f"Explanation: {q.explanation}", LineKind.EXPLANATION,
                 layout.body_size, layout.explanation_step)

        if y > layout.max_y:
            page += 1
            y = layout.top_margin

    logger.debug("Report laid out: %d question(s), %d page(s)",
                 len(entries), page_count(lines))
    return lines


def page_count(lines: Sequence[ReportLine]) -> int:
    return max((ln.page for ln in lines), default=0) + 1


# ─── PDF sink ────────────────────────────────────────────────────────────────

def render_pdf(
    lines: Sequence[ReportLine],
    title: str = "Quiz Results",
) -> bytes:
    """
    Draw a laid-out line stream onto A4 pages.
    Returns raw PDF bytes.
    """
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.units import mm
    from reportlab.pdfgen import canvas

    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    pdf.setTitle(title)
    _, page_h = A4

    current = 0
    for ln in lines:
        while ln.page > current:
            pdf.showPage()
            current += 1
        font = "Helvetica-Bold" if ln.kind in (LineKind.TITLE, LineKind.QUESTION) else "Helvetica"
        pdf.setFont(font, ln.font_size)
        pdf.drawString(ln.x * mm, page_h - ln.y * mm, ln.text)

    pdf.showPage()
    pdf.save()
    return buf.getvalue()
