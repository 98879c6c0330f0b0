"""
ui.py — HTML fragments and upload bookkeeping for the Streamlit dashboard.

Spreadsheet text is arbitrary user content, so every value interpolated
into markup goes through html.escape() before it reaches
``st.markdown(..., unsafe_allow_html=True)``.
"""

from __future__ import annotations

import html
from typing import Any, Optional

from sheet_quiz.models import Question, Verdict

GREEN = "#107C41"
RED   = "#D13438"


def question_card_html(number: int, question: Question) -> str:
    return (
        f'<div class="card"><div class="q-head">'
        f'{number}. {html.escape(question.question)}</div></div>'
    )


def meta_html(question: Question, chosen: Optional[str], verdict: Verdict) -> str:
    """Domain / competency line, plus the verdict once the question is answered."""
    status = ""
    if verdict is not Verdict.UNANSWERED:
        colour = GREEN if verdict is Verdict.CORRECT else RED
        label = "Correct" if verdict is Verdict.CORRECT else "Incorrect"
        status = (f'<span style="color:{colour};font-weight:700;">'
                  f'{html.escape(chosen or "")} — {label}</span>')
    return (
        f'<div class="meta"><span>{html.escape(question.domain)} — '
        f'{html.escape(question.competency)}</span>{status}</div>'
    )


def upload_token(uploaded: Any) -> str:
    """
    Identity of one upload event.

    Streamlit issues a fresh ``file_id`` for every upload, so re-uploading
    the same file, or a different file with the same name and size, still
    counts as a new load.
    """
    return uploaded.file_id
