"""
Shared pytest fixtures for the Sheet Quiz test suite.
No network access — remote loads are monkeypatched where needed.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import os
import sys

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

os.environ["QUIZ_AUTOLOAD"] = "false"


import pytest

from factories import make_question, make_row, make_workbook_bytes

from sheet_quiz.answers import AnswerTracker
from sheet_quiz.session import QuizSession


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def tracker():
    return AnswerTracker()


@pytest.fixture
def mixed_questions():
    """Four questions across two domains and two competencies."""
    return [
        make_question("Q1", domain="Geography", competency="Capitals"),
        make_question("Q2", domain="History",   competency="Dates"),
        make_question("Q3", domain="Geography", competency="Rivers"),
        make_question("Q4", domain="",          competency=""),
    ]


@pytest.fixture
def workbook_bytes():
    """Two sheets: one with a mix of valid/invalid rows, one empty."""
    return make_workbook_bytes({
        "Europe": [
            make_row("Capital of France?", correct="B"),
            make_row("Capital of Italy?", correct="Rome", domain="Geography", competency="Capitals"),
            make_row("Year of Waterloo?", options={"A": 1815, "B": 1066},
                     correct="A", domain="History", competency="Dates"),
            make_row("", correct="A"),                    # no question text
            make_row("No options here", options={}),      # no options
        ],
        "Empty": [],
    })


@pytest.fixture
def session(workbook_bytes):
    s = QuizSession()
    s.load_bytes(workbook_bytes)
    return s
