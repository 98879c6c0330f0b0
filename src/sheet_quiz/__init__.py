"""
sheet_quiz — Spreadsheet-driven multiple-choice quiz engine
===========================================================
Package containing the question normalizer, filtering, answer tracking,
scoring, report layout and workbook ingestion used by the Streamlit
dashboard and the command-line quiz.

Module map
----------
  models.py       Pydantic question schema (Option, Question), Verdict,
                  FilterSelection and Score.
  config.py       Settings loaded from .env (workbook URL, report naming).
  normalizer.py   Row Normalizer + Question Set Builder.
  filters.py      Distinct domains / competencies and equality filtering.
  answers.py      AnswerTracker keyed by (sheet, sheet index).
  scoring.py      Correctness Evaluator + Score Aggregator.
  report.py       Paginated report line layout + reportlab PDF sink.
  ingestion.py    Workbook bytes → sheets (pandas/openpyxl); remote fetch.
  session.py      QuizSession: explicit per-user state and derived views.
  cli.py          Rich console front end (inspect / take).
  ui.py           Escaped HTML fragments + upload identity for the dashboard.

Data flow
---------
  bytes → ingestion.read_workbook → normalizer.build_question_set
  → QuizSession (selected sheet + FilterSelection)
  → filters.apply_filter_indexed
  ┌── scoring.tally          ─┐  both read AnswerTracker
  └── report.layout_report   ─┘
"""
__version__ = "0.1.0"
