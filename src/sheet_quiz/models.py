"""
Data models for the Sheet Quiz dashboard.

The canonical question schema is defined with Pydantic so every sheet,
whatever its column naming, is reduced to the same validated shape.
Engine results (filter selection, score) are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ─── Option alphabet ─────────────────────────────────────────────────────────

Letter = Literal["A", "B", "C", "D", "E"]

LETTERS: tuple[str, ...] = ("A", "B", "C", "D", "E")

# Sentinel for "no filter" on either filter axis
ALL = "(all)"


# ─── Enumerations ────────────────────────────────────────────────────────────

class Verdict(str, Enum):
    """Outcome of checking one answer against a question."""
    UNANSWERED = "unanswered"
    CORRECT    = "correct"
    INCORRECT  = "incorrect"


# ─── Canonical question schema ───────────────────────────────────────────────

class Option(BaseModel):
    """One answer choice; only letters with a non-empty cell are kept."""
    model_config = ConfigDict(frozen=True)

    key:  Letter
    text: str = Field(min_length=1)


class Question(BaseModel):
    """
    A normalized multiple-choice question.

    ``correct`` is kept as free text: it may be an option letter or the
    literal text of the correct option.  See scoring.evaluate().
    """
    model_config = ConfigDict(frozen=True)

    question:    str
    options:     list[Option] = Field(default_factory=list)
    correct:     str = ""
    explanation: str = ""
    domain:      str = ""
    competency:  str = ""

    # ── Derived helpers ──────────────────────────────────────────────────────

    @property
    def is_valid(self) -> bool:
        """True when the question has text and at least one option."""
        return bool(self.question) and bool(self.options)

    def option_keys(self) -> list[str]:
        return [o.key for o in self.options]

    def option_by_key(self, key: str) -> Optional[Option]:
        return next((o for o in self.options if o.key == key), None)


# sheet name → questions in sheet order
QuestionSet = dict[str, list[Question]]


# ─── Engine state / results ──────────────────────────────────────────────────

@dataclass(frozen=True)
class FilterSelection:
    """Exact-match constraints on domain and competency; ALL disables one."""
    domain:     str = ALL
    competency: str = ALL

    @property
    def is_unfiltered(self) -> bool:
        return self.domain == ALL and self.competency == ALL


@dataclass(frozen=True)
class Score:
    """Tally of correct answers over a (filtered) question sequence."""
    correct: int
    total:   int

    @property
    def pct(self) -> float:
        return (self.correct / self.total) * 100 if self.total else 0.0

    def label(self) -> str:
        return f"{self.correct} / {self.total}"
