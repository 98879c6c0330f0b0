"""
answers.py — per-question answer store, keyed by sheet and sheet position.
"""

from __future__ import annotations

from typing import Iterator, Optional


class AnswerTracker:
    """
    Records the option letter chosen for each question.

    Keys are ``(sheet_name, question_index)`` where the index is the
    question's position in the full (unfiltered) sheet.  Recording again
    for the same key overwrites the previous choice.  Letters are not
    checked against the question's options.
    """

    def __init__(self) -> None:
        self._answers: dict[tuple[str, int], str] = {}

    def record(self, sheet_name: str, question_index: int, letter: str) -> None:
        self._answers[(sheet_name, question_index)] = letter

    def get(self, sheet_name: str, question_index: int) -> Optional[str]:
        return self._answers.get((sheet_name, question_index))

    def for_sheet(self, sheet_name: str) -> dict[int, str]:
        """All answers recorded for *sheet_name*, by question index."""
        return {i: letter for (s, i), letter in self._answers.items() if s == sheet_name}

    def __contains__(self, key: object) -> bool:
        return key in self._answers

    def __len__(self) -> int:
        return len(self._answers)

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self._answers)
