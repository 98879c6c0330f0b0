"""
ingestion.py — Workbook acquisition and parsing
===============================================
Turns workbook bytes (from an upload or a remote export) into the ordered
``(sheet_name, rows)`` pairs consumed by normalizer.build_question_set().

  read_workbook(data)           bytes → [(sheet_name, [RawRow, ...]), ...]
  fetch_workbook(url, timeout)  download an .xlsx export → bytes

Parsing is delegated to pandas (openpyxl engine).  Empty cells are read
back as "" so a blank cell and a missing column look the same downstream.
NA detection is off: text such as "None", "N/A" or "null" is a legitimate
answer and must survive as written.

Any failure is raised as IngestionFailure with the original error chained;
callers keep whatever state they had before the attempt.
"""

from __future__ import annotations

import io
import logging
import urllib.error
import urllib.request
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

Sheets = list[tuple[str, list[dict[str, Any]]]]


class IngestionFailure(Exception):
    """The workbook could not be downloaded or parsed."""


class LoadInProgress(IngestionFailure):
    """A workbook load was requested while another one is still running."""


# ─── Parsing ─────────────────────────────────────────────────────────────────

def _frame_rows(frame: pd.DataFrame) -> list[dict[str, Any]]:
    frame = frame.astype(object)
    frame = frame.where(frame.notna(), "")
    frame.columns = [str(c) for c in frame.columns]
    return frame.to_dict(orient="records")


def read_workbook(data: bytes) -> Sheets:
    """Parse every sheet of an .xlsx workbook, preserving sheet order."""
    if not data:
        raise IngestionFailure("Workbook is empty (0 bytes).")
    try:
        frames = pd.read_excel(
            io.BytesIO(data), sheet_name=None, dtype=object, engine="openpyxl",
            keep_default_na=False, na_filter=False,
        )
    except Exception as exc:
        logger.warning("Workbook parse failed: %s", exc)
        raise IngestionFailure(f"Could not read workbook: {exc}") from exc

    sheets = [(str(name), _frame_rows(frame)) for name, frame in frames.items()]
    logger.info(
        "Parsed workbook: %d sheet(s), %d row(s)",
        len(sheets), sum(len(rows) for _, rows in sheets),
    )
    return sheets


# ─── Remote download ─────────────────────────────────────────────────────────

def fetch_workbook(url: str, timeout: float = 30.0) -> bytes:
    """Download a workbook export (e.g. a Google Sheets ``format=xlsx`` link)."""
    logger.info("Fetching workbook from %s", url)
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            return resp.read()
    except (urllib.error.URLError, OSError, ValueError) as exc:
        logger.warning("Workbook download failed: %s", exc)
        raise IngestionFailure(f"Could not download workbook: {exc}") from exc
