"""
config.py — Central settings for the Sheet Quiz dashboard
=========================================================
All configuration is loaded from environment variables / .env file.
Copy .env.example → .env to override the defaults.

The dashboard auto-loads QUIZ_WORKBOOK_URL on startup when it holds a real
(non-placeholder) value and QUIZ_AUTOLOAD is true.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)


DEFAULT_WORKBOOK_URL = (
    "https://docs.google.com/spreadsheets/d/1DGd-bMqH5lIHvPF3dkI9KqKgFGtjRLXoxiE5no2M46Y"
    "/export?format=xlsx&id=1DGd-bMqH5lIHvPF3dkI9KqKgFGtjRLXoxiE5no2M46Y"
)


# ─── Helpers ────────────────────────────────────────────────────────────────

def _is_placeholder(value: str) -> bool:
    """Return True if the value looks like an unfilled template placeholder."""
    return not value or "<" in value or value.startswith("your-") or value == "PLACEHOLDER"


# ─── Remote workbook ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class WorkbookConfig:
    url:      str
    timeout:  float   # seconds
    autoload: bool

    @property
    def is_configured(self) -> bool:
        """True when the URL is a real http(s) address."""
        return (
            not _is_placeholder(self.url)
            and self.url.startswith(("http://", "https://"))
        )


# ─── PDF report ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ReportConfig:
    filename: str
    title:    str


# ─── App-level settings ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    log_level: str


# ─── Master settings object ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    workbook: WorkbookConfig
    report:   ReportConfig
    app:      AppConfig

    @property
    def autoload(self) -> bool:
        """True when a remote workbook should be fetched on startup."""
        return self.workbook.autoload and self.workbook.is_configured

    def status_summary(self) -> dict[str, str]:
        """Return a dict of setting → status badge for the UI."""
        def badge(ok: bool) -> str:
            return "🟢 On" if ok else "⚪ Off"

        return {
            "Remote workbook": badge(self.workbook.is_configured),
            "Auto-load":       badge(self.autoload),
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    _str   = lambda k, d="": os.getenv(k, d).strip()
    _float = lambda k, d=0.0: float(os.getenv(k, str(d)) or d)
    _bool  = lambda k, d=False: os.getenv(k, str(d)).lower() in ("1", "true", "yes")

    return Settings(
        workbook=WorkbookConfig(
            url      = _str("QUIZ_WORKBOOK_URL", DEFAULT_WORKBOOK_URL),
            timeout  = _float("QUIZ_FETCH_TIMEOUT", 30.0),
            autoload = _bool("QUIZ_AUTOLOAD", True),
        ),
        report=ReportConfig(
            filename = _str("QUIZ_REPORT_FILENAME", "quiz-results.pdf"),
            title    = _str("QUIZ_REPORT_TITLE", "Quiz Results"),
        ),
        app=AppConfig(
            log_level = _str("QUIZ_LOG_LEVEL", "INFO").upper(),
        ),
    )
