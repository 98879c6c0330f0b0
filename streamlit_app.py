# streamlit_app.py – Excel Quiz Dashboard
# Spreadsheet-driven multiple-choice quiz: load a workbook, answer, score, export.

import json
import logging
import sys
from pathlib import Path

# make src/ importable without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

import streamlit as st
import plotly.graph_objects as go

from sheet_quiz.config import get_settings
from sheet_quiz.ingestion import IngestionFailure
from sheet_quiz.models import ALL, Verdict
from sheet_quiz.scoring import resolve_correct_key
from sheet_quiz.session import QuizSession
from sheet_quiz.ui import GREEN, RED, meta_html, question_card_html, upload_token

# Color constants
BG_CARD      = "#FFFFFF"
BLUE         = "#0078D4"
TEXT_PRIMARY = "#1B1B1B"
TEXT_MUTED   = "#616161"
BORDER       = "#E1DFDD"

settings = get_settings()
logging.basicConfig(level=settings.app.log_level)

# ─── Page config ─────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Excel Quiz Dashboard",
    page_icon="📝",
    layout="centered",
)

st.markdown(f"""
<style>
  .card {{ background:{BG_CARD}; border:1px solid {BORDER}; border-radius:8px;
          padding:12px 16px; margin:14px 0 6px 0; }}
  .q-head {{ color:{TEXT_PRIMARY}; font-weight:700; }}
  .meta {{ color:{TEXT_MUTED}; font-size:0.8rem; display:flex;
          justify-content:space-between; margin-top:4px; }}
  .score {{ font-size:1.2rem; font-weight:800; color:{BLUE}; }}
</style>
""", unsafe_allow_html=True)


# ─── Session state ───────────────────────────────────────────────────────────

if "quiz" not in st.session_state:
    st.session_state["quiz"] = QuizSession()
quiz: QuizSession = st.session_state["quiz"]


def _load(action, *args) -> None:
    """Run a load intent and surface failures without touching prior state."""
    try:
        action(*args)
    except IngestionFailure as exc:
        st.error(f"🚫 Failed to load workbook: {exc}")


# ─── Sidebar: source selection ───────────────────────────────────────────────
with st.sidebar:
    st.markdown("### 📂 Workbook")
    _uploaded = st.file_uploader("Upload a quiz workbook", type=["xlsx"])
    if _uploaded is not None:
        _token = upload_token(_uploaded)
        if st.session_state.get("_upload_token") != _token:
            st.session_state["_upload_token"] = _token
            _load(quiz.load_bytes, _uploaded.getvalue())

    if settings.workbook.is_configured and st.button("🔄 Reload remote workbook", use_container_width=True):
        with st.spinner("Loading quiz… ⏳"):
            _load(quiz.load_url, settings.workbook.url, settings.workbook.timeout)

    st.markdown("---")
    for _name, _badge in settings.status_summary().items():
        st.caption(f"{_badge} · {_name}")


# ─── Auto-load on first run ──────────────────────────────────────────────────
if settings.autoload and not st.session_state.get("_autoloaded"):
    st.session_state["_autoloaded"] = True
    with st.spinner("Loading quiz… ⏳"):
        _load(quiz.load_url, settings.workbook.url, settings.workbook.timeout)


st.title("Excel Quiz Dashboard")

# ─── Sheet selector ──────────────────────────────────────────────────────────
if len(quiz.sheet_names) > 1:
    _sheet = st.selectbox(
        "Sheet",
        quiz.sheet_names,
        index=quiz.sheet_names.index(quiz.selected_sheet),
    )
    if _sheet != quiz.selected_sheet:
        quiz.select_sheet(_sheet)


# ─── Filters ─────────────────────────────────────────────────────────────────

def _filter_box(label: str, values: list[str], current: str) -> str:
    options = [ALL] + values
    index = options.index(current) if current in options else 0
    return st.selectbox(
        label, options, index=index,
        format_func=lambda v: "(All)" if v == ALL else v,
    )


col_d, col_c = st.columns(2)
with col_d:
    quiz.set_domain(_filter_box("Domain filter", quiz.domains(), quiz.selection.domain))
with col_c:
    quiz.set_competency(_filter_box("Competency filter", quiz.competencies(), quiz.selection.competency))

_visible = quiz.visible()
_score = quiz.score()

col_s, col_e = st.columns([2, 1])
with col_s:
    st.markdown(f'<div class="score">Score: {_score.label()}</div>', unsafe_allow_html=True)
with col_e:
    st.download_button(
        label="⬇️ Export Results PDF",
        data=quiz.export_pdf(settings.report.title) if _visible else b"",
        file_name=settings.report.filename,
        mime="application/pdf",
        disabled=not _visible,
        use_container_width=True,
    )


# ─── Question cards ──────────────────────────────────────────────────────────

def _option_label(opt, chosen, verdict: Verdict, correct_key) -> str:
    label = f"{opt.key}. {opt.text}"
    is_chosen = chosen == opt.key
    is_correct_option = opt.key == correct_key
    if is_chosen or (verdict is not Verdict.UNANSWERED and is_correct_option):
        return ("✅ " if is_correct_option else "❌ ") + label
    return label


if not _visible:
    st.info("No questions loaded.")

for _num, (_idx, _q) in enumerate(_visible, start=1):
    _chosen = quiz.chosen(_idx)
    _verdict = quiz.verdict(_idx)
    _correct_key = resolve_correct_key(_q)

    st.markdown(question_card_html(_num, _q), unsafe_allow_html=True)
    for _opt in _q.options:
        st.button(
            _option_label(_opt, _chosen, _verdict, _correct_key),
            key=f"opt_{quiz.selected_sheet}_{_idx}_{_opt.key}",
            type="primary" if _chosen == _opt.key else "secondary",
            on_click=quiz.answer,
            args=(_idx, _opt.key),
            use_container_width=True,
        )

    st.markdown(meta_html(_q, _chosen, _verdict), unsafe_allow_html=True)
    if _q.explanation:
        with st.expander("Explanation"):
            st.write(_q.explanation)


# ─── Domain breakdown ────────────────────────────────────────────────────────
_by_domain = quiz.breakdown("domain")
if _by_domain:
    with st.expander("📊 Score by domain"):
        _names = list(_by_domain)
        fig = go.Figure(go.Bar(
            x=[_by_domain[n].pct for n in _names],
            y=_names,
            orientation="h",
            marker_color=[GREEN if _by_domain[n].pct >= 70 else RED for n in _names],
            text=[_by_domain[n].label() for n in _names],
            textposition="auto",
        ))
        fig.update_layout(
            xaxis=dict(range=[0, 100], title="% correct"),
            height=max(200, 60 * len(_names)),
            margin=dict(l=10, r=10, t=10, b=10),
        )
        st.plotly_chart(fig, use_container_width=True)


# ─── Raw data ────────────────────────────────────────────────────────────────
if quiz.question_set:
    st.download_button(
        label="⬇️ Download questions as JSON",
        data=json.dumps(
            {name: [q.model_dump() for q in qs] for name, qs in quiz.question_set.items()},
            indent=2,
        ),
        file_name="questions.json",
        mime="application/json",
    )

st.caption("Built with Streamlit + pandas • Auto-loads from Google Sheets")
