"""
cli.py — Command-line front end for the quiz engine.

  sheet-quiz inspect [SOURCE]
      Summarise every sheet: question count, domains, competencies.

  sheet-quiz take [SOURCE] [--sheet NAME] [--domain D] [--competency C] [--pdf PATH]
      Answer the filtered questions interactively, print the score and
      optionally write the PDF report.

SOURCE is a local .xlsx path or an http(s) URL; it defaults to the
configured QUIZ_WORKBOOK_URL.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from sheet_quiz.config import get_settings
from sheet_quiz.filters import distinct_competencies, distinct_domains
from sheet_quiz.ingestion import IngestionFailure
from sheet_quiz.models import ALL, Verdict
from sheet_quiz.scoring import resolve_correct_key
from sheet_quiz.session import QuizSession

console = Console()

VERDICT_STYLE = {
    Verdict.CORRECT:    "[bold green]✓ Correct[/bold green]",
    Verdict.INCORRECT:  "[bold red]✗ Incorrect[/bold red]",
    Verdict.UNANSWERED: "[dim]— skipped[/dim]",
}


def _load(session: QuizSession, source: str, timeout: float) -> None:
    if source.startswith(("http://", "https://")):
        session.load_url(source, timeout=timeout)
    else:
        session.load_bytes(Path(source).read_bytes())


# ─── inspect ─────────────────────────────────────────────────────────────────

def cmd_inspect(session: QuizSession) -> int:
    table = Table(title="Workbook Summary", box=box.ROUNDED)
    table.add_column("Sheet", style="bold cyan")
    table.add_column("Questions", justify="right")
    table.add_column("Domains")
    table.add_column("Competencies")

    for name, questions in session.question_set.items():
        table.add_row(
            name,
            str(len(questions)),
            ", ".join(distinct_domains(questions)) or "—",
            ", ".join(distinct_competencies(questions)) or "—",
        )
    console.print(table)
    return 0


# ─── take ────────────────────────────────────────────────────────────────────

def cmd_take(session: QuizSession, args: argparse.Namespace) -> int:
    settings = get_settings()

    if args.sheet:
        session.select_sheet(args.sheet)
    session.set_domain(args.domain)
    session.set_competency(args.competency)

    entries = session.visible()
    if not entries:
        console.print("[yellow]No questions loaded.[/yellow]")
        return 0

    console.print(Panel(
        f"[bold magenta]{session.selected_sheet}[/bold magenta] · {len(entries)} question(s)",
        subtitle="Enter a letter, or leave blank to skip",
        expand=False,
    ))

    for number, (index, q) in enumerate(entries, start=1):
        console.print()
        console.print(f"[cyan]{number}.[/cyan] [bold]{q.question}[/bold]")
        if q.domain or q.competency:
            console.print(f"   [dim]{q.domain} — {q.competency}[/dim]")
        for opt in q.options:
            console.print(f"   [bold]{opt.key}.[/bold] {opt.text}")

        letter = Prompt.ask(
            "   Your answer",
            choices=q.option_keys(),
            default="",
            show_default=False,
        )
        if letter:
            session.answer(index, letter)

        verdict = session.verdict(index)
        console.print(f"   {VERDICT_STYLE[verdict]}")
        if verdict is Verdict.INCORRECT:
            key = resolve_correct_key(q)
            console.print(f"   [dim]Correct answer: {key or q.correct}[/dim]")
        if q.explanation and verdict is not Verdict.UNANSWERED:
            console.print(f"   [italic]{q.explanation}[/italic]")

    score = session.score()
    console.print()
    console.print(Panel(
        f"[bold]Score: {score.label()}[/bold]  ({score.pct:.0f}%)",
        expand=False,
    ))

    if args.pdf:
        Path(args.pdf).write_bytes(session.export_pdf(settings.report.title))
        console.print(f"[green]Report written to {args.pdf}[/green]")
    return 0


# ─── Entry point ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="sheet-quiz", description="Spreadsheet-driven multiple-choice quiz.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_inspect = sub.add_parser("inspect", help="summarise the sheets of a workbook")
    p_inspect.add_argument("source", nargs="?", default=settings.workbook.url)

    p_take = sub.add_parser("take", help="answer a quiz interactively")
    p_take.add_argument("source", nargs="?", default=settings.workbook.url)
    p_take.add_argument("--sheet", default="")
    p_take.add_argument("--domain", default=ALL)
    p_take.add_argument("--competency", default=ALL)
    p_take.add_argument("--pdf", default=None,
                        help=f"write the report here (e.g. {settings.report.filename})")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.app.log_level)
    args = build_parser().parse_args(argv)

    session = QuizSession()
    try:
        _load(session, args.source, settings.workbook.timeout)
    except (IngestionFailure, OSError) as exc:
        console.print(f"[bold red]Could not load workbook:[/bold red] {exc}")
        return 1

    if args.command == "inspect":
        return cmd_inspect(session)

    if args.sheet and args.sheet not in session.sheet_names:
        console.print(f"[bold red]Unknown sheet:[/bold red] {args.sheet}")
        return 2
    return cmd_take(session, args)


if __name__ == "__main__":
    raise SystemExit(main())
