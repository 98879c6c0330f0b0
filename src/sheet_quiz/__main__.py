"""Allow ``python -m sheet_quiz`` to run the command-line quiz."""
from sheet_quiz.cli import main

raise SystemExit(main())
