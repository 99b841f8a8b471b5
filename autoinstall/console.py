from __future__ import annotations
from rich.console import Console
from rich.markup import escape
from rich.table import Table

AFFIRMATIVE = {"y", "yes"}

STYLES = {
    "processing": "magenta",
    "pending": "bold",
    "noop": "bright_yellow",
    "skip": "yellow",
    "installing": "cyan",
    "success": "green",
    "failure": "red",
}


def make_console(**kwargs) -> Console:
    return Console(highlight=False, **kwargs)


def status(console: Console, kind: str, msg: str):
    console.print(f"[{STYLES[kind]}]{escape(msg)}[/]")


def pending_table(packages: list[str]) -> Table:
    table = Table()
    table.add_column("#", justify="right", style="dim")
    table.add_column("Package", style="bold")
    for i, pkg in enumerate(packages):
        table.add_row(str(i), escape(pkg))
    return table


def print_pending(console: Console, document: str, packages: list[str]):
    status(console, "pending", f"Pending installs: {document}")
    console.print(pending_table(packages))


def ask_yes_no(console: Console, question: str) -> bool:
    """Anything other than y/yes (or no terminal at all) counts as no."""
    try:
        answer = console.input(escape(question))
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE
