"""Journal CLI commands."""

import sys

import click
import structlog
from rich.console import Console
from rich.panel import Panel

from cli.utils import get_components
from journal import JournalInputError

console = Console()
logger = structlog.get_logger()


@click.group()
def journal():
    """Write today's journal entry for coaching."""
    pass


@journal.command("write")
@click.option("-j", "--journal", "journal_text", help="Journal text (prompted if omitted)")
@click.option("-r", "--reflection", help="Reflection text (prompted if omitted)")
@click.option("--date", "entry_date", help="Display date (defaults to today)")
def journal_write(journal_text: str | None, reflection: str | None, entry_date: str | None):
    """Save journal and reflection for the next coaching session."""
    c = get_components()
    if journal_text is None:
        journal_text = click.prompt("Journal", default="", show_default=False)
    if reflection is None:
        reflection = click.prompt("Reflection", default="", show_default=False)

    try:
        snapshot = c["session"].write(journal_text, reflection, date=entry_date)
    except JournalInputError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    console.print(f"[green]Saved[/] journal for {snapshot.date}")


@journal.command("show")
def journal_show():
    """Show the journal entry queued for coaching."""
    c = get_components()
    snapshot = c["session"].read()
    if snapshot is None:
        console.print("[yellow]No journal data.[/] Run [bold]coach journal write[/] first.")
        return
    console.print(f"[bold]{snapshot.date}[/]")
    console.print(Panel(snapshot.journal_text, title="Journal"))
    console.print(Panel(snapshot.reflection_text, title="Reflection"))
