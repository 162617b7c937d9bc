"""Coaching CLI commands: persona roster and fan-out advice."""

import asyncio
import sys

import click
import structlog
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from cli.utils import get_components, make_client
from coaching import ConsoleNotifier, JournalSnapshot, Orchestrator, PersonaRegistry
from coaching.prompts import failure_message
from credentials import ValidationError
from journal import format_entry_date
from observability import log_run_summary
from shared_types import AdviceState

console = Console()
logger = structlog.get_logger()

_STATE_LABELS = {
    AdviceState.AWAITING_CREDENTIAL: "[yellow]API key required[/]",
    AdviceState.LOADING: "[cyan]loading...[/]",
    AdviceState.SUCCEEDED: "[green]done[/]",
    AdviceState.FAILED: "[red]failed[/]",
}


@click.command()
def personas():
    """List the advice personas."""
    table = Table(show_header=True)
    table.add_column("", style="dim")
    table.add_column("Name")
    table.add_column("Title", style="cyan")
    table.add_column("Style")
    for p in PersonaRegistry().all():
        table.add_row(p.initials, p.display_name, p.title, p.style_description)
    console.print(table)


def render_status(orchestrator: Orchestrator) -> Table:
    table = Table(show_header=True)
    table.add_column("Persona")
    table.add_column("Title", style="dim")
    table.add_column("Status")
    for unit in orchestrator.units:
        table.add_row(
            unit.persona.display_name,
            unit.persona.title,
            _STATE_LABELS[unit.current_state()],
        )
    return table


def print_advice(orchestrator: Orchestrator) -> None:
    for unit in orchestrator.units:
        p = unit.persona
        if unit.current_state() == AdviceState.SUCCEEDED:
            body = Text(unit.text or "")
            style = "green"
        elif unit.current_state() == AdviceState.FAILED:
            body = f"[red]{failure_message(unit.error_kind)}[/]"
            style = "red"
        else:
            continue
        console.print(
            Panel(body, title=f"{p.display_name} · {p.title}", subtitle=p.style_description, border_style=style)
        )


async def _settle(orchestrator: Orchestrator) -> None:
    """Wait for all units while showing a live status table."""
    with Live(render_status(orchestrator), console=console, refresh_per_second=8) as live:
        unsubscribers = [
            unit.subscribe(lambda _unit: live.update(render_status(orchestrator)))
            for unit in orchestrator.units
        ]
        try:
            await orchestrator.wait_all()
        finally:
            for unsubscribe in unsubscribers:
                unsubscribe()
        live.update(render_status(orchestrator))


async def run_advice(c: dict, snapshot: JournalSnapshot, retries: int, interactive: bool) -> dict:
    """Fan the snapshot out to every persona and drive retries.

    Returns final persona states.
    """
    store = c["credentials"]
    async with make_client(c["config"]) as client:
        orchestrator = Orchestrator(client, credentials=store, notifier=ConsoleNotifier(console))
        try:
            orchestrator.bind(snapshot, store.current())

            if orchestrator.awaiting_credential:
                if not interactive:
                    console.print(
                        "[red]Error:[/] API key required. Run [bold]coach key set[/] first."
                    )
                    return orchestrator.states()
                value = click.prompt("API key", hide_input=True, default="", show_default=False)
                try:
                    # Saving pushes the new key to every persona
                    store.save(value)
                except ValidationError as e:
                    console.print(f"[red]Error:[/] {e}. Please enter the key again.")
                    return orchestrator.states()

            await _settle(orchestrator)

            rounds = 0
            while AdviceState.FAILED in orchestrator.states().values():
                if rounds < retries:
                    rounds += 1
                elif not (interactive and click.confirm("Retry failed personas?", default=True)):
                    break
                retried = orchestrator.retry_failed()
                logger.info("cli.retry_round", personas=retried)
                await _settle(orchestrator)

            print_advice(orchestrator)
            return orchestrator.states()
        finally:
            orchestrator.close()
            log_run_summary()


@click.command()
@click.option("-j", "--journal", "journal_text", help="Journal text (defaults to saved session)")
@click.option("-r", "--reflection", help="Reflection text (defaults to saved session)")
@click.option("--date", "entry_date", help="Display date")
@click.option("--retries", default=0, show_default=True, help="Automatic retry rounds for failed personas")
def advise(journal_text: str | None, reflection: str | None, entry_date: str | None, retries: int):
    """Get advice from every persona for today's journal."""
    c = get_components()

    if journal_text or reflection:
        if not (journal_text and journal_text.strip() and reflection and reflection.strip()):
            console.print("[red]Error:[/] Both --journal and --reflection are required.")
            sys.exit(1)
        snapshot = JournalSnapshot(
            date=entry_date or format_entry_date(),
            journal_text=journal_text,
            reflection_text=reflection,
        )
    else:
        snapshot = c["session"].read()
        if snapshot is None:
            console.print(
                "[red]Error:[/] No journal data. Run [bold]coach journal write[/] first."
            )
            sys.exit(1)

    if snapshot.date:
        console.print(f"[bold]{snapshot.date}[/]")

    states = asyncio.run(run_advice(c, snapshot, retries, interactive=sys.stdin.isatty()))

    if not states or all(s != AdviceState.SUCCEEDED for s in states.values()):
        sys.exit(1)
