"""API key CLI commands."""

import sys

import click
from rich.console import Console

from cli.utils import get_components
from credentials import ValidationError

console = Console()


@click.group()
def key():
    """Manage the completion API key."""
    pass


@key.command("set")
@click.argument("value", required=False)
def key_set(value: str | None):
    """Save the API key. Prompts (hidden) if VALUE is omitted."""
    c = get_components()
    if value is None:
        value = click.prompt("API key", hide_input=True, default="", show_default=False)

    store = c["credentials"]
    try:
        store.save(value)
    except ValidationError as e:
        console.print(f"[red]Error:[/] {e}. Please enter the key again.")
        sys.exit(1)
    console.print(f"[green]Saved[/] API key {store.mask(value)}")


@key.command("show")
def key_show():
    """Show the saved API key, masked."""
    c = get_components()
    current = c["credentials"].current()
    if not current:
        console.print("[yellow]No API key saved.[/] Run [bold]coach key set[/].")
        return
    console.print(c["credentials"].mask(current))


@key.command("clear")
def key_clear():
    """Remove the saved API key."""
    c = get_components()
    c["credentials"].clear()
    console.print("[green]API key removed[/]")
