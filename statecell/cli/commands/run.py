"""
Run command: dispatch commands through the demo counter container
"""

import json
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from statecell.core.canonical import canonicalize, state_hash
from statecell.core.commands import Command
from statecell.core.errors import StateCellError
from statecell.demo.counter import (
    COMMAND_CREATORS,
    INCREMENT_LATER,
    create_counter_container,
    increment_later,
)
from statecell.logging_config import get_logger
from statecell.timers import ManualTimer

console = Console()
logger = get_logger(__name__, dispatch_id="cli-run")


def run_command(
    tags: List[str] = typer.Argument(..., help="Command tags to dispatch, in order"),
    advance: int = typer.Option(0, "--advance", "-a", min=0, help="Ticks to advance the timer afterwards"),
    delay: int = typer.Option(1000, "--delay", "-d", min=0, help="Delay for INCREMENT_LATER"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Dispatch commands through the demo counter container.

    Known tags: INCREMENT, DECREMENT, RESET, INCREMENT_ASYNC, ADD-TWO,
    ADD-FOUR and INCREMENT_LATER (a procedure that increments after --delay
    ticks). Any other tag is dispatched as is and leaves state unchanged.

    Examples:
        statecell run INCREMENT INCREMENT ADD-TWO
        statecell run INCREMENT_LATER --advance 1000
        statecell run RESET --json
    """
    timer = ManualTimer()
    container = create_counter_container()
    notifications = []
    container.subscribe(lambda: notifications.append(container.get_state()))

    try:
        for tag in tags:
            if tag == INCREMENT_LATER:
                container.dispatch(increment_later(timer, delay))
            elif tag in COMMAND_CREATORS:
                container.dispatch(COMMAND_CREATORS[tag]())
            else:
                logger.info("Dispatching unrecognized tag %s", tag)
                container.dispatch(Command(tag))
        fired = timer.advance(advance)
    except (StateCellError, ValueError) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    state = container.get_state()
    digest = state_hash(state)

    if json_output:
        output = {
            "success": True,
            "dispatched": len(tags),
            "notifications": len(notifications),
            "timers_fired": fired,
            "timers_pending": timer.pending,
            "state": canonicalize(state),
            "state_hash": digest,
        }
        print(json.dumps(output, indent=2))
        return

    console.print(f"[green]✓ Dispatched {len(tags)} command(s)[/green]")
    console.print(f"  Notifications: [cyan]{len(notifications)}[/cyan]")
    console.print(f"  Timers fired: [cyan]{fired}[/cyan], pending: [cyan]{timer.pending}[/cyan]")
    console.print(f"  State hash: [yellow]{digest}[/yellow]")

    table = Table(title="Final State")
    table.add_column("Slice", style="green")
    table.add_column("Field", style="yellow")
    table.add_column("Value", style="cyan", justify="right")
    for slice_name in sorted(state):
        for field_name, value in sorted(state[slice_name].items()):
            table.add_row(slice_name, field_name, repr(value))
    console.print(table)
