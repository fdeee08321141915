"""
Replay command: replay a command file and report the resulting state
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from statecell.core.canonical import canonicalize, state_hash
from statecell.core.errors import StateCellError
from statecell.demo.counter import initial_state, root_transition
from statecell.replay import load_commands, replay as replay_commands

console = Console()


def replay_command(
    commands_path: str = typer.Option(..., "--commands", "-c", help="Path to JSONL command file"),
    until: Optional[int] = typer.Option(None, "--until", "-u", min=0, help="Replay until index (inclusive)"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a JSONL command file through the demo transition function.

    Each line is {"tag": "...", "payload": ...}.

    Examples:
        statecell replay --commands cmds.jsonl
        statecell replay --commands cmds.jsonl --until 10 --show-state
        statecell replay --commands cmds.jsonl --json
    """
    try:
        commands = load_commands(commands_path)
        result = replay_commands(root_transition(), initial_state(), commands, to_index=until)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Command file not found", "path": commands_path}))
        else:
            console.print(f"[red]Error: Command file not found:[/red] {commands_path}")
        raise typer.Exit(2)
    except (StateCellError, ValueError) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    digest = state_hash(result.state)

    if json_output:
        output = {
            "success": True,
            "commands_replayed": result.applied,
            "state_hash": digest,
        }
        if show_state:
            output["state"] = canonicalize(result.state)
        print(json.dumps(output, indent=2))
        return

    console.print(f"[green]✓ Replayed {result.applied} command(s) successfully[/green]")
    console.print(f"  State hash: [yellow]{digest}[/yellow]")
    if show_state:
        console.print("\n[bold]Final State:[/bold]")
        console.print(Syntax(json.dumps(canonicalize(result.state), indent=2), "json", theme="monokai"))
