"""
Replay runner: reconstruct state from a command sequence.

Replay is pure: folds the transition function over commands in order,
with no container, interceptors or subscribers involved.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Union

from ..core.commands import Command, Procedure
from ..core.errors import ConfigurationError


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying commands
        applied: Number of commands applied
    """
    state: Any
    applied: int


def replay(
    transition: Callable[[Any, Command], Any],
    initial_state: Any,
    commands: Iterable[Command],
    to_index: Optional[int] = None,
) -> ReplayResult:
    """
    Replay commands to reconstruct state.

    Same initial state and commands always produce the same state as
    dispatching them one by one through a container.

    Args:
        transition: Transition function (state, command) -> state
        initial_state: Starting state
        commands: Commands in dispatch order
        to_index: Stop at this index (inclusive, None = all)

    Returns:
        ReplayResult with final state and count

    Raises:
        ConfigurationError: If a Procedure is found in the sequence
    """
    st = initial_state
    count = 0

    for index, cmd in enumerate(commands):
        if to_index is not None and index > to_index:
            break
        if isinstance(cmd, Procedure):
            raise ConfigurationError(f"Procedure {cmd.tag!r} at index {index} cannot be replayed")
        st = transition(st, cmd)
        count += 1

    return ReplayResult(state=st, applied=count)


def load_commands(path: Union[str, Path]) -> List[Command]:
    """
    Read commands from a JSON Lines file.

    Each non-blank line is an object {"tag": str, "payload": any}; payload is
    optional.

    Raises:
        ValueError: If a line is not valid JSON or has no tag
    """
    commands = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                rec = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{lineno}: invalid JSON: {e.msg}") from e
            if not isinstance(rec, dict) or "tag" not in rec:
                raise ValueError(f"{path}:{lineno}: expected an object with a 'tag' field")
            commands.append(Command(tag=rec["tag"], payload=rec.get("payload")))
    return commands
