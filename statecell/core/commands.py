"""
Command model for state transitions.

Commands are immutable records of intent submitted to a container.
Two variants exist:
- Command: plain tagged value, consumed by the transition function
- Procedure: tagged closure, run by an interceptor instead of the transition function
"""

from dataclasses import dataclass
from typing import Any, Callable, Union

# Procedure body signature: (dispatch, get_state) -> anything
ProcedureBody = Callable[[Callable[..., Any], Callable[[], Any]], Any]


@dataclass(frozen=True)
class Command:
    """
    Immutable command record.

    Fields:
        tag: Command type (e.g., "INCREMENT", "RESET")
        payload: Command-specific data (optional)

    Equality is structural: two commands with the same tag and payload are equal.
    """
    tag: str
    payload: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.tag, str) or not self.tag:
            raise ValueError(f"Command.tag must be a non-empty string, got {self.tag!r}")


@dataclass(frozen=True)
class Procedure:
    """
    Command variant carrying executable logic.

    A procedure is never seen by the transition function. An interceptor
    recognizes it and calls run() with the container's dispatch and
    get_state; any state change happens through ordinary commands the body
    dispatches later.

    Fields:
        tag: Descriptive tag (for logging)
        body: Callable (dispatch, get_state) -> result
    """
    tag: str
    body: ProcedureBody

    def __post_init__(self) -> None:
        if not isinstance(self.tag, str) or not self.tag:
            raise ValueError(f"Procedure.tag must be a non-empty string, got {self.tag!r}")
        if not callable(self.body):
            raise TypeError(f"Procedure.body must be callable, got {type(self.body).__name__}")

    def run(self, dispatch: Callable[..., Any], get_state: Callable[[], Any]) -> Any:
        return self.body(dispatch, get_state)


AnyCommand = Union[Command, Procedure]


def command(tag: str, payload: Any = None) -> Command:
    """Shorthand for Command(tag, payload)."""
    return Command(tag=tag, payload=payload)


def is_procedure(cmd: Any) -> bool:
    return isinstance(cmd, Procedure)
