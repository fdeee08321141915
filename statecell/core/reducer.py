"""
Reducer: Pure state transition functions.

The transition function is the only place state is computed. It must be:
- Pure (no side effects, no I/O)
- Deterministic (same input -> same output)
- Total (unrecognized tags return the state unchanged)
"""

from typing import Any, Callable, Dict, TypeVar

from .commands import Command
from .errors import ConfigurationError
from .state import State

S = TypeVar("S")

# Transition signature: (current_state, command) -> new_state
TransitionFunction = Callable[[S, Command], S]

# Handler signature: (current_state, command) -> new_state
Handler = Callable[[Any, Command], Any]


class Reducer:
    """
    Registry of per-tag handlers forming one transition function.

    Usage:
        reducer = Reducer()
        reducer.register("INCREMENT", handle_increment)
        new_state = reducer(state, command)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, tag: str, handler: Handler) -> None:
        """
        Register command handler.

        Args:
            tag: Command tag string
            handler: Pure function (current_state, command) -> new_state
        """
        if not callable(handler):
            raise ConfigurationError(f"Handler for {tag!r} is not callable")
        self._handlers[tag] = handler

    def handles(self, tag: str) -> bool:
        return tag in self._handlers

    def __call__(self, state: Any, command: Command) -> Any:
        """
        Apply command to state using registered handler.

        Args:
            state: Current state
            command: Command to apply

        Returns:
            New state, or the same state object if no handler matches
        """
        handler = self._handlers.get(command.tag)
        if handler is None:
            return state
        return handler(state, command)


def combine_reducers(**slices: TransitionFunction) -> TransitionFunction:
    """
    Combine slice reducers into one transition function over a State.

    Each keyword names a State field owned by that slice. Every slice sees
    every command and receives only its own field. When no slice returns a
    different object, the input state is returned as is.

    Args:
        **slices: Field name -> slice transition function

    Returns:
        Transition function (State, Command) -> State

    Raises:
        ConfigurationError: If no slices are given or a slice is not callable
    """
    if not slices:
        raise ConfigurationError("combine_reducers requires at least one slice")
    for name, fn in slices.items():
        if not callable(fn):
            raise ConfigurationError(f"Slice reducer {name!r} is not callable")

    def combined(state: State, command: Command) -> State:
        changes = {}
        for name, fn in slices.items():
            current = state.get(name)
            updated = fn(current, command)
            if updated is not current:
                changes[name] = updated
        if not changes:
            return state
        return state.with_fields(**changes)

    return combined
