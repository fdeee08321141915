"""
Counter demo: reducers, command creators and container wiring.

State layout:
    counter: {"count": int, "loading": bool, "last_action": str | None}
    add:     {"count": int}
"""

from typing import Any, Dict, List, Optional

from ..core.commands import Command, Procedure
from ..core.reducer import Reducer, combine_reducers
from ..core.state import State
from ..store.chain import Interceptor
from ..store.container import StateContainer
from ..store.interceptors import logging_interceptor, procedure_interceptor
from ..timers import ManualTimer

INCREMENT = "INCREMENT"
DECREMENT = "DECREMENT"
RESET = "RESET"
INCREMENT_ASYNC = "INCREMENT_ASYNC"
ADD_TWO = "ADD-TWO"
ADD_FOUR = "ADD-FOUR"
INCREMENT_LATER = "INCREMENT_LATER"


def initial_counter() -> Dict[str, Any]:
    return {"count": 0, "loading": False, "last_action": None}


def initial_add() -> Dict[str, Any]:
    return {"count": 0}


def initial_state() -> State:
    return State.of(counter=initial_counter(), add=initial_add())


def _counter_step(delta: int, tag: str):
    def handler(cur: Optional[Dict[str, Any]], cmd: Command) -> Dict[str, Any]:
        cur = cur or initial_counter()
        return {**cur, "count": cur["count"] + delta, "loading": False, "last_action": tag}

    return handler


def _counter_reset(cur: Optional[Dict[str, Any]], cmd: Command) -> Dict[str, Any]:
    cur = cur or initial_counter()
    return {**cur, "count": 0, "last_action": RESET}


def _counter_async_start(cur: Optional[Dict[str, Any]], cmd: Command) -> Dict[str, Any]:
    cur = cur or initial_counter()
    return {**cur, "loading": True, "last_action": "INCREMENT_ASYNC_START"}


def _add(amount: int):
    def handler(cur: Optional[Dict[str, Any]], cmd: Command) -> Dict[str, Any]:
        cur = cur or initial_add()
        return {**cur, "count": cur["count"] + amount}

    return handler


def counter_reducer() -> Reducer:
    r = Reducer()
    r.register(INCREMENT, _counter_step(1, INCREMENT))
    r.register(DECREMENT, _counter_step(-1, DECREMENT))
    r.register(RESET, _counter_reset)
    r.register(INCREMENT_ASYNC, _counter_async_start)
    return r


def add_reducer() -> Reducer:
    r = Reducer()
    r.register(ADD_TWO, _add(2))
    r.register(ADD_FOUR, _add(4))
    return r


def root_transition():
    """Transition function over the whole demo State."""
    return combine_reducers(counter=counter_reducer(), add=add_reducer())


def increment() -> Command:
    return Command(INCREMENT)


def decrement() -> Command:
    return Command(DECREMENT)


def reset() -> Command:
    return Command(RESET)


def increment_async() -> Command:
    return Command(INCREMENT_ASYNC)


def add_two() -> Command:
    return Command(ADD_TWO)


def add_four() -> Command:
    return Command(ADD_FOUR)


def increment_later(timer: ManualTimer, delay: int = 1000) -> Procedure:
    """
    Procedure that increments the counter once delay ticks have passed.

    Nothing is dispatched when the procedure runs; the timer callback
    dispatches INCREMENT as a separate pass through the chain.
    """

    def body(dispatch, get_state):
        return timer.call_later(delay, lambda: dispatch(increment()))

    return Procedure(INCREMENT_LATER, body)


COMMAND_CREATORS = {
    INCREMENT: increment,
    DECREMENT: decrement,
    RESET: reset,
    INCREMENT_ASYNC: increment_async,
    ADD_TWO: add_two,
    ADD_FOUR: add_four,
}


def create_counter_container(interceptors: Optional[List[Interceptor]] = None) -> StateContainer:
    """
    Build the demo container.

    Default interceptors are logging first, then procedures, so the log
    shows procedure commands too.
    """
    if interceptors is None:
        interceptors = [logging_interceptor(), procedure_interceptor]
    return StateContainer.create(initial_state(), root_transition(), interceptors)
