"""
Tests for the stock interceptors.
"""

import logging

import pytest

from statecell.core.commands import Command, Procedure
from statecell.core.errors import EffectExecutionError, ReentrantDispatchError
from statecell.core.reducer import Reducer
from statecell.core.state import State
from statecell.effects.deferred import DeferredEffect
from statecell.store.container import StateContainer
from statecell.store.interceptors import (
    effect_interceptor,
    filter_interceptor,
    logging_interceptor,
    procedure_interceptor,
)
from statecell.timers import ManualTimer


def _counter():
    r = Reducer()
    r.register("INC", lambda cur, cmd: cur.with_fields(count=cur["count"] + 1))
    r.register("SET", lambda cur, cmd: cur.with_fields(count=cmd.payload))
    return r


def test_logging_interceptor_logs_command_and_states(caplog):
    logger = logging.getLogger("statecell.tests.logging_interceptor")
    container = StateContainer.create(
        State.of(count=0), _counter(), [logging_interceptor(logger=logger)]
    )

    with caplog.at_level(logging.INFO, logger=logger.name):
        container.dispatch(Command("INC"))

    messages = [r.getMessage() for r in caplog.records if r.name == logger.name]
    assert messages == [
        "Command: Command(tag='INC', payload=None)",
        "Before state: State(count=0)",
        "After state: State(count=1)",
    ]
    assert {r.dispatch_id for r in caplog.records if r.name == logger.name} == {"1"}


def test_logging_interceptor_numbers_dispatches(caplog):
    logger = logging.getLogger("statecell.tests.logging_ids")
    container = StateContainer.create(
        State.of(count=0), _counter(), [logging_interceptor(logger=logger)]
    )

    with caplog.at_level(logging.INFO, logger=logger.name):
        container.dispatch(Command("INC"))
        container.dispatch(Command("INC"))

    ids = [r.dispatch_id for r in caplog.records if r.name == logger.name]
    assert ids == ["1", "1", "1", "2", "2", "2"]


def test_procedure_interceptor_runs_body_with_dispatch_and_get_state():
    container = StateContainer.create(State.of(count=5), _counter(), [procedure_interceptor])
    seen = {}

    def body(dispatch, get_state):
        seen["state"] = get_state()
        seen["dispatch"] = dispatch
        return "scheduled"

    result = container.dispatch(Procedure("LATER", body))

    assert result == "scheduled"
    assert seen["state"] == State.of(count=5)
    assert seen["dispatch"] == container.dispatch
    assert container.get_state() == State.of(count=5)


def test_procedure_with_timer_dispatches_later_through_full_chain():
    timer = ManualTimer()
    log = []

    def recorder(container):
        def wrap(next_fn):
            def dispatch(cmd):
                log.append(cmd.tag)
                return next_fn(cmd)

            return dispatch

        return wrap

    container = StateContainer.create(
        State.of(count=0), _counter(), [recorder, procedure_interceptor]
    )
    notified = []
    container.subscribe(lambda: notified.append(container.get_state()["count"]))

    container.dispatch(
        Procedure("LATER", lambda dispatch, get_state: timer.call_later(10, lambda: dispatch(Command("INC"))))
    )
    assert container.get_state() == State.of(count=0)
    assert notified == []

    timer.advance(10)

    assert container.get_state() == State.of(count=1)
    assert log == ["LATER", "INC"]
    assert notified == [1]


def test_procedure_that_never_dispatches_is_fine():
    container = StateContainer.create(State.of(count=0), _counter(), [procedure_interceptor])

    assert container.dispatch(Procedure("IDLE", lambda dispatch, get_state: None)) is None
    assert container.get_state() == State.of(count=0)


def test_effect_interceptor_hands_back_unexecuted_effect():
    container = StateContainer.create(State.of(count=0), _counter(), [effect_interceptor])
    runs = []

    def load():
        runs.append(1)
        return 42

    effect = container.dispatch(Command("SET", DeferredEffect(load)))

    assert isinstance(effect, DeferredEffect)
    assert runs == []
    assert container.get_state() == State.of(count=0)

    result = effect.run()

    assert runs == [1]
    assert result == State.of(count=42)
    assert container.get_state() == State.of(count=42)


def test_effect_interceptor_forwards_plain_commands():
    container = StateContainer.create(State.of(count=0), _counter(), [effect_interceptor])

    assert container.dispatch(Command("INC")) == State.of(count=1)


def test_effect_interceptor_failure_leaves_state():
    container = StateContainer.create(State.of(count=0), _counter(), [effect_interceptor])

    def fail():
        raise OSError("disk gone")

    effect = container.dispatch(Command("SET", DeferredEffect(fail)))

    with pytest.raises(EffectExecutionError):
        effect.run()
    assert container.get_state() == State.of(count=0)


def test_effect_run_inside_dispatch_is_reentrant():
    """Running the handed-back effect from a subscriber violates the guard."""
    container = StateContainer.create(State.of(count=0), _counter(), [effect_interceptor])
    effect = container.dispatch(Command("SET", DeferredEffect.of(3)))
    container.subscribe(effect.run)

    with pytest.raises(ReentrantDispatchError):
        container.dispatch(Command("INC"))


def test_filter_interceptor_short_circuits_rejected_commands():
    container = StateContainer.create(
        State.of(count=0), _counter(), [filter_interceptor(lambda cmd: cmd.tag != "INC")]
    )
    calls = []
    container.subscribe(lambda: calls.append(1))

    assert container.dispatch(Command("INC")) == State.of(count=0)
    assert calls == []

    container.dispatch(Command("SET", 9))
    assert container.get_state() == State.of(count=9)
    assert calls == [1]
