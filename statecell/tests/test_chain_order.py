"""
Tests for interceptor composition order.

Critical: The first registered interceptor is outermost (onion order).
"""

import pytest

from statecell.core.commands import Command
from statecell.core.errors import ConfigurationError
from statecell.core.reducer import Reducer
from statecell.core.state import State
from statecell.store.chain import InterceptorChain, compose
from statecell.store.container import StateContainer
from statecell.store.interceptors import recording_interceptor


def _counter():
    r = Reducer()
    r.register("INC", lambda cur, cmd: cur.with_fields(count=cur["count"] + 1))
    return r


def test_compose_right_to_left():
    def add_one(x):
        return x + 1

    def double(x):
        return x * 2

    assert compose(add_one, double)(3) == 7
    assert compose(double, add_one)(3) == 8
    assert compose()(5) == 5
    assert compose(add_one)(5) == 6


def test_onion_order_two_interceptors():
    """A sees the command before B and the result after B."""
    log = []
    container = StateContainer.create(
        State.of(count=0),
        _counter(),
        [recording_interceptor(log, "A"), recording_interceptor(log, "B")],
    )

    container.dispatch(Command("INC"))

    assert log == [
        ("enter", "A", "INC"),
        ("enter", "B", "INC"),
        ("exit", "B", "INC"),
        ("exit", "A", "INC"),
    ]


def test_onion_order_many_interceptors():
    log = []
    names = ["i1", "i2", "i3", "i4"]
    container = StateContainer.create(
        State.of(count=0), _counter(), [recording_interceptor(log, n) for n in names]
    )

    container.dispatch(Command("INC"))

    entered = [name for kind, name, _ in log if kind == "enter"]
    exited = [name for kind, name, _ in log if kind == "exit"]
    assert entered == names
    assert exited == list(reversed(names))


def test_outer_interceptor_sees_post_state():
    """An outer interceptor observes the state written by the terminal step."""
    observed = []

    def observer(container):
        def wrap(next_fn):
            def dispatch(cmd):
                observed.append(("before", container.get_state()["count"]))
                result = next_fn(cmd)
                observed.append(("after", container.get_state()["count"]))
                return result

            return dispatch

        return wrap

    container = StateContainer.create(State.of(count=0), _counter(), [observer])
    container.dispatch(Command("INC"))

    assert observed == [("before", 0), ("after", 1)]


def test_interceptor_transforms_command():
    """An interceptor may forward a different command."""

    def rename(container):
        def wrap(next_fn):
            def dispatch(cmd):
                if cmd.tag == "PLUS":
                    return next_fn(Command("INC"))
                return next_fn(cmd)

            return dispatch

        return wrap

    container = StateContainer.create(State.of(count=0), _counter(), [rename])
    container.dispatch(Command("PLUS"))

    assert container.get_state() == State.of(count=1)


def test_interceptor_short_circuits():
    """Returning without calling next skips inner links and notifications."""
    log = []

    def blocker(container):
        def wrap(next_fn):
            def dispatch(cmd):
                return "blocked"

            return dispatch

        return wrap

    container = StateContainer.create(
        State.of(count=0),
        _counter(),
        [recording_interceptor(log, "outer"), blocker, recording_interceptor(log, "inner")],
    )
    calls = []
    container.subscribe(lambda: calls.append(1))

    assert container.dispatch(Command("INC")) == "blocked"
    assert container.get_state() == State.of(count=0)
    assert calls == []
    assert log == [("enter", "outer", "INC"), ("exit", "outer", "INC")]


def test_factories_receive_the_container():
    received = []

    def capture(container):
        received.append(container)
        return lambda next_fn: next_fn

    container = StateContainer.create(State.of(count=0), _counter(), [capture])

    assert received == [container]


def test_chain_is_immutable_snapshot_of_input_list():
    """Mutating the list after construction has no effect."""
    log = []
    interceptors = [recording_interceptor(log, "A")]
    container = StateContainer.create(State.of(count=0), _counter(), interceptors)
    interceptors.append(recording_interceptor(log, "B"))

    container.dispatch(Command("INC"))

    assert {name for _, name, _ in log} == {"A"}


def test_interceptor_chain_len_iter_repr():
    a = recording_interceptor([], "A")
    b = recording_interceptor([], "B")
    chain = InterceptorChain([a, b])

    assert len(chain) == 2
    assert list(chain) == [a, b]
    assert "recording_interceptor[A]" in repr(chain)


def test_interceptor_chain_accepts_none_as_empty():
    assert len(InterceptorChain(None)) == 0


def test_interceptor_chain_rejects_non_callable():
    with pytest.raises(ConfigurationError):
        InterceptorChain([object()])
