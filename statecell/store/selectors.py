"""
Change-filtered subscriptions.

watch() derives a value from state with a selector and only calls back when
that value changes between notifications.
"""

import operator
from typing import Any, Callable

from .container import StateContainer, Unsubscribe


def watch(
    container: StateContainer,
    selector: Callable[[Any], Any],
    on_change: Callable[[Any, Any], Any],
    equals: Callable[[Any, Any], bool] = operator.eq,
) -> Unsubscribe:
    """
    Subscribe to changes of a selected value.

    The selector is evaluated once now to record the starting value, then
    after every notification. on_change(new, old) runs only when
    equals(old, new) is false.

    Args:
        container: Container to observe
        selector: Function state -> value
        on_change: Callback (new_value, old_value)
        equals: Equality used to detect a change (default ==)

    Returns:
        Unsubscribe function
    """
    last = [selector(container.get_state())]

    def listener() -> None:
        current = selector(container.get_state())
        previous = last[0]
        if equals(previous, current):
            return
        last[0] = current
        on_change(current, previous)

    return container.subscribe(listener)
