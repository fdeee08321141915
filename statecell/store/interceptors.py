"""
Stock interceptors.

Each factory follows the interceptor shape
    (container) -> (next_fn) -> (command) -> result
and is passed to StateContainer in the order it should wrap dispatch.
"""

import itertools
import logging
from typing import Any, Callable, List, Optional, Tuple

from ..core.commands import Command, Procedure
from ..effects.deferred import DeferredEffect
from .chain import DispatchFn, Interceptor

_default_logger = logging.getLogger(__name__)


def logging_interceptor(
    logger: Optional[logging.Logger] = None, level: int = logging.INFO
) -> Interceptor:
    """
    Log each command with the state before and after it.

    Register first so the log shows the command before any other
    interceptor acts on it and the state after all of them have finished.

    Args:
        logger: Logger to write to (default: this module's logger)
        level: Level for the log lines
    """
    log = logger or _default_logger

    def interceptor(container: Any) -> Callable[[DispatchFn], DispatchFn]:
        counter = itertools.count(1)

        def wrap(next_fn: DispatchFn) -> DispatchFn:
            def dispatch(command: Any) -> Any:
                extra = {"dispatch_id": str(next(counter))}
                log.log(level, "Command: %r", command, extra=extra)
                log.log(level, "Before state: %r", container.get_state(), extra=extra)
                result = next_fn(command)
                log.log(level, "After state: %r", container.get_state(), extra=extra)
                return result

            return dispatch

        return wrap

    interceptor.__name__ = "logging_interceptor"
    return interceptor


def procedure_interceptor(container: Any) -> Callable[[DispatchFn], DispatchFn]:
    """
    Run Procedure commands instead of forwarding them.

    The body receives the container's dispatch and get_state. It runs to
    completion now; any dispatch it performs must happen later (from a timer
    callback, for example) as an independent pass through the full chain.
    """

    def wrap(next_fn: DispatchFn) -> DispatchFn:
        def dispatch(command: Any) -> Any:
            if isinstance(command, Procedure):
                _default_logger.debug("Running procedure %r", command.tag)
                return command.run(container.dispatch, container.get_state)
            return next_fn(command)

        return dispatch

    return wrap


def effect_interceptor(container: Any) -> Callable[[DispatchFn], DispatchFn]:
    """
    Hand back commands carrying a DeferredEffect as an unexecuted effect.

    For Command(tag, payload=<DeferredEffect>), dispatch returns a new
    DeferredEffect without touching state. Running it runs the payload and
    dispatches Command(tag, result), returning that dispatch's result.
    """

    def wrap(next_fn: DispatchFn) -> DispatchFn:
        def dispatch(command: Any) -> Any:
            if isinstance(command, Command) and isinstance(command.payload, DeferredEffect):
                tag = command.tag
                _default_logger.debug("Deferring effect for %r", tag)
                return command.payload.map(lambda value: container.dispatch(Command(tag, value)))
            return next_fn(command)

        return dispatch

    return wrap


def filter_interceptor(predicate: Callable[[Any], bool]) -> Interceptor:
    """
    Short-circuit commands the predicate rejects.

    Rejected commands never reach later interceptors or the transition
    function; dispatch returns the current state and nobody is notified.
    """

    def interceptor(container: Any) -> Callable[[DispatchFn], DispatchFn]:
        def wrap(next_fn: DispatchFn) -> DispatchFn:
            def dispatch(command: Any) -> Any:
                if not predicate(command):
                    _default_logger.debug("Filtered out %r", command)
                    return container.get_state()
                return next_fn(command)

            return dispatch

        return wrap

    interceptor.__name__ = "filter_interceptor"
    return interceptor


def recording_interceptor(log: List[Tuple[str, str, str]], name: str) -> Interceptor:
    """
    Append ("enter", name, tag) before and ("exit", name, tag) after next.

    Useful to observe the order interceptors run in.
    """

    def interceptor(container: Any) -> Callable[[DispatchFn], DispatchFn]:
        def wrap(next_fn: DispatchFn) -> DispatchFn:
            def dispatch(command: Any) -> Any:
                tag = getattr(command, "tag", repr(command))
                log.append(("enter", name, tag))
                result = next_fn(command)
                log.append(("exit", name, tag))
                return result

            return dispatch

        return wrap

    interceptor.__name__ = f"recording_interceptor[{name}]"
    return interceptor
