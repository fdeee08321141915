"""
StateContainer: one mutable state cell behind a pure transition function.

Callers own the container instance; there is no process-wide store.
"""

import itertools
import logging
from typing import Any, Callable, Dict, Generic, Iterable, TypeVar

from ..core.commands import Procedure
from ..core.errors import (
    ConfigurationError,
    ReentrantDispatchError,
    StateCellError,
    TransitionError,
)
from .chain import DispatchFn, Interceptor, InterceptorChain

logger = logging.getLogger(__name__)

S = TypeVar("S")

Subscriber = Callable[[], Any]
Unsubscribe = Callable[[], None]


def _tag_of(command: Any) -> str:
    return getattr(command, "tag", type(command).__name__)


class StateContainer(Generic[S]):
    """
    Synchronous state container with an interceptor pipeline.

    Dispatch flow:
        dispatch(cmd) -> i1 -> i2 -> ... -> iN -> transition -> store -> notify

    Guarantees:
    - State is only ever produced by the transition function
    - One dispatch at a time: calling dispatch() while a dispatch is in
      progress (from an interceptor, the transition function or a subscriber)
      raises ReentrantDispatchError
    - Subscribers run synchronously, in registration order, over a snapshot
      taken before the notification pass, after state has been stored
    - Every dispatch that reaches the transition function notifies, even if
      the transition returns the same state; short-circuited dispatches do not

    Usage:
        container = StateContainer.create(State.of(count=0), reducer, [logging_interceptor()])
        unsubscribe = container.subscribe(lambda: print(container.get_state()))
        container.dispatch(Command("INCREMENT"))
    """

    def __init__(
        self,
        initial_state: S,
        transition: Callable[[S, Any], S],
        interceptors: Iterable[Interceptor] = (),
    ) -> None:
        if transition is None:
            raise ConfigurationError("A transition function is required")
        if not callable(transition):
            raise ConfigurationError(
                f"Transition function must be callable, got {type(transition).__name__}"
            )

        self._state = initial_state
        self._transition = transition
        self._subscribers: Dict[int, Subscriber] = {}
        self._tokens = itertools.count()
        self._dispatching = False
        self._chain = InterceptorChain(interceptors)

        # Interceptor factories may keep a reference to dispatch but must not
        # call it while the chain is being built.
        self._dispatch_fn: DispatchFn = self._dispatch_while_building
        self._dispatch_fn = self._chain.compile(self, self._apply)
        logger.debug("Container created with %d interceptor(s): %r", len(self._chain), self._chain)

    @classmethod
    def create(
        cls,
        initial_state: S,
        transition: Callable[[S, Any], S],
        interceptors: Iterable[Interceptor] = (),
    ) -> "StateContainer[S]":
        return cls(initial_state, transition, interceptors)

    @property
    def is_dispatching(self) -> bool:
        return self._dispatching

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def get_state(self) -> S:
        """Current state snapshot."""
        return self._state

    def dispatch(self, command: Any) -> Any:
        """
        Send command through the interceptor chain.

        Args:
            command: Command or Procedure

        Returns:
            Whatever the outermost interceptor returns: normally the new
            state, or a value an interceptor produced instead (for example an
            unexecuted DeferredEffect)

        Raises:
            ReentrantDispatchError: If called during another dispatch
            TransitionError: If the transition function fails
        """
        if self._dispatching:
            raise ReentrantDispatchError(
                f"Cannot dispatch {_tag_of(command)!r} while another dispatch is in progress"
            )
        self._dispatching = True
        try:
            return self._dispatch_fn(command)
        finally:
            self._dispatching = False

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """
        Register a zero-argument callback run after each state update.

        Each call registers a separate subscription, even for the same callable.

        Args:
            callback: Called with no arguments; read state via get_state()

        Returns:
            Idempotent unsubscribe function
        """
        if not callable(callback):
            raise ConfigurationError(
                f"Subscriber must be callable, got {type(callback).__name__}"
            )
        token = next(self._tokens)
        self._subscribers[token] = callback

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def _dispatch_while_building(self, command: Any) -> Any:
        raise ConfigurationError(
            f"Cannot dispatch {_tag_of(command)!r} while interceptors are being constructed"
        )

    def _apply(self, command: Any) -> S:
        # Terminal link of the chain
        if isinstance(command, Procedure):
            raise ConfigurationError(
                f"Procedure {command.tag!r} reached the transition function; "
                "install procedure_interceptor to run procedures"
            )

        previous = self._state
        try:
            new_state = self._transition(previous, command)
        except StateCellError:
            raise
        except Exception as e:
            logger.warning("Transition failed for %r: %s", _tag_of(command), e)
            raise TransitionError(
                f"Transition function failed on {_tag_of(command)!r}: {e}", command=command
            ) from e

        self._state = new_state
        self._notify(command)
        return new_state

    def _notify(self, command: Any) -> None:
        listeners = list(self._subscribers.values())
        logger.debug("Notifying %d subscriber(s) after %r", len(listeners), _tag_of(command))
        for listener in listeners:
            listener()
