"""
Exception types for the state container.
"""

from typing import Any, Optional


class StateCellError(Exception):
    """Base class for all container and effect errors."""
    pass


class ConfigurationError(StateCellError):
    """Raised when a container is built without a transition function or with a malformed interceptor."""
    pass


class ReentrantDispatchError(StateCellError):
    """Raised when dispatch is called while another dispatch on the same container is running."""
    pass


class TransitionError(StateCellError):
    """
    Raised when the transition function fails.

    The original exception is chained as __cause__. State is left at its
    pre-dispatch value and no subscriber is notified.
    """

    def __init__(self, message: str, command: Optional[Any] = None) -> None:
        super().__init__(message)
        self.command = command


class EffectExecutionError(StateCellError):
    """Raised when the operation wrapped by a DeferredEffect fails during run()."""
    pass
