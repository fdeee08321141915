"""
statecell

Synchronous state container: one state cell updated by a pure transition
function, wrapped by an ordered interceptor pipeline, plus DeferredEffect
for describing impure operations as values.
"""

__version__ = "0.1.0"

from .core import (
    Command,
    ConfigurationError,
    EffectExecutionError,
    Procedure,
    ReentrantDispatchError,
    Reducer,
    State,
    StateCellError,
    TransitionError,
    combine_reducers,
)
from .effects import DeferredEffect, sequence
from .store import (
    InterceptorChain,
    StateContainer,
    effect_interceptor,
    filter_interceptor,
    logging_interceptor,
    procedure_interceptor,
    watch,
)

__all__ = [
    "Command",
    "ConfigurationError",
    "EffectExecutionError",
    "Procedure",
    "ReentrantDispatchError",
    "Reducer",
    "State",
    "StateCellError",
    "TransitionError",
    "combine_reducers",
    "DeferredEffect",
    "sequence",
    "InterceptorChain",
    "StateContainer",
    "effect_interceptor",
    "filter_interceptor",
    "logging_interceptor",
    "procedure_interceptor",
    "watch",
]
