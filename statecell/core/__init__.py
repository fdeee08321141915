"""
Core state primitives.

This module provides the foundational abstractions for the container:
- Command / Procedure: Immutable intents submitted to a container
- State: Immutable snapshot
- Reducer: Pure per-tag transition functions
- Canonical: Deterministic serialization
"""

from .commands import AnyCommand, Command, Procedure, command, is_procedure
from .state import State
from .reducer import Reducer, TransitionFunction, combine_reducers
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, state_hash
from .errors import (
    StateCellError,
    ConfigurationError,
    ReentrantDispatchError,
    TransitionError,
    EffectExecutionError,
)

__all__ = [
    "AnyCommand",
    "Command",
    "Procedure",
    "command",
    "is_procedure",
    "State",
    "Reducer",
    "TransitionFunction",
    "combine_reducers",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "state_hash",
    "StateCellError",
    "ConfigurationError",
    "ReentrantDispatchError",
    "TransitionError",
    "EffectExecutionError",
]
