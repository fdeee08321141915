"""
State container and its interceptor pipeline.
"""

from .chain import DispatchFn, Interceptor, InterceptorChain, compose
from .container import StateContainer
from .interceptors import (
    effect_interceptor,
    filter_interceptor,
    logging_interceptor,
    procedure_interceptor,
    recording_interceptor,
)
from .selectors import watch

__all__ = [
    "DispatchFn",
    "Interceptor",
    "InterceptorChain",
    "compose",
    "StateContainer",
    "effect_interceptor",
    "filter_interceptor",
    "logging_interceptor",
    "procedure_interceptor",
    "recording_interceptor",
    "watch",
]
