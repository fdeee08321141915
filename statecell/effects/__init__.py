"""
Deferred effects.

Impure operations described as values and executed only on explicit run().
"""

from .deferred import DeferredEffect, MemoizedEffect, sequence

__all__ = [
    "DeferredEffect",
    "MemoizedEffect",
    "sequence",
]
