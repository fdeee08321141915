"""
Replay of command sequences.

Replay applies the transition function to a command stream to reconstruct
state. Must be deterministic: same commands -> same state.
"""

from .runner import ReplayResult, load_commands, replay

__all__ = [
    "ReplayResult",
    "load_commands",
    "replay",
]
