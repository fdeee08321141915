"""
DeferredEffect: impure operations described as values.

A DeferredEffect wraps a zero-argument operation. Building, mapping or
chaining an effect never executes anything; only run() does, and it does
so on every call unless the effect was wrapped with memoize().

Laws (checked in tests):
    Left identity:  DeferredEffect.of(x).chain(f)  ==  f(x)
    Right identity: e.chain(DeferredEffect.of)      ==  e
    Associativity:  e.chain(f).chain(g)            ==  e.chain(lambda x: f(x).chain(g))
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from ..core.errors import EffectExecutionError, StateCellError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class DeferredEffect(Generic[T]):
    """
    Lazily evaluated, composable wrapper around an effectful operation.

    Fields:
        operation: Zero-argument callable producing T

    Instances are immutable; map() and chain() return new effects closing
    over this one.

    Example:
        >>> reads = DeferredEffect.delay(open, "settings.json").map(lambda f: f.read())
        >>> text = reads.run()  # file is opened here, not above
    """
    operation: Callable[[], T]

    def __post_init__(self) -> None:
        if not callable(self.operation):
            raise TypeError(
                f"DeferredEffect operation must be callable, got {type(self.operation).__name__}"
            )

    @staticmethod
    def of(value: U) -> "DeferredEffect[U]":
        """Effect that returns value without doing anything else."""
        return DeferredEffect(lambda: value)

    @staticmethod
    def delay(fn: Callable[..., U], *args: Any, **kwargs: Any) -> "DeferredEffect[U]":
        """Effect that calls fn(*args, **kwargs) when run."""
        return DeferredEffect(functools.partial(fn, *args, **kwargs))

    def map(self, f: Callable[[T], U]) -> "DeferredEffect[U]":
        """
        Apply f to this effect's result.

        This is the functor operation for effects. Neither this effect nor f
        runs until the returned effect is run.

        Args:
            f: Function applied to the result

        Returns:
            New DeferredEffect producing f(result)
        """
        return DeferredEffect(lambda: f(self.run()))

    def chain(self, f: Callable[[T], "DeferredEffect[U]"]) -> "DeferredEffect[U]":
        """
        Sequence this effect with the effect f builds from its result.

        This is the monadic bind for effects.

        Args:
            f: Function from this effect's result to a new DeferredEffect

        Returns:
            New DeferredEffect that runs this effect, then f(result)
        """

        def bound() -> U:
            nxt = f(self.run())
            if not isinstance(nxt, DeferredEffect):
                raise TypeError(
                    f"chain() function must return a DeferredEffect, got {type(nxt).__name__}"
                )
            return nxt.run()

        return DeferredEffect(bound)

    def then(self, other: "DeferredEffect[U]") -> "DeferredEffect[U]":
        """Run this effect, discard its result, then run other."""
        return self.chain(lambda _: other)

    def memoize(self, cache_errors: bool = False) -> "MemoizedEffect[T]":
        """
        Wrap this effect so the operation runs at most once.

        Args:
            cache_errors: Also cache a failure and re-raise it on later runs.
                When False, a failed run leaves the effect unevaluated.

        Returns:
            MemoizedEffect sharing one cache across all its runs
        """
        return MemoizedEffect(operation=self.run, cache_errors=cache_errors)

    def run(self) -> T:
        """
        Execute the operation now, synchronously.

        Returns:
            The operation's result

        Raises:
            EffectExecutionError: If the operation (or a map/chain function) fails.
                The original exception is chained as __cause__.
        """
        try:
            return self.operation()
        except StateCellError:
            raise
        except Exception as e:
            logger.debug("Deferred operation failed: %r", e)
            raise EffectExecutionError(f"Deferred operation failed: {e}") from e


class _MemoCell:
    __slots__ = ("evaluated", "value", "error")

    def __init__(self) -> None:
        self.evaluated = False
        self.value: Any = None
        self.error: Optional[BaseException] = None


@dataclass(frozen=True)
class MemoizedEffect(DeferredEffect[T]):
    """
    DeferredEffect that evaluates its operation at most once.

    Starts Unevaluated; the first successful run() moves it to Evaluated and
    every later run() returns the cached value. With cache_errors=True a
    failure is cached too.
    """
    cache_errors: bool = False
    _cell: _MemoCell = field(default_factory=_MemoCell, repr=False, compare=False)

    @property
    def evaluated(self) -> bool:
        return self._cell.evaluated

    def run(self) -> T:
        cell = self._cell
        if cell.evaluated:
            if cell.error is not None:
                raise cell.error
            return cell.value
        try:
            value = super().run()
        except EffectExecutionError as e:
            if self.cache_errors:
                cell.evaluated = True
                cell.error = e
            raise
        cell.evaluated = True
        cell.value = value
        return value


def sequence(effects: Iterable[DeferredEffect[Any]]) -> DeferredEffect[List[Any]]:
    """
    Compose effects to execute in order.

    Returns:
        DeferredEffect that runs every effect in order and returns all results.

    Example:
        >>> seq = sequence([DeferredEffect.of(1), DeferredEffect.delay(print, "hi")])
        >>> seq.run()
        hi
        [1, None]
    """
    items = tuple(effects)
    for item in items:
        if not isinstance(item, DeferredEffect):
            raise TypeError(f"sequence() expects DeferredEffect items, got {type(item).__name__}")
    return DeferredEffect(lambda: [item.run() for item in items])
