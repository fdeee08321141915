"""
Interceptor chain composition.

An interceptor is a three-level factory:

    interceptor(container) -> wrap(next_fn) -> dispatch_fn(command) -> result

Given interceptors [i1, i2, ..., iN] and a terminal dispatch T, the compiled
chain is i1(i2(...iN(T)...)): i1 sees every command first on the way in and
every result last on the way out.
"""

import functools
from typing import Any, Callable, Iterable, Iterator, Tuple

from ..core.errors import ConfigurationError

DispatchFn = Callable[[Any], Any]
Wrapper = Callable[[DispatchFn], DispatchFn]
Interceptor = Callable[[Any], Wrapper]


def compose(*fns: Callable[..., Any]) -> Callable[..., Any]:
    """
    Right-to-left function composition.

    compose(f, g, h)(x) == f(g(h(x))); compose() is the identity.
    """
    if not fns:
        return lambda x: x
    if len(fns) == 1:
        return fns[0]
    return functools.reduce(lambda f, g: lambda *a, **kw: f(g(*a, **kw)), fns)


def _interceptor_name(fn: Callable[..., Any]) -> str:
    if hasattr(fn, "__name__"):
        return fn.__name__
    if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
        return fn.func.__name__
    return repr(fn)


def _checked(wrapper: Any, name: str) -> Wrapper:
    if not callable(wrapper):
        raise ConfigurationError(
            f"Interceptor {name} must return a callable taking next, got {type(wrapper).__name__}"
        )

    def link(next_fn: DispatchFn) -> DispatchFn:
        dispatch_fn = wrapper(next_fn)
        if not callable(dispatch_fn):
            raise ConfigurationError(
                f"Interceptor {name} must return a dispatch callable, got {type(dispatch_fn).__name__}"
            )
        return dispatch_fn

    return link


class InterceptorChain:
    """
    Ordered, immutable list of interceptor factories.

    Usage:
        chain = InterceptorChain([logging_interceptor(), procedure_interceptor])
        dispatch = chain.compile(container, terminal)
    """

    def __init__(self, interceptors: Iterable[Interceptor] = ()) -> None:
        if interceptors is None:
            interceptors = ()
        items: Tuple[Interceptor, ...] = tuple(interceptors)
        for index, item in enumerate(items):
            if not callable(item):
                raise ConfigurationError(
                    f"Interceptor at position {index} is not callable: {item!r}"
                )
        self._interceptors = items

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(self._interceptors)

    def __repr__(self) -> str:
        names = ", ".join(_interceptor_name(i) for i in self._interceptors)
        return f"InterceptorChain([{names}])"

    def compile(self, container: Any, terminal: DispatchFn) -> DispatchFn:
        """
        Build the single dispatch callable for a container.

        Factories are called in registration order with the container, then
        the wrappers are composed so the first one is outermost.

        Args:
            container: Object exposing get_state() and dispatch()
            terminal: Innermost dispatch (applies the transition function)

        Returns:
            Compiled dispatch callable

        Raises:
            ConfigurationError: If a factory or wrapper returns a non-callable
        """
        links = [
            _checked(factory(container), _interceptor_name(factory))
            for factory in self._interceptors
        ]
        return compose(*links)(terminal)
