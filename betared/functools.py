import functools
import logging
import weakref
from collections.abc import Callable, Hashable
from typing import Any, NewType, ParamSpec, TypeVar

from .hashcons import intern
from .metrics import COUNTERS

logger = logging.getLogger(__name__)
counter = COUNTERS[__name__]

Qualname = NewType("Qualname", str)
A = ParamSpec("A")
B = TypeVar("B")

# Args of these types are keyed by value rather than by identity.
_ATOMS = (int, float, str)


def qualname(x: Callable) -> Qualname:
    """Returns the fully qualified name of a function or callable object."""
    while isinstance(x, functools.partial):
        x = x.func
    if hasattr(x, "__qualname__"):
        return Qualname(f"{x.__module__}.{x.__qualname__}")
    cls = type(x)
    return Qualname(f"{cls.__module__}.{cls.__qualname__}")


def _is_atom(x: Any) -> bool:
    return x is None or isinstance(x, _ATOMS)


def _make_key(args: tuple, kwargs: dict[str, Any]) -> tuple[Hashable, list[object]]:
    items: list[tuple[str | None, Any]] = [(None, v) for v in args]
    items.extend(sorted(kwargs.items()))
    key: list[Hashable] = []
    objects: list[object] = []
    for k, v in items:
        if _is_atom(v):
            key.append((k, v))
        else:
            key.append((k, id(v)))
            objects.append(v)
    assert objects, "weak_key_cache requires at least one hash cons'd arg"
    return tuple(key), objects


def weak_key_cache(func: Callable[A, B]) -> Callable[A, B]:
    """
    Memoize a function of hash cons'd args.

    Entries are keyed on the identity of the interned args and are evicted when
    any of those args is garbage collected, so caching never keeps a term alive.
    """
    cache: dict[Hashable, B] = {}
    name = qualname(func)
    hit = name + ".hit"
    miss = name + ".miss"

    @functools.wraps(func)
    def memoized_func(*args: A.args, **kwargs: A.kwargs) -> B:
        args = tuple(a if _is_atom(a) else intern(a) for a in args)  # type: ignore
        kwargs = {
            k: v if _is_atom(v) else intern(v) for k, v in kwargs.items()
        }  # type: ignore[assignment]

        key, objects = _make_key(args, kwargs)
        try:
            result = cache[key]
        except KeyError:
            counter[miss] += 1
        else:
            counter[hit] += 1
            return result

        result = func(*args, **kwargs)

        cache[key] = result
        for arg in objects:
            f = weakref.finalize(arg, cache.pop, key, None)
            f.atexit = False
        return result

    memoized_func.cache = cache  # type: ignore

    return memoized_func
