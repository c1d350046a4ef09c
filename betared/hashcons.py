"""
# Hash consing of immutable values.

Interning guarantees that structurally equal terms are the same Python object,
so that per-term caches (see `betared.functools.weak_key_cache`) are shared
across every occurrence of a subterm.
"""

import sys
from abc import ABCMeta
from collections.abc import Hashable
from typing import TypeVar
from weakref import WeakKeyDictionary, ref

from .metrics import COUNTERS

counter = COUNTERS[__name__]

_V = TypeVar("_V", bound=Hashable)
_INTERN: WeakKeyDictionary[Hashable, ref[Hashable]] = WeakKeyDictionary()


def intern(x: _V) -> _V:
    """Return a canonical object for `x`, useful for hash consing."""
    if x is None or x is False or x is True:
        return x  # type: ignore
    if isinstance(x, str):
        return sys.intern(x)  # type: ignore
    try:
        result = _INTERN[x]()
    except KeyError:
        result = None
    if result is not None:
        counter["hit"] += 1
        return result  # type: ignore
    counter["miss"] += 1
    _INTERN[x] = ref(x)
    return x


class HashConsMeta(ABCMeta):
    """Metaclass to hash cons instances of frozen dataclasses."""

    def __call__(self, *args, **kwargs):  # type: ignore
        return intern(super().__call__(*args, **kwargs))

    def __new__(mcs, name, bases, namespace):  # type: ignore
        # Interned values are immutable, so a copy is the value itself.
        def __copy__(self):  # type: ignore
            return self

        def __deepcopy__(self, memo):  # type: ignore
            return self

        # Round trip through the constructor so unpickled values are interned.
        def __reduce__(self):  # type: ignore
            args = tuple(getattr(self, f) for f in self.__dataclass_fields__)
            return type(self), args

        namespace["__copy__"] = __copy__
        namespace["__deepcopy__"] = __deepcopy__
        namespace["__reduce__"] = __reduce__
        return super().__new__(mcs, name, bases, namespace)
