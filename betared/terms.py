"""
# Terms of the untyped λ-calculus with named variables.

Terms are one of exactly three shapes, each a frozen hash-consed dataclass:

- `Variable(name)`, written `x`;
- `Abstraction(var, body)`, written `(\\x.body)`;
- `Application(lhs, rhs)`, written `[lhs rhs]`.

Variables are identified purely by name, with no scoping information and no
de Bruijn indices. Because terms are immutable and interned, structurally equal
terms are the same Python object and may be freely shared between parents.

The canonical rendering produced by `render()` (and `str()`) is the equality
oracle used by the reduction driver; `==` is structural equality and
`alpha_equivalent()` compares terms up to renaming of bound variables.
"""

import inspect
import types
from collections.abc import Hashable
from dataclasses import dataclass
from functools import cache, singledispatch
from typing import Any

from immutables import Map

from .functools import weak_key_cache
from .hashcons import HashConsMeta


class _Term(metaclass=HashConsMeta):
    """Behavior shared by all term shapes."""

    __slots__ = ()

    def __call__(self, *args: Any) -> "Term":
        return app(self, *args)

    def __str__(self) -> str:
        return render(self)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True, weakref_slot=True, eq=False)
class Variable(_Term):
    """A variable, identified by its name."""

    name: str

    def __eq__(self, other: object) -> bool:
        return type(other) is Variable and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"VAR({self.name!r})"


@dataclass(frozen=True, slots=True, weakref_slot=True, eq=False)
class Abstraction(_Term):
    """A function binding `var` in `body`."""

    var: Variable
    body: "Term"

    # Children are interned, so identity of children determines structure.
    def __eq__(self, other: object) -> bool:
        return (
            type(other) is Abstraction
            and self.var is other.var
            and self.body is other.body
        )

    def __hash__(self) -> int:
        return hash((Abstraction, id(self.var), id(self.body)))

    def __repr__(self) -> str:
        return f"ABS({self.var!r}, {self.body!r})"


@dataclass(frozen=True, slots=True, weakref_slot=True, eq=False)
class Application(_Term):
    """An application of `lhs` as a function to the argument `rhs`."""

    lhs: "Term"
    rhs: "Term"

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is Application
            and self.lhs is other.lhs
            and self.rhs is other.rhs
        )

    def __hash__(self) -> int:
        return hash((Application, id(self.lhs), id(self.rhs)))

    def __repr__(self) -> str:
        return f"APP({self.lhs!r}, {self.rhs!r})"


Term = Variable | Abstraction | Application


# Term constructors.


def VAR(name: str) -> Variable:
    """Create a variable term. Names are not validated."""
    return Variable(name)


def ABS(var: Any, body: Any) -> Abstraction:
    """Create an abstraction binding `var` in `body`."""
    var = to_term(var)
    if not isinstance(var, Variable):
        raise TypeError(f"Expected a variable to bind, got {var}")
    return Abstraction(var, to_term(body))


def APP(lhs: Any, rhs: Any) -> Application:
    """Create an application term."""
    return Application(to_term(lhs), to_term(rhs))


def app(*args: Any) -> Term:
    """Left-associated chained application `[[[f a] b] ...]`."""
    assert args
    result = to_term(args[0])
    for arg in args[1:]:
        result = APP(result, arg)
    return result


def lam(*args: Any) -> Term:
    """Curried abstraction: `lam(x, y, body)` is `ABS(x, ABS(y, body))`."""
    assert args
    result = to_term(args[-1])
    for var in reversed(args[:-1]):
        result = ABS(var, result)
    return result


# Rendering.


@weak_key_cache
def render(term: Term) -> str:
    """Canonical textual form, used both for display and as equality oracle."""
    if isinstance(term, Variable):
        return term.name
    if isinstance(term, Abstraction):
        return f"(\\{term.var.name}.{render(term.body)})"
    if isinstance(term, Application):
        return f"[{render(term.lhs)} {render(term.rhs)}]"
    raise TypeError(f"Unknown term type: {type(term).__name__}")


# Convenience syntax.


@singledispatch
def to_term(pythonic: Any) -> Term:
    """Convert a Python object to a Term using higher-order abstract syntax.

    Handles:
    - Term objects directly
    - strings -> variables
    - non-negative ints -> Church numerals
    - Python functions -> abstractions, binding the function's parameter names
    """
    raise TypeError(f"Unsupported Python object type: {type(pythonic)}")


@to_term.register(Variable)
@to_term.register(Abstraction)
@to_term.register(Application)
def _(pythonic: Term) -> Term:
    return pythonic


@to_term.register
def _(pythonic: str) -> Term:
    return VAR(pythonic)


@to_term.register(types.FunctionType)
def _(pythonic: types.FunctionType) -> Term:
    """Apply the function to variables named after its parameters."""
    names = list(inspect.signature(pythonic).parameters)
    if not names:
        raise TypeError("Cannot abstract over a function with no parameters")
    result = to_term(pythonic(*map(VAR, names)))
    for name in reversed(names):
        result = ABS(VAR(name), result)
    return result


@to_term.register
def _(pythonic: bool) -> Term:
    raise TypeError("Booleans have no implicit term encoding")


@to_term.register(int)
@cache
def _(pythonic: int) -> Term:
    """Church numeral `\\f.\\x.f (f ... (f x))`."""
    if pythonic < 0:
        raise ValueError(f"Not a Church numeral: {pythonic!r}")
    f = VAR("f")
    x = VAR("x")
    result: Term = x
    for _ in range(pythonic):
        result = APP(f, result)
    return ABS(f, ABS(x, result))


# Queries.

_EMPTY_NAMES: frozenset[str] = frozenset()


@weak_key_cache
def free_vars(term: Term) -> frozenset[str]:
    """Names of the variables occurring free in a term."""
    if isinstance(term, Variable):
        return frozenset((term.name,))
    if isinstance(term, Abstraction):
        return free_vars(term.body) - {term.var.name}
    if isinstance(term, Application):
        return free_vars(term.lhs) | free_vars(term.rhs)
    raise TypeError(f"Unknown term type: {type(term).__name__}")


def is_closed(term: Term) -> bool:
    """Returns whether a term is closed, i.e. has no free variables."""
    return free_vars(term) == _EMPTY_NAMES


@weak_key_cache
def is_normal(term: Term) -> bool:
    """Returns whether a term contains no syntactic beta redex."""
    if isinstance(term, Variable):
        return True
    if isinstance(term, Abstraction):
        return is_normal(term.body)
    if isinstance(term, Application):
        if isinstance(term.lhs, Abstraction):
            return False  # unreduced beta redex
        return is_normal(term.lhs) and is_normal(term.rhs)
    raise TypeError(f"Unknown term type: {type(term).__name__}")


@weak_key_cache
def size(term: Term) -> int:
    """Number of nodes in a term, counting binders as variables."""
    if isinstance(term, Variable):
        return 1
    if isinstance(term, Abstraction):
        return 2 + size(term.body)
    if isinstance(term, Application):
        return 1 + size(term.lhs) + size(term.rhs)
    raise TypeError(f"Unknown term type: {type(term).__name__}")


_NO_BINDERS: Map[str, int] = Map()


def to_nameless(
    term: Term, binders: Map[str, int] = _NO_BINDERS, depth: int = 0
) -> Hashable:
    """
    Convert a term to a nameless representation.

    Bound variables become de Bruijn indices and free variables keep their
    names. `binders` maps each bound name to the depth of its innermost binder.
    """
    if isinstance(term, Variable):
        level = binders.get(term.name)
        if level is None:
            return ("VAR", term.name)
        return ("IDX", depth - level - 1)
    if isinstance(term, Abstraction):
        inner = binders.set(term.var.name, depth)
        return ("ABS", to_nameless(term.body, inner, depth + 1))
    if isinstance(term, Application):
        lhs = to_nameless(term.lhs, binders, depth)
        rhs = to_nameless(term.rhs, binders, depth)
        return ("APP", lhs, rhs)
    raise TypeError(f"Unknown term type: {type(term).__name__}")


def alpha_equivalent(lhs: Term, rhs: Term) -> bool:
    """Returns whether two terms are equal up to renaming of bound variables."""
    if lhs is rhs:
        return True
    return to_nameless(lhs) == to_nameless(rhs)
