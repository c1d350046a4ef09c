"""
# A library of named closed terms.

Combinators, Church booleans, Church naturals, pairs, lists, signed integers
and a few recursive algorithms, all built from the three term constructors.

Each term is defined by a zero-argument builder decorated with `@define`. The
builder is memoized and registered under its name, so terms are only built on
first use, e.g. `get("PLUS")` or `PLUS()`.

Bound variable names matter: substitution does not rename binders, so terms
here reuse a small set of conventional names (`f`, `x`, `n`, ...) and are only
combined in ways where free names never meet a binder of the same name.
"""

import functools
from collections.abc import Callable

from .terms import Term, to_term

_DEFINITIONS: dict[str, Callable[[], Term]] = {}


def define(builder: Callable[[], Term]) -> Callable[[], Term]:
    """Register a memoized term builder under its function name."""
    name = builder.__name__
    assert name not in _DEFINITIONS, name
    cached = functools.cache(builder)
    _DEFINITIONS[name] = cached
    return cached


def get(name: str) -> Term:
    """Build the library term with the given name."""
    try:
        builder = _DEFINITIONS[name]
    except KeyError:
        raise KeyError(f"Unknown term: {name}") from None
    return builder()


def names() -> list[str]:
    """Names of all library terms, in definition order."""
    return list(_DEFINITIONS)


# Combinators.


@define
def I() -> Term:
    return to_term(lambda x: x)


@define
def K() -> Term:
    return to_term(lambda x, y: x)


@define
def S() -> Term:
    """SK combinatory calculus is Turing complete; S K K = I."""
    return to_term(lambda x, y, z: x(z, y(z)))


@define
def B() -> Term:
    return to_term(lambda x, y, z: x(y(z)))


@define
def C() -> Term:
    return to_term(lambda x, y, z: x(z, y))


@define
def W() -> Term:
    return to_term(lambda x, y: x(y, y))


@define
def U() -> Term:
    return to_term(lambda x: x(x))


@define
def Y() -> Term:
    return to_term(lambda g: to_term(lambda x: g(x(x)))(lambda x: g(x(x))))


@define
def IOTA() -> Term:
    """
    The iota combinator is Turing complete by itself:
    ```
    IOTA IOTA = I
    IOTA (IOTA (IOTA IOTA)) = K
    IOTA (IOTA (IOTA (IOTA IOTA))) = S
    ```
    """
    return to_term(lambda f: f(S(), K()))


@define
def OMEGA() -> Term:
    """Self application of U, which has no normal form."""
    return U()(U())


# Booleans.


@define
def TRUE() -> Term:
    return to_term(lambda x, y: x)


@define
def FALSE() -> Term:
    return to_term(lambda x, y: y)


@define
def NOT() -> Term:
    return to_term(lambda p: p(FALSE(), TRUE()))


@define
def AND() -> Term:
    return to_term(lambda p, q: p(q, p))


@define
def OR() -> Term:
    return to_term(lambda p, q: p(p, q))


@define
def XOR() -> Term:
    return to_term(lambda p, q: p(NOT()(q), q))


# Natural numbers.


def NAT(n: int) -> Term:
    """Church numeral for `n`; non-positive `n` gives ZERO."""
    return to_term(max(n, 0))


@define
def ZERO() -> Term:
    return NAT(0)


@define
def ONE() -> Term:
    return NAT(1)


@define
def SUCC() -> Term:
    return to_term(lambda n, f, x: f(n(f, x)))


@define
def PLUS() -> Term:
    return to_term(lambda m, n: m(SUCC(), n))


@define
def MULT() -> Term:
    return to_term(lambda m, n: m(PLUS()(n), ZERO()))


@define
def POW() -> Term:
    return to_term(lambda m, n: n(MULT()(m), ONE()))


@define
def PRED() -> Term:
    return to_term(
        lambda n, f, x: n(lambda g, h: h(g(f)), lambda u: x, lambda u: u)
    )


@define
def SUB() -> Term:
    return to_term(lambda m, n: n(PRED(), m))


@define
def ISZERO() -> Term:
    return to_term(lambda n: n(lambda x: FALSE(), TRUE()))


@define
def LEQ() -> Term:
    return to_term(lambda m, n: ISZERO()(SUB()(m, n)))


@define
def EQ() -> Term:
    return to_term(lambda m, n: AND()(LEQ()(m, n), LEQ()(n, m)))


# Pairs.


@define
def PAIR() -> Term:
    return to_term(lambda x, y, f: f(x, y))


@define
def FIRST() -> Term:
    return to_term(lambda p: p(TRUE()))


@define
def SECOND() -> Term:
    return to_term(lambda p: p(FALSE()))


# Lists, as nested pairs terminated by NIL.


@define
def NIL() -> Term:
    return to_term(lambda x: TRUE())


@define
def ISNIL() -> Term:
    return to_term(lambda p: p(lambda x, y: FALSE()))


@define
def CONS() -> Term:
    return to_term(lambda h, t: PAIR()(h, t))


@define
def HEAD() -> Term:
    return FIRST()


@define
def TAIL() -> Term:
    return SECOND()


@define
def INDEX() -> Term:
    return Y()(
        lambda f, l, n: ISZERO()(n, HEAD()(l), f(TAIL()(l), PRED()(n)))
    )


# Signed integers, as pairs (positive part, negative part) of naturals.


def INT(n: int) -> Term:
    """
    Normalized signed integer for `n`, i.e. one side of the pair is ZERO.

    Arithmetic on signed integers stops at pairs whose components are still
    unreduced, because a stuck head never reduces its argument. Results are
    only meaningful after projecting with FIRST or SECOND.
    """
    if n >= 0:
        return to_term(lambda f: f(NAT(n), ZERO()))
    return to_term(lambda f: f(ZERO(), NAT(-n)))


@define
def CONVERT() -> Term:
    """Convert a natural to a signed integer."""
    return to_term(lambda x: PAIR()(x, ZERO()))


@define
def INEG() -> Term:
    return to_term(lambda x: PAIR()(SECOND()(x), FIRST()(x)))


@define
def ONEZERO() -> Term:
    """Normalize a signed integer so that one side of the pair is ZERO."""
    return Y()(
        lambda c, x: ISZERO()(
            FIRST()(x),
            x,
            ISZERO()(
                SECOND()(x),
                x,
                c(PAIR()(PRED()(FIRST()(x)), PRED()(SECOND()(x)))),
            ),
        )
    )


@define
def IPLUS() -> Term:
    return to_term(
        lambda x, y: ONEZERO()(
            PAIR()(
                PLUS()(FIRST()(x), FIRST()(y)),
                PLUS()(SECOND()(x), SECOND()(y)),
            )
        )
    )


@define
def ISUB() -> Term:
    return to_term(
        lambda x, y: ONEZERO()(
            PAIR()(
                PLUS()(FIRST()(x), SECOND()(y)),
                PLUS()(SECOND()(x), FIRST()(y)),
            )
        )
    )


@define
def IMULT() -> Term:
    return to_term(
        lambda x, y: PAIR()(
            PLUS()(MULT()(FIRST()(x), FIRST()(y)), MULT()(SECOND()(x), SECOND()(y))),
            PLUS()(MULT()(FIRST()(x), SECOND()(y)), MULT()(SECOND()(x), FIRST()(y))),
        )
    )


# Algorithms.


@define
def FACT() -> Term:
    return Y()(lambda f, n: ISZERO()(n, ONE(), MULT()(n, f(PRED()(n)))))


@define
def FIBO() -> Term:
    return Y()(
        lambda f, n: ISZERO()(
            n,
            ZERO(),
            ISZERO()(
                PRED()(n),
                ONE(),
                PLUS()(f(PRED()(n)), f(PRED()(PRED()(n)))),
            ),
        )
    )
