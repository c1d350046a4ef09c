import pytest

from betared import library
from betared.library import (
    AND,
    CONS,
    CONVERT,
    EQ,
    FACT,
    FALSE,
    FIBO,
    FIRST,
    HEAD,
    IMULT,
    INDEX,
    INEG,
    INT,
    IOTA,
    IPLUS,
    ISNIL,
    ISUB,
    ISZERO,
    LEQ,
    MULT,
    NAT,
    NIL,
    NOT,
    OMEGA,
    ONE,
    ONEZERO,
    OR,
    PAIR,
    PLUS,
    POW,
    PRED,
    SECOND,
    SUB,
    SUCC,
    TAIL,
    TRUE,
    XOR,
    ZERO,
    I,
    K,
    get,
    names,
)
from betared.reduction import reduce, run_to_fixpoint
from betared.terms import VAR, Term, alpha_equivalent, app, is_closed, render

a = VAR("a")
b = VAR("b")


@pytest.mark.parametrize("name", names())
def test_terms_are_closed(name: str) -> None:
    assert is_closed(get(name))


def test_builders_are_memoized() -> None:
    assert get("S") is get("S")
    assert get("HEAD") is FIRST()


def test_get_unknown() -> None:
    with pytest.raises(KeyError, match="NOPE"):
        get("NOPE")


def test_names() -> None:
    actual = names()
    assert actual[:3] == ["I", "K", "S"]
    for name in ["OMEGA", "TRUE", "SUCC", "PAIR", "CONS", "IPLUS", "FACT", "FIBO"]:
        assert name in actual
    assert len(actual) == len(set(actual))


RENDER_EXAMPLES: list[tuple[str, str]] = [
    ("I", "(\\x.x)"),
    ("K", "(\\x.(\\y.x))"),
    ("S", "(\\x.(\\y.(\\z.[[x z] [y z]])))"),
    ("U", "(\\x.[x x])"),
    ("OMEGA", "[(\\x.[x x]) (\\x.[x x])]"),
    ("FALSE", "(\\x.(\\y.y))"),
    ("ZERO", "(\\f.(\\x.x))"),
    ("SUCC", "(\\n.(\\f.(\\x.[f [[n f] x]])))"),
    ("PAIR", "(\\x.(\\y.(\\f.[[f x] y])))"),
]


@pytest.mark.parametrize(
    "name, expected", RENDER_EXAMPLES, ids=[n for n, _ in RENDER_EXAMPLES]
)
def test_render(name: str, expected: str) -> None:
    assert render(get(name)) == expected


def test_nat() -> None:
    assert NAT(0) is ZERO()
    assert NAT(-3) is ZERO()
    assert render(NAT(2)) == "(\\f.(\\x.[f [f x]]))"


def test_int() -> None:
    assert render(INT(2)) == "(\\f.[[f (\\f.(\\x.[f [f x]]))] (\\f.(\\x.x))])"
    assert render(INT(-1)) == "(\\f.[[f (\\f.(\\x.x))] (\\f.(\\x.[f x]))])"


EVAL_EXAMPLES: list[tuple[str, Term, Term]] = [
    ("NOT TRUE", app(NOT(), TRUE()), FALSE()),
    ("AND TRUE FALSE", app(AND(), TRUE(), FALSE()), FALSE()),
    ("ISZERO ZERO", app(ISZERO(), ZERO()), TRUE()),
    ("ISZERO ONE", app(ISZERO(), ONE()), FALSE()),
    ("SUCC 1", app(SUCC(), NAT(1)), NAT(2)),
    ("PRED 2", app(PRED(), NAT(2)), NAT(1)),
    ("PLUS 2 2", app(PLUS(), NAT(2), NAT(2)), NAT(4)),
    ("FIRST (PAIR a b)", app(FIRST(), app(PAIR(), a, b)), a),
    ("SECOND (PAIR a b)", app(SECOND(), app(PAIR(), a, b)), b),
    ("K a b", app(K(), a, b), a),
]


@pytest.mark.parametrize(
    "_, term, expected", EVAL_EXAMPLES, ids=[n for n, _, _ in EVAL_EXAMPLES]
)
def test_evaluate(_: str, term: Term, expected: Term) -> None:
    assert render(run_to_fixpoint(term)) == render(expected)


# Budget for the recursive and arithmetic terms below.
MAX_STEPS = 2000

LIST = app(CONS(), a, app(CONS(), b, NIL()))

NORMALIZE_EXAMPLES: list[tuple[str, Term, Term]] = [
    ("OR FALSE TRUE", app(OR(), FALSE(), TRUE()), TRUE()),
    ("OR FALSE FALSE", app(OR(), FALSE(), FALSE()), FALSE()),
    ("XOR TRUE TRUE", app(XOR(), TRUE(), TRUE()), FALSE()),
    ("XOR TRUE FALSE", app(XOR(), TRUE(), FALSE()), TRUE()),
    ("MULT 2 3", app(MULT(), NAT(2), NAT(3)), NAT(6)),
    ("POW 2 2", app(POW(), NAT(2), NAT(2)), NAT(4)),
    ("SUB 3 1", app(SUB(), NAT(3), NAT(1)), NAT(2)),
    ("LEQ 2 3", app(LEQ(), NAT(2), NAT(3)), TRUE()),
    ("LEQ 3 2", app(LEQ(), NAT(3), NAT(2)), FALSE()),
    ("EQ 2 2", app(EQ(), NAT(2), NAT(2)), TRUE()),
    ("EQ 2 1", app(EQ(), NAT(2), NAT(1)), FALSE()),
    ("ISNIL NIL", app(ISNIL(), NIL()), TRUE()),
    ("ISNIL (CONS a b)", app(ISNIL(), app(CONS(), a, b)), FALSE()),
    ("HEAD (CONS a b)", app(HEAD(), app(CONS(), a, b)), a),
    ("TAIL (CONS a b)", app(TAIL(), app(CONS(), a, b)), b),
    ("INDEX [a b] 0", app(INDEX(), LIST, NAT(0)), a),
    ("INDEX [a b] 1", app(INDEX(), LIST, NAT(1)), b),
    ("FACT 3", app(FACT(), NAT(3)), NAT(6)),
    ("FIBO 4", app(FIBO(), NAT(4)), NAT(3)),
]


@pytest.mark.parametrize(
    "_, term, expected", NORMALIZE_EXAMPLES, ids=[n for n, _, _ in NORMALIZE_EXAMPLES]
)
def test_normalize(_: str, term: Term, expected: Term) -> None:
    actual = run_to_fixpoint(term, MAX_STEPS)
    assert alpha_equivalent(actual, expected), render(actual)


# Signed integer results are pairs whose parts stay unreduced, so compare parts.
SIGNED_EXAMPLES: list[tuple[str, Term, int, int]] = [
    ("CONVERT 2", app(CONVERT(), NAT(2)), 2, 0),
    ("INEG -1", app(INEG(), INT(-1)), 1, 0),
    ("INEG 2", app(INEG(), INT(2)), 0, 2),
    ("ONEZERO (2, 1)", app(ONEZERO(), app(PAIR(), NAT(2), NAT(1))), 1, 0),
    ("ONEZERO (0, 2)", app(ONEZERO(), app(PAIR(), NAT(0), NAT(2))), 0, 2),
    ("IPLUS 2 -1", app(IPLUS(), INT(2), INT(-1)), 1, 0),
    ("ISUB 1 2", app(ISUB(), INT(1), INT(2)), 0, 1),
    ("IMULT 2 -1", app(IMULT(), INT(2), INT(-1)), 0, 2),
]


@pytest.mark.parametrize(
    "_, term, pos, neg", SIGNED_EXAMPLES, ids=[n for n, _, _, _ in SIGNED_EXAMPLES]
)
def test_signed(_: str, term: Term, pos: int, neg: int) -> None:
    actual_pos = run_to_fixpoint(app(FIRST(), term), MAX_STEPS)
    actual_neg = run_to_fixpoint(app(SECOND(), term), MAX_STEPS)
    assert alpha_equivalent(actual_pos, NAT(pos)), render(actual_pos)
    assert alpha_equivalent(actual_neg, NAT(neg)), render(actual_neg)


def test_iota_iota_is_identity() -> None:
    actual = run_to_fixpoint(app(IOTA(), IOTA()))
    assert render(actual) == "(\\z.z)"
    assert alpha_equivalent(actual, I())


def test_omega_is_stuck() -> None:
    assert render(reduce(OMEGA())) == render(OMEGA())
    assert run_to_fixpoint(OMEGA()) is OMEGA()


def test_module_attributes() -> None:
    for name in names():
        assert getattr(library, name)() is get(name)


def test_module_defines_only_terms() -> None:
    assert not hasattr(library, "logger")
    assert not hasattr(library, "logging")
