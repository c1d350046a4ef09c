"""
# Beta reduction by repeated term rewriting.

This module implements the rewriting semantics of the evaluator:

- `substitute(term, var, value)` computes `term[var := value]`;
- `apply(head, arg)` performs one beta step of `head` applied to `arg`;
- `reduce(term)` performs one global rewrite step, driving reduction inside
  abstractions and delegating redexes to `apply`;
- `iter_reduce(term)` and `run_to_fixpoint(term)` repeat `reduce` until the
  canonical rendering stops changing.

## Technical details

- Substitution is name-based and **not** capture avoiding. An abstraction
  whose binder has the name being substituted shadows the substitution, but
  binders are never renamed, so a free variable of `value` can be captured by
  a binder of `term` with the same name. Closed combinators whose bound names
  do not collide with the free names in scope reduce correctly.
- Progress is judged textually: two terms are equal iff `render()` agrees.
- Applying an application whose own reduction makes no progress leaves both
  head and argument untouched, so a redex in that argument is never reached.
- Every operation is pure. An optional `trace` callback receives
  `(operation, inputs, result)` after each operation, including nested ones.
"""

import logging
from collections.abc import Callable, Iterator
from enum import Enum

from .metrics import COUNTERS
from .terms import (
    ABS,
    APP,
    Abstraction,
    Application,
    Term,
    Variable,
    render,
)

logger = logging.getLogger(__name__)
counter = COUNTERS[__name__]


class Operation(Enum):
    SUBSTITUTE = "SUBSTITUTE"
    APPLY = "APPLY"
    REDUCE = "REDUCE"


Trace = Callable[[Operation, tuple[Term, ...], Term], None]
StopPredicate = Callable[[Term, int], bool]


def substitute(
    term: Term, var: Variable, value: Term, *, trace: Trace | None = None
) -> Term:
    """Substitute `value` for every free occurrence of `var` in `term`."""
    result: Term
    if isinstance(term, Variable):
        result = value if term.name == var.name else term
    elif isinstance(term, Abstraction):
        if term.var.name == var.name:
            result = term  # shadowed
        else:
            result = ABS(term.var, substitute(term.body, var, value, trace=trace))
    elif isinstance(term, Application):
        lhs = substitute(term.lhs, var, value, trace=trace)
        rhs = substitute(term.rhs, var, value, trace=trace)
        result = APP(lhs, rhs)
    else:
        raise TypeError(f"Unknown term type: {type(term).__name__}")
    if trace is not None:
        trace(Operation.SUBSTITUTE, (term, var, value), result)
    return result


def apply(head: Term, arg: Term, *, trace: Trace | None = None) -> Term:
    """Apply `head` as a function to `arg`."""
    result: Term
    if isinstance(head, Variable):
        # A free head cannot consume its argument, so evaluate the argument.
        if isinstance(arg, Application):
            result = APP(head, reduce(arg, trace=trace))
        else:
            result = APP(head, arg)
    elif isinstance(head, Abstraction):
        if render(arg) == head.var.name:
            result = head.body
        else:
            result = substitute(head.body, head.var, arg, trace=trace)
    elif isinstance(head, Application):
        reduced = reduce(head, trace=trace)
        if render(reduced) == render(head):
            result = APP(head, arg)  # stuck
        else:
            result = apply(reduced, arg, trace=trace)
    else:
        raise TypeError(f"Unknown term type: {type(head).__name__}")
    if trace is not None:
        trace(Operation.APPLY, (head, arg), result)
    return result


def reduce(term: Term, *, trace: Trace | None = None) -> Term:
    """Perform one rewrite step, reducing under abstractions."""
    result: Term
    if isinstance(term, Variable):
        result = term
    elif isinstance(term, Abstraction):
        result = ABS(term.var, reduce(term.body, trace=trace))
    elif isinstance(term, Application):
        if isinstance(term.lhs, Variable):
            result = APP(term.lhs, reduce(term.rhs, trace=trace))
        else:
            result = apply(term.lhs, term.rhs, trace=trace)
    else:
        raise TypeError(f"Unknown term type: {type(term).__name__}")
    if trace is not None:
        trace(Operation.REDUCE, (term,), result)
    return result


def iter_reduce(
    term: Term,
    *,
    max_steps: int | None = None,
    until: StopPredicate | None = None,
    trace: Trace | None = None,
) -> Iterator[Term]:
    """
    Iterate reduction of a term to a fixpoint.

    Yields `term` and then each reduct whose rendering differs from its
    predecessor. Stops when a step makes no textual progress, after `max_steps`
    reduction steps, or once `until(term, steps)` returns true. Terms without a
    normal form may iterate forever unless bounded.
    """
    yield term
    steps = 0
    while True:
        if max_steps is not None and steps >= max_steps:
            logger.warning(
                f"Stopped after max_steps={max_steps} before confirming a fixpoint"
            )
            return
        if until is not None and until(term, steps):
            logger.warning(f"Stopped by predicate after {steps} steps")
            return
        reduced = reduce(term, trace=trace)
        steps += 1
        counter["step"] += 1
        if render(reduced) == render(term):
            logger.debug(f"Reached fixpoint after {steps} steps")
            counter["fixpoint"] += 1
            return
        logger.debug(f"Step {steps}: {reduced}")
        term = reduced
        yield term


def run_to_fixpoint(
    term: Term,
    max_steps: int | None = None,
    *,
    until: StopPredicate | None = None,
    trace: Trace | None = None,
) -> Term:
    """
    Reduce a term until its rendering is stable, returning the final term.

    If `max_steps` or `until` halts reduction first, the last term reached is
    returned instead.
    """
    result = term
    for result in iter_reduce(term, max_steps=max_steps, until=until, trace=trace):
        pass
    return result
