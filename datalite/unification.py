"""
Substitution algebra for Datalite

Unification here is one-way: a body atom (which may contain variables) is
matched against a ground fact. Only variables on the body side are bound.
"""

from typing import Optional

from .terms import Atom, Symbol, Variable
from .types import Substitution
from .errors import GroundingError


def empty_substitution() -> Substitution:
    """Return a new, empty substitution"""
    return {}


# ============================================================================
# Functional API
# ============================================================================

def unify(body_atom: Atom, fact: Atom) -> Optional[Substitution]:
    """
    Unify a body atom against a ground fact.

    Args:
        body_atom: Atom from a rule body, possibly partially grounded
        fact: Ground atom from the knowledge base

    Returns:
        The bindings that make ``body_atom`` equal to ``fact``, or None
        if no such bindings exist.

    Raises:
        GroundingError: if ``fact`` contains a variable

    Examples:
        >>> unify(atom("p", "X"), atom("p", "c"))
        {Variable(name='X'): Symbol(name='c')}
        >>> unify(atom("p", "X", "X"), atom("p", "a", "b")) is None
        True
    """
    if body_atom.predicate != fact.predicate:
        return None
    if body_atom.arity != fact.arity:
        return None

    bindings = empty_substitution()
    for position, (body_term, fact_term) in enumerate(zip(body_atom.terms, fact.terms)):
        if isinstance(fact_term, Variable):
            raise GroundingError(
                f"Fact {fact} term {position} ({fact_term}) must be ground, not a variable",
                fact
            )

        if isinstance(body_term, Symbol):
            if body_term != fact_term:
                return None
        elif body_term in bindings:
            if bindings[body_term] != fact_term:
                # Repeated variable, e.g. p(X, X) against p(a, b)
                return None
        else:
            bindings[body_term] = fact_term

    return bindings


def merge(sub1: Substitution, sub2: Substitution) -> Substitution:
    """
    Combine two substitutions into a new one.

    Bindings in ``sub2`` take precedence over those in ``sub1``.
    Neither argument is modified.
    """
    merged = empty_substitution()
    merged.update(sub1)
    merged.update(sub2)
    return merged


def substitute(atom: Atom, substitution: Substitution) -> Atom:
    """
    Replace every bound variable in ``atom`` by its value.

    Symbols and unbound variables are left as they are.
    """
    return atom.substitute(substitution)


def format_substitution(substitution: Substitution) -> str:
    """Render a substitution as ``{X=a, Y=b}``"""
    pairs = ", ".join(f"{variable}={value}" for variable, value in substitution.items())
    return f"{{{pairs}}}"
