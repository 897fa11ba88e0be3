"""
Factory functions for creating Datalite terms, atoms and rules.

This module provides convenience functions for building programs in Python
without going through the textual parser.
"""

from typing import List, Optional, Union
from .terms import Term, Symbol, Variable, Atom
from .knowledge import Rule


def sym(name: str) -> Symbol:
    """
    Create a constant symbol.

    Examples:
        >>> sym("alice")
        Symbol(name='alice')
    """
    return Symbol(name)


def var(name: str) -> Variable:
    """
    Create a logical variable.

    Variables should start with uppercase letters by convention.

    Examples:
        >>> var("X")
        Variable(name='X')
    """
    return Variable(name)


def term(name: str) -> Term:
    """
    Create a term from an identifier the way the parser does.

    A leading uppercase letter makes a variable, anything else a symbol.

    Examples:
        >>> term("Person")
        Variable(name='Person')
        >>> term("bob")
        Symbol(name='bob')
    """
    if not name:
        raise ValueError("Term name cannot be empty")
    if name[0].isupper():
        return Variable(name)
    return Symbol(name)


def atom(predicate: str, *args: Union[Term, str]) -> Atom:
    """
    Create an atom.

    Arguments may be Terms or plain identifiers; identifiers are converted
    with :func:`term`.

    Examples:
        >>> str(atom("parent", "alice", "Y"))
        'parent(alice,Y)'
    """
    terms = [arg if isinstance(arg, Term) else term(arg) for arg in args]
    return Atom(predicate, terms)


def fact(predicate: str, *args: Union[Term, str]) -> Rule:
    """Create a rule with an empty body"""
    return Rule(atom(predicate, *args), [])


def rule(head: Atom, *body: Atom, negated: Optional[List[Atom]] = None) -> Rule:
    """
    Create a rule from a head atom and body atoms.

    Examples:
        >>> str(rule(atom("second", "X"), atom("first", "X")))
        'second(X) :- first(X).'
    """
    return Rule(head, list(body), negated or [])
