"""
Query answering for Datalite

A query atom is turned into an ordinary rule whose head collects the
query's variables under a reserved predicate. The rule is solved together
with the program and the answers are read back from the knowledge base.
"""

from typing import List, Optional

from .terms import Atom, Symbol
from .knowledge import Rule, Program, KnowledgeBase
from .evaluator import solve
from .config import SolverConfig
from .types import Substitution
from .logging_config import get_logger

logger = get_logger(__name__)

QUERY_PREDICATE = "__query__"


def make_query_rule(query_atom: Atom) -> Rule:
    """
    Build the synthetic rule for a query atom.

    Examples:
        >>> str(make_query_rule(atom("likes", "alice", "Y")))
        '__query__(Y) :- likes(alice,Y).'
    """
    return Rule(Atom(QUERY_PREDICATE, query_atom.ordered_variables()), [query_atom])


def query_atom_of(query_rule: Rule) -> Atom:
    """The user's query atom inside a synthetic query rule"""
    if query_rule.head.predicate != QUERY_PREDICATE or len(query_rule.body) != 1:
        raise ValueError(f"Not a query rule: {query_rule}")
    return query_rule.body[0]


def extract_answers(kb: KnowledgeBase, query_rule: Rule) -> List[Atom]:
    """
    Read the answers to ``query_rule`` out of a solved knowledge base.

    Each synthetic atom is mapped back onto the original query atom. The
    synthetic head only carries variable bindings, so the symbol positions
    of the query are checked against the facts the answer stands for: a
    candidate is kept only if some fact of the queried predicate agrees with
    the query at every symbol position and with the candidate at every
    variable position.
    """
    query_atom = query_atom_of(query_rule)
    head_vars = query_rule.head.terms
    facts = kb.by_predicate(query_atom.predicate, query_atom.arity)

    answers: List[Atom] = []
    for candidate in kb.by_predicate(QUERY_PREDICATE, len(head_vars)):
        bindings = dict(zip(head_vars, candidate.terms))
        if any(_matches(query_atom, bindings, fact) for fact in facts):
            answers.append(query_atom.substitute(bindings))
    return answers


def _matches(query_atom: Atom, bindings: Substitution, fact: Atom) -> bool:
    for term, value in zip(query_atom.terms, fact.terms):
        if isinstance(term, Symbol):
            if value != term:
                return False
        elif bindings.get(term) != value:
            return False
    return True


def query(program: Program, query_rule: Rule,
          config: Optional[SolverConfig] = None) -> List[Atom]:
    """
    Answer a query against a program.

    Args:
        program: The program to solve
        query_rule: A rule built by :func:`make_query_rule`
        config: Solver options

    Returns:
        Instances of the query atom that hold in the least fixpoint,
        in knowledge-base order
    """
    kb = solve(program.append(query_rule), config)
    answers = extract_answers(kb, query_rule)
    logger.log_query(str(query_atom_of(query_rule)), len(answers))
    return answers
