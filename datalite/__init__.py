"""
Datalite - a small Datalog evaluated bottom-up to its least fixpoint

Programs are sets of rules over predicates. The solver applies every rule
to the knowledge base until nothing new can be derived, then queries are
answered against the saturated knowledge base.
"""

from .terms import Term, Symbol, Variable, Atom
from .factories import sym, var, term, atom, fact, rule
from .knowledge import Rule, Program, KnowledgeBase
from .unification import unify, merge, substitute, empty_substitution
from .evaluator import eval_atom, walk_body, eval_rule, immediate_consequence, solve
from .query import QUERY_PREDICATE, make_query_rule, query
from .parser import ParsedSource, parse_program, parse_atom, parse_file
from .engine import DataliteEngine, create_family_engine
from .errors import (
    DataliteError, ValidationError, RangeRestrictionError, UnsupportedNegationError,
    GroundingError, IterationLimitError, ParseError, ConfigError
)

__version__ = "0.3"
__all__ = [
    "Term", "Symbol", "Variable", "Atom",
    "sym", "var", "term", "atom", "fact", "rule",
    "Rule", "Program", "KnowledgeBase",
    "unify", "merge", "substitute", "empty_substitution",
    "eval_atom", "walk_body", "eval_rule", "immediate_consequence", "solve",
    "QUERY_PREDICATE", "make_query_rule", "query",
    "ParsedSource", "parse_program", "parse_atom", "parse_file",
    "DataliteEngine", "create_family_engine",
    "DataliteError", "ValidationError", "RangeRestrictionError", "UnsupportedNegationError",
    "GroundingError", "IterationLimitError", "ParseError", "ConfigError",
]
