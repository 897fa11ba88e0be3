"""
Type aliases and type definitions for Datalite.

This module provides clear type aliases to improve code readability
and type safety throughout the codebase.
"""

from typing import Dict, List, Tuple
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .terms import Term, Variable


# Substitution - maps variables to ground terms
Substitution = Dict['Variable', 'Term']

# Candidate substitutions flowing through a rule body
Substitutions = List[Substitution]

# Predicate/arity key
PredicateKey = Tuple[str, int]
