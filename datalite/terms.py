"""
Term representations for Datalite

This module defines the core value types of the language:
- Symbol: Constants like 'alice', 'apple', etc.
- Variable: Placeholders like 'X', 'Y', etc.
- Atom: A predicate applied to terms, like 'likes(alice, Y)'

All of them are immutable and compared structurally.
"""

from typing import Dict, List, Set, Tuple, Iterable
from dataclasses import dataclass
from abc import ABC, abstractmethod


class Term(ABC):
    """Abstract base class for the two kinds of term"""

    name: str

    @abstractmethod
    def substitute(self, bindings: Dict['Variable', 'Term']) -> 'Term':
        """
        Apply a substitution to this term.

        Args:
            bindings: Mapping from variables to ground terms.

        Returns:
            The bound value for a bound variable, otherwise the term itself.
        """
        pass

    @property
    @abstractmethod
    def is_ground(self) -> bool:
        """True if this term contains no variables"""
        pass


@dataclass(frozen=True)
class Symbol(Term):
    """Represents a constant symbol"""
    name: str

    def substitute(self, bindings: Dict['Variable', Term]) -> Term:
        """Symbols are not affected by substitution"""
        return self

    @property
    def is_ground(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Variable(Term):
    """Represents a logical variable"""
    name: str

    def substitute(self, bindings: Dict['Variable', Term]) -> Term:
        """Replace this variable by its binding, if it has one"""
        return bindings.get(self, self)

    @property
    def is_ground(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Atom:
    """Represents a predicate symbol applied to an ordered sequence of terms"""
    predicate: str
    terms: Tuple[Term, ...]

    def __init__(self, predicate: str, terms: Iterable[Term]):
        if not predicate:
            raise ValueError("Atom predicate cannot be empty")
        terms = tuple(terms)
        for term in terms:
            if not isinstance(term, Term):
                raise TypeError(f"Atom terms must be Symbol or Variable, got {type(term)}")
        object.__setattr__(self, 'predicate', predicate)
        object.__setattr__(self, 'terms', terms)

    @property
    def arity(self) -> int:
        """Number of arguments"""
        return len(self.terms)

    @property
    def is_ground(self) -> bool:
        """True if no argument is a variable"""
        return all(term.is_ground for term in self.terms)

    def get_variables(self) -> Set[Variable]:
        """Get all variables occurring in this atom"""
        return {term for term in self.terms if isinstance(term, Variable)}

    def ordered_variables(self) -> List[Variable]:
        """Distinct variables in order of first occurrence"""
        seen: List[Variable] = []
        for term in self.terms:
            if isinstance(term, Variable) and term not in seen:
                seen.append(term)
        return seen

    def substitute(self, bindings: Dict[Variable, Term]) -> 'Atom':
        """Apply substitutions to all arguments"""
        return Atom(self.predicate, [term.substitute(bindings) for term in self.terms])

    def __str__(self) -> str:
        args_str = ",".join(str(term) for term in self.terms)
        return f"{self.predicate}({args_str})"
