"""
Knowledge representation for Datalite

This module defines rules, programs and the knowledge base of derived facts.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple
from dataclasses import dataclass
from .terms import Atom, Variable
from .types import PredicateKey
from .errors import GroundingError


@dataclass(frozen=True)
class Rule:
    """Represents a rule - a head implied by the conjunction of its body"""
    head: Atom
    body: Tuple[Atom, ...]
    negated: Tuple[Atom, ...]

    def __init__(self, head: Atom, body: Iterable[Atom] = (),
                 negated: Iterable[Atom] = ()):
        object.__setattr__(self, 'head', head)
        object.__setattr__(self, 'body', tuple(body))
        object.__setattr__(self, 'negated', tuple(negated))

    @property
    def is_fact(self) -> bool:
        """True if this rule has no body (is a fact)"""
        return len(self.body) == 0 and len(self.negated) == 0

    def body_variables(self) -> Set[Variable]:
        """Variables bound by the positive body atoms"""
        variables: Set[Variable] = set()
        for body_atom in self.body:
            variables.update(body_atom.get_variables())
        return variables

    def get_variables(self) -> Set[Variable]:
        """Get all variables in this rule"""
        variables = self.head.get_variables() | self.body_variables()
        for negated_atom in self.negated:
            variables.update(negated_atom.get_variables())
        return variables

    def __str__(self) -> str:
        if self.is_fact:
            return f"{self.head}."

        literals = [str(body_atom) for body_atom in self.body]
        literals.extend(f"\\+ {negated_atom}" for negated_atom in self.negated)
        return f"{self.head} :- {', '.join(literals)}."


class Program:
    """An ordered, immutable sequence of rules"""

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: Tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def facts(self) -> List[Rule]:
        """Rules with an empty body"""
        return [rule for rule in self._rules if rule.is_fact]

    def append(self, rule: Rule) -> 'Program':
        """Return a new program with ``rule`` added at the end"""
        return Program(self._rules + (rule,))

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"Program({list(self._rules)!r})"

    def __str__(self) -> str:
        return "\n".join(str(rule) for rule in self._rules)


def _require_ground(atom: Atom) -> None:
    if not atom.is_ground:
        raise GroundingError(f"Knowledge base atoms must be ground, got {atom}", atom)


class KnowledgeBase:
    """
    Immutable set of ground atoms.

    Membership is structural. Iteration follows first-insertion order so
    that results are reproducible between runs. Growing a knowledge base
    always produces a new instance.
    """

    def __init__(self, atoms: Iterable[Atom] = ()):
        ordered: Dict[Atom, None] = {}
        for atom in atoms:
            _require_ground(atom)
            ordered.setdefault(atom, None)
        self._atoms: Tuple[Atom, ...] = tuple(ordered)
        self._members = frozenset(ordered)

    def merge(self, atoms: Iterable[Atom]) -> 'KnowledgeBase':
        """
        Return a knowledge base holding these atoms plus ``atoms``.

        Atoms already present are skipped; returns ``self`` when nothing
        is new.
        """
        added: Dict[Atom, None] = {}
        for atom in atoms:
            if atom not in self._members:
                _require_ground(atom)
                added.setdefault(atom, None)
        if not added:
            return self
        return KnowledgeBase(self._atoms + tuple(added))

    def by_predicate(self, predicate: str, arity: Optional[int] = None) -> List[Atom]:
        """All atoms with the given predicate (and arity, if given)"""
        return [
            atom for atom in self._atoms
            if atom.predicate == predicate and (arity is None or atom.arity == arity)
        ]

    def predicates(self) -> Set[PredicateKey]:
        """The predicate/arity pairs present"""
        return {(atom.predicate, atom.arity) for atom in self._atoms}

    def __contains__(self, atom) -> bool:
        return atom in self._members

    def __iter__(self) -> Iterator[Atom]:
        return iter(self._atoms)

    def __len__(self) -> int:
        return len(self._atoms)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KnowledgeBase):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"KnowledgeBase({[str(atom) for atom in self._atoms]!r})"

    def __str__(self) -> str:
        if not self._atoms:
            return "Empty knowledge base"
        return "\n".join(f"{atom}." for atom in self._atoms)
