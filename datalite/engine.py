"""
Main engine for Datalite

Provides a high-level interface that collects rules, solves them and answers
queries.
"""

import logging
from pathlib import Path
from typing import List, Dict, Optional, Union

from .terms import Atom, Variable
from .factories import atom
from .knowledge import Rule, Program, KnowledgeBase
from .evaluator import solve
from .query import query, make_query_rule
from .parser import ParsedSource, parse_atom, parse_program, parse_file
from .config import DataliteConfig, get_config

logger = logging.getLogger(__name__)


class DataliteEngine:
    """
    Main interface for Datalite - holds a program and evaluates it on demand
    """

    def __init__(self, config: Optional[DataliteConfig] = None):
        """
        Initialize the engine

        Args:
            config: Configuration; defaults to the global config
        """
        self.config = config or get_config()
        self._rules: List[Rule] = []
        self._solved: Optional[KnowledgeBase] = None
        self._trace = self.config.solver.trace_enabled

    @property
    def program(self) -> Program:
        """The rules added so far, as an immutable program"""
        return Program(self._rules)

    def add_rule(self, rule: Rule) -> None:
        """Add a rule to the program"""
        if rule not in self._rules:
            self._rules.append(rule)
            self._solved = None
            if self._trace:
                logger.info(f"Added rule: {rule}")

    def add_fact(self, fact: Rule) -> None:
        """Add a fact (a rule with an empty body) to the program"""
        if not fact.is_fact:
            raise ValueError(f"Not a fact: {fact}")
        self.add_rule(fact)

    def add_fact_from_atom(self, head: Atom) -> None:
        """Add a fact from a ground atom"""
        self.add_fact(Rule(head, []))

    def add_rule_from_atoms(self, head: Atom, body: List[Atom]) -> None:
        """Add a rule from head and body atoms"""
        self.add_rule(Rule(head, body))

    def load_source(self, text: str) -> ParsedSource:
        """
        Parse source text and add its rules.

        Returns:
            The parsed source, so callers can pick up its query
        """
        parsed = parse_program(text)
        for rule in parsed.program:
            self.add_rule(rule)
        return parsed

    def load_file(self, path: Union[str, Path]) -> ParsedSource:
        """Parse a source file and add its rules"""
        parsed = parse_file(path)
        for rule in parsed.program:
            self.add_rule(rule)
        logger.info(f"Loaded {len(parsed.program)} rules from {path}")
        return parsed

    def solve(self) -> KnowledgeBase:
        """Compute (or reuse) the least fixpoint of the current program"""
        if self._solved is None:
            self._solved = solve(self.program, self.config.solver)
        return self._solved

    def query(self, goal: Atom) -> List[Atom]:
        """
        Answer a query atom

        Args:
            goal: Atom whose variables are to be found

        Returns:
            Instances of ``goal`` that hold
        """
        answers = query(self.program, make_query_rule(goal), self.config.solver)
        if self._trace:
            logger.info(f"Query: {goal} -> {len(answers)} answer(s)")
            for answer in answers:
                logger.info(f"  {answer}")
        return answers

    def ask(self, *args) -> bool:
        """
        Ask a yes/no question

        Args:
            A single Atom, atom source text like ``"parent(john, X)"``,
            or a predicate followed by identifiers

        Returns:
            True if at least one answer exists
        """
        if len(args) == 1 and isinstance(args[0], Atom):
            goal = args[0]
        elif len(args) == 1:
            goal = parse_atom(args[0])
        else:
            goal = atom(args[0], *args[1:])
        return len(self.query(goal)) > 0

    def find_all(self, predicate: str, *args: str) -> List[Dict[str, str]]:
        """
        Find all bindings for the variables of a string-built query.

        Variables are identified by starting with uppercase letters.

        Examples:
            >>> engine.find_all("parent", "john", "X")
            [{"X": "mary"}, {"X": "tom"}]
        """
        goal = atom(predicate, *args)
        variables = goal.ordered_variables()

        results = []
        for answer in self.query(goal):
            result = {}
            for position, term in enumerate(goal.terms):
                if isinstance(term, Variable):
                    result[term.name] = answer.terms[position].name
            if variables:
                results.append(result)
        return results

    def run_file(self, path: Union[str, Path]) -> List[Atom]:
        """
        Answer the query of a source file.

        The file's rules replace the current program. Without a query the
        whole solved knowledge base is returned.
        """
        self.clear_knowledge()
        parsed = self.load_file(path)
        if parsed.query_atom is None:
            return list(self.solve())
        return self.query(parsed.query_atom)

    def set_trace(self, trace: bool) -> None:
        """Enable or disable tracing"""
        self._trace = trace

    def clear_knowledge(self) -> None:
        """Remove all rules"""
        self._rules.clear()
        self._solved = None

    @property
    def facts(self) -> List[Rule]:
        """Get all facts in the program"""
        return [rule for rule in self._rules if rule.is_fact]

    @property
    def rules(self) -> List[Rule]:
        """Get all rules with a body"""
        return [rule for rule in self._rules if not rule.is_fact]

    def __str__(self) -> str:
        return f"DataliteEngine: {len(self.facts)} facts, {len(self.rules)} rules"


def create_family_engine() -> DataliteEngine:
    """Create an engine with basic family relationships"""
    engine = DataliteEngine(DataliteConfig())

    engine.add_fact_from_atom(atom("parent", "john", "mary"))
    engine.add_fact_from_atom(atom("parent", "john", "tom"))
    engine.add_fact_from_atom(atom("parent", "mary", "alice"))

    engine.add_rule_from_atoms(
        atom("grandparent", "X", "Z"),
        [atom("parent", "X", "Y"), atom("parent", "Y", "Z")]
    )

    return engine
