"""
Bottom-up evaluator for Datalite

Implements naive evaluation: every rule is re-evaluated against the whole
knowledge base on every pass until no new atoms appear.
"""

import time
from typing import List, Optional

from .terms import Atom
from .knowledge import Rule, Program, KnowledgeBase
from .unification import unify, merge, substitute, empty_substitution
from .rule_validator import validate_program
from .config import SolverConfig
from .errors import ValidationError, IterationLimitError
from .logging_config import get_logger
from .types import Substitutions

logger = get_logger(__name__)


# ============================================================================
# Join (body) evaluation
# ============================================================================

def eval_atom(body_atom: Atom, substitutions: Substitutions,
              kb: KnowledgeBase) -> Substitutions:
    """
    Extend each candidate substitution by matching ``body_atom`` against the
    knowledge base.

    Every fact a grounded candidate unifies with yields one extended
    substitution. Candidates that match no fact are dropped.
    """
    extended: Substitutions = []
    for substitution in substitutions:
        grounded = substitute(body_atom, substitution)
        for fact in kb:
            extension = unify(grounded, fact)
            if extension is not None:
                extended.append(merge(substitution, extension))
    return extended


def walk_body(body: List[Atom], kb: KnowledgeBase) -> Substitutions:
    """
    Find every substitution satisfying a conjunctive body.

    Atoms are joined left to right, so later atoms are grounded with the
    bindings of earlier ones.
    """
    substitutions: Substitutions = [empty_substitution()]
    for body_atom in body:
        substitutions = eval_atom(body_atom, substitutions, kb)
        if not substitutions:
            break
    return substitutions


# ============================================================================
# Rule evaluation and the fixpoint
# ============================================================================

def eval_rule(rule: Rule, kb: KnowledgeBase) -> List[Atom]:
    """
    Derive the head instances of ``rule`` supported by ``kb``.

    A fact yields its head. The result may contain duplicates.
    """
    if rule.is_fact:
        return [rule.head]
    return [substitute(rule.head, s) for s in walk_body(list(rule.body), kb)]


def immediate_consequence(program: Program, kb: KnowledgeBase) -> KnowledgeBase:
    """
    Apply every rule once to ``kb`` and return the enlarged knowledge base.

    All rules see the same pre-step knowledge base.
    """
    derived: List[Atom] = []
    for rule in program:
        derived.extend(eval_rule(rule, kb))
    return kb.merge(derived)


def solve(program: Program, config: Optional[SolverConfig] = None) -> KnowledgeBase:
    """
    Compute the least fixpoint of ``program``.

    Args:
        program: The rules to evaluate
        config: Solver options; defaults to no iteration cap

    Returns:
        The saturated knowledge base

    Raises:
        RangeRestrictionError: a rule is not range restricted
        UnsupportedNegationError: a rule contains a negated literal
        IterationLimitError: ``config.max_iterations`` was exceeded
    """
    config = config or SolverConfig()

    try:
        validate_program(program)
    except ValidationError as e:
        logger.log_validation_failure(str(e.rule), str(e))
        raise

    start = time.time()
    kb = KnowledgeBase()
    iteration = 0
    while True:
        if config.max_iterations is not None and iteration >= config.max_iterations:
            raise IterationLimitError(
                f"No fixpoint after {iteration} iterations", iteration
            )

        previous = kb
        kb = immediate_consequence(program, kb)
        iteration += 1
        logger.log_iteration(iteration, len(previous), len(kb))

        if config.trace_enabled:
            for atom in list(kb)[len(previous):]:
                logger.logger.info(f"Derived {atom}")

        # Knowledge bases only ever grow, so equal size means equal content
        if len(kb) == len(previous):
            break

    elapsed = (time.time() - start) * 1000
    logger.log_solve_complete(len(program), iteration, len(kb), elapsed)
    return kb
