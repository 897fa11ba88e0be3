"""
Validation of rules before evaluation.

Provides structural checks on individual rules (range restriction, ground
facts, unsupported negation) and program-wide checks (arity consistency).
"""

import logging
from typing import Dict, List, Optional, Set, Type
from dataclasses import dataclass

from .knowledge import Program, Rule
from .errors import ValidationError, RangeRestrictionError, UnsupportedNegationError

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check"""
    is_valid: bool
    error_message: Optional[str] = None
    warning_message: Optional[str] = None
    error_type: Type[ValidationError] = ValidationError

    def __bool__(self) -> bool:
        return self.is_valid


class StructuralValidator:
    """Validates structural properties of rules"""

    def validate_rule(self, rule: Rule) -> ValidationResult:
        """
        Perform all structural validations on a rule.

        Checks:
        1. No negated literals
        2. Facts are ground
        3. Range restriction: all head variables appear in the body
        4. No singleton variables (warning only)
        """
        checks = [
            self._check_negation,
            self._check_ground_fact,
            self._check_range_restriction,
            self._check_singleton_variables,
        ]

        warnings = []
        for check in checks:
            result = check(rule)
            if not result.is_valid:
                return result
            if result.warning_message:
                warnings.append(result.warning_message)

        if warnings:
            return ValidationResult(is_valid=True, warning_message="; ".join(warnings))

        return ValidationResult(is_valid=True)

    def _check_negation(self, rule: Rule) -> ValidationResult:
        """Negated literals parse but have no evaluation semantics"""
        if rule.negated:
            literals = ", ".join(f"\\+ {negated}" for negated in rule.negated)
            return ValidationResult(
                is_valid=False,
                error_message=f"Negation is not supported: {literals}",
                error_type=UnsupportedNegationError
            )
        return ValidationResult(is_valid=True)

    def _check_ground_fact(self, rule: Rule) -> ValidationResult:
        """A fact has no body to bind its variables, so it must be ground"""
        if rule.is_fact and not rule.head.is_ground:
            var_list = ", ".join(sorted(v.name for v in rule.head.get_variables()))
            return ValidationResult(
                is_valid=False,
                error_message=f"Fact is not ground: variables {var_list} have no binding",
                error_type=RangeRestrictionError
            )
        return ValidationResult(is_valid=True)

    def _check_range_restriction(self, rule: Rule) -> ValidationResult:
        """
        Check that all variables in the head appear in the body.

        Without this a derived head could carry an unbound variable into the
        knowledge base, and the set of derivable atoms would not be finite.
        """
        if rule.is_fact:
            return ValidationResult(is_valid=True)

        unbound_vars = rule.head.get_variables() - rule.body_variables()

        if unbound_vars:
            var_list = ", ".join(sorted(v.name for v in unbound_vars))
            return ValidationResult(
                is_valid=False,
                error_message=f"Rule is not range restricted: variables {var_list} "
                              f"appear in head but not in body",
                error_type=RangeRestrictionError
            )

        return ValidationResult(is_valid=True)

    def _check_singleton_variables(self, rule: Rule) -> ValidationResult:
        """
        Check for singleton variables (variables that appear exactly once).

        These are legal but usually a typo, so this is only a warning.
        """
        var_counts: Dict[str, int] = {}
        for atom in (rule.head,) + rule.body + rule.negated:
            for term in atom.terms:
                if not term.is_ground:
                    var_counts[term.name] = var_counts.get(term.name, 0) + 1

        singletons = [name for name, count in var_counts.items() if count == 1]

        if singletons:
            var_list = ", ".join(sorted(singletons))
            return ValidationResult(
                is_valid=True,
                warning_message=f"Singleton variables: {var_list} (appear only once)"
            )

        return ValidationResult(is_valid=True)


class ProgramValidator:
    """Validates a whole program, rule by rule and across rules"""

    def __init__(self):
        self.structural_validator = StructuralValidator()

    def validate(self, program: Program) -> List[ValidationResult]:
        """
        Validate every rule, then the program as a whole.

        Returns one result per rule (in program order) followed by the
        program-wide arity check.
        """
        results = [self.structural_validator.validate_rule(rule) for rule in program]
        results.append(self._check_arity_consistency(program))
        return results

    def _check_arity_consistency(self, program: Program) -> ValidationResult:
        """
        Warn when a predicate is used with more than one arity.

        p/1 and p/2 are distinct predicates, which is legal but rarely meant.
        """
        arities: Dict[str, Set[int]] = {}
        for rule in program:
            for atom in (rule.head,) + rule.body + rule.negated:
                arities.setdefault(atom.predicate, set()).add(atom.arity)

        mixed = [
            f"{predicate}/{'/'.join(str(a) for a in sorted(found))}"
            for predicate, found in sorted(arities.items())
            if len(found) > 1
        ]
        if mixed:
            return ValidationResult(
                is_valid=True,
                warning_message=f"Predicates used with several arities: {', '.join(mixed)}"
            )
        return ValidationResult(is_valid=True)


def validate_program(program: Program) -> None:
    """
    Check the whole program before any evaluation.

    Warnings are logged. The first rule that fails validation aborts with
    the matching ValidationError subclass, carrying the rule.

    Raises:
        RangeRestrictionError: a head variable is unbound, or a fact is not ground
        UnsupportedNegationError: a rule uses a negated literal
    """
    results = ProgramValidator().validate(program)
    for rule, result in zip(program, results):
        if not result.is_valid:
            raise result.error_type(f"{result.error_message} in rule: {rule}", rule)
        if result.warning_message:
            logger.warning(f"{rule}: {result.warning_message}")

    if results[-1].warning_message:
        logger.warning(results[-1].warning_message)
