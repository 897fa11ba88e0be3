"""
Tests for query answering
"""
import pytest
from datalite import (
    atom, fact, rule, sym, var, Atom, KnowledgeBase, Program, Rule,
    QUERY_PREDICATE, make_query_rule, query, solve
)
from datalite.query import extract_answers, query_atom_of


class TestQueryRule:
    """Test building the synthetic query rule"""

    def test_head_collects_distinct_variables(self):
        query_rule = make_query_rule(atom("p", "X", "a", "Y", "X"))
        assert query_rule.head == Atom(QUERY_PREDICATE, [var("X"), var("Y")])
        assert query_rule.body == (atom("p", "X", "a", "Y", "X"),)

    def test_ground_query_has_empty_head(self):
        query_rule = make_query_rule(atom("red", "apple"))
        assert query_rule.head.arity == 0

    def test_query_atom_of(self):
        goal = atom("likes", "alice", "Y")
        assert query_atom_of(make_query_rule(goal)) == goal

    def test_query_atom_of_rejects_plain_rules(self):
        with pytest.raises(ValueError):
            query_atom_of(rule(atom("q", "X"), atom("p", "X")))


class TestScenarios:
    """End-to-end query scenarios"""

    def test_derived_predicate(self):
        program = Program([
            fact("first", "a"),
            rule(atom("second", "X"), atom("first", "X")),
        ])
        assert query(program, make_query_rule(atom("second", "Y"))) == [atom("second", "a")]

    def test_ground_query(self):
        program = Program([fact("red", "apple"), fact("red", "cherry")])
        assert query(program, make_query_rule(atom("red", "apple"))) == [atom("red", "apple")]

    def test_ground_query_without_answer(self):
        program = Program([fact("red", "apple")])
        assert query(program, make_query_rule(atom("red", "banana"))) == []

    def test_variable_query(self):
        program = Program([fact("red", "apple"), fact("red", "cherry")])
        answers = query(program, make_query_rule(atom("red", "X")))
        assert set(answers) == {atom("red", "apple"), atom("red", "cherry")}
        assert len(answers) == 2

    def test_conjunctive_rule(self):
        program = Program([
            fact("parent", "a", "b"),
            fact("parent", "b", "c"),
            rule(atom("grandparent", "X", "Z"), atom("parent", "X", "Y"), atom("parent", "Y", "Z")),
        ])
        answers = query(program, make_query_rule(atom("grandparent", "G", "C2")))
        assert answers == [atom("grandparent", "a", "c")]


class TestPartiallyBoundQueries:
    """Test queries mixing symbols and variables"""

    @pytest.fixture
    def likes_program(self):
        return Program([
            fact("likes", "alice", "bob"),
            fact("likes", "alice", "carol"),
            fact("likes", "dave", "alice"),
            fact("likes", "bob", "bob"),
        ])

    def test_bound_first_argument(self, likes_program):
        answers = query(likes_program, make_query_rule(atom("likes", "alice", "Y")))
        assert answers == [atom("likes", "alice", "bob"), atom("likes", "alice", "carol")]

    def test_bound_second_argument(self, likes_program):
        answers = query(likes_program, make_query_rule(atom("likes", "X", "alice")))
        assert answers == [atom("likes", "dave", "alice")]

    def test_repeated_variable(self, likes_program):
        answers = query(likes_program, make_query_rule(atom("likes", "X", "X")))
        assert answers == [atom("likes", "bob", "bob")]

    def test_other_arity_ignored(self):
        program = Program([fact("p", "a"), fact("p", "a", "b")])
        assert query(program, make_query_rule(atom("p", "X"))) == [atom("p", "a")]


class TestExtractAnswers:
    """Test reading answers from a solved knowledge base"""

    def test_answers_follow_kb_order(self):
        program = Program([fact("n", "three"), fact("n", "one"), fact("n", "two")])
        query_rule = make_query_rule(atom("n", "X"))
        kb = solve(program.append(query_rule))
        assert extract_answers(kb, query_rule) == [
            atom("n", "three"), atom("n", "one"), atom("n", "two")
        ]

    def test_query_rule_does_not_change_program(self):
        program = Program([fact("p", "a")])
        query(program, make_query_rule(atom("p", "X")))
        assert len(program) == 1

    def test_candidate_without_matching_fact_dropped(self):
        query_rule = make_query_rule(atom("likes", "alice", "Y"))
        kb = KnowledgeBase([
            atom("likes", "bob", "cherry"),
            Atom(QUERY_PREDICATE, [sym("cherry")]),
        ])
        assert extract_answers(kb, query_rule) == []

    def test_candidate_with_matching_fact_kept(self):
        query_rule = make_query_rule(atom("likes", "alice", "Y"))
        kb = KnowledgeBase([
            atom("likes", "bob", "cherry"),
            atom("likes", "alice", "cherry"),
            Atom(QUERY_PREDICATE, [sym("cherry")]),
        ])
        assert extract_answers(kb, query_rule) == [atom("likes", "alice", "cherry")]
