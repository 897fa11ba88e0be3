"""
Tests for rules, programs and the knowledge base
"""
import pytest
from datalite import atom, fact, rule, Rule, Program, KnowledgeBase, GroundingError


class TestRule:
    """Test rule structure"""

    def test_fact(self):
        f = fact("first", "a")
        assert f.is_fact
        assert str(f) == "first(a)."

    def test_rule(self):
        r = rule(atom("second", "X"), atom("first", "X"))
        assert not r.is_fact
        assert r.body == (atom("first", "X"),)
        assert str(r) == "second(X) :- first(X)."

    def test_negated_rule_is_not_fact(self):
        r = rule(atom("p", "a"), negated=[atom("q", "a")])
        assert not r.is_fact
        assert str(r) == "p(a) :- \\+ q(a)."

    def test_variables(self):
        r = rule(atom("grandparent", "X", "Z"), atom("parent", "X", "Y"), atom("parent", "Y", "Z"))
        assert {v.name for v in r.get_variables()} == {"X", "Y", "Z"}
        assert {v.name for v in r.body_variables()} == {"X", "Y", "Z"}

    def test_equality(self):
        assert fact("p", "a") == Rule(atom("p", "a"), [])


class TestProgram:
    """Test program sequences"""

    def test_append_returns_new_program(self):
        program = Program([fact("p", "a")])
        extended = program.append(fact("p", "b"))
        assert len(program) == 1
        assert len(extended) == 2
        assert list(extended)[-1] == fact("p", "b")

    def test_facts(self):
        program = Program([fact("p", "a"), rule(atom("q", "X"), atom("p", "X"))])
        assert program.facts == [fact("p", "a")]

    def test_equality(self):
        assert Program([fact("p", "a")]) == Program([fact("p", "a")])
        assert Program([fact("p", "a")]) != Program([fact("p", "b")])


class TestKnowledgeBase:
    """Test the immutable set of ground atoms"""

    def test_empty(self):
        kb = KnowledgeBase()
        assert len(kb) == 0
        assert str(kb) == "Empty knowledge base"

    def test_deduplicates(self):
        kb = KnowledgeBase([atom("p", "a"), atom("p", "a"), atom("p", "b")])
        assert len(kb) == 2
        assert list(kb) == [atom("p", "a"), atom("p", "b")]

    def test_merge_returns_new_instance(self):
        kb = KnowledgeBase([atom("p", "a")])
        merged = kb.merge([atom("p", "b"), atom("p", "a")])
        assert len(kb) == 1
        assert len(merged) == 2
        assert atom("p", "b") in merged
        assert atom("p", "b") not in kb

    def test_merge_nothing_new(self):
        kb = KnowledgeBase([atom("p", "a")])
        assert kb.merge([atom("p", "a")]) is kb

    def test_merge_preserves_order(self):
        kb = KnowledgeBase([atom("p", "c")]).merge([atom("p", "a"), atom("p", "b")])
        assert list(kb) == [atom("p", "c"), atom("p", "a"), atom("p", "b")]

    def test_no_structural_duplicates_after_merges(self):
        kb = KnowledgeBase()
        for _ in range(3):
            kb = kb.merge([atom("p", "a"), atom("q", "a", "b"), atom("p", "a")])
        assert len(kb) == len(set(kb)) == 2

    def test_rejects_non_ground(self):
        with pytest.raises(GroundingError):
            KnowledgeBase([atom("p", "X")])
        with pytest.raises(GroundingError):
            KnowledgeBase().merge([atom("p", "X")])

    def test_set_equality(self):
        kb1 = KnowledgeBase([atom("p", "a"), atom("p", "b")])
        kb2 = KnowledgeBase([atom("p", "b"), atom("p", "a")])
        assert kb1 == kb2

    def test_by_predicate(self):
        kb = KnowledgeBase([atom("p", "a"), atom("q", "a"), atom("p", "a", "b")])
        assert kb.by_predicate("p") == [atom("p", "a"), atom("p", "a", "b")]
        assert kb.by_predicate("p", 1) == [atom("p", "a")]
        assert kb.predicates() == {("p", 1), ("q", 1), ("p", 2)}

    def test_string(self):
        kb = KnowledgeBase([atom("p", "a")])
        assert str(kb) == "p(a)."
