"""
Tests for the Datalite engine
"""
import logging

import pytest
from datalite import (
    atom, fact, rule, DataliteEngine, create_family_engine, RangeRestrictionError
)
from datalite.config import DataliteConfig


@pytest.fixture
def engine():
    return DataliteEngine(DataliteConfig())


class TestDataliteEngine:
    """Test the main engine"""

    def test_add_facts_and_rules(self, engine):
        engine.add_fact_from_atom(atom("parent", "john", "mary"))
        engine.add_rule_from_atoms(atom("child", "Y", "X"), [atom("parent", "X", "Y")])

        assert engine.facts == [fact("parent", "john", "mary")]
        assert engine.rules == [rule(atom("child", "Y", "X"), atom("parent", "X", "Y"))]
        assert str(engine) == "DataliteEngine: 1 facts, 1 rules"

    def test_duplicate_rules_ignored(self, engine):
        engine.add_fact(fact("p", "a"))
        engine.add_fact(fact("p", "a"))
        assert len(engine.program) == 1

    def test_add_fact_rejects_rules(self, engine):
        with pytest.raises(ValueError):
            engine.add_fact(rule(atom("q", "X"), atom("p", "X")))

    def test_query_with_rules(self):
        engine = create_family_engine()
        answers = engine.query(atom("grandparent", "X", "Z"))
        assert answers == [atom("grandparent", "john", "alice")]

    def test_ask(self):
        engine = create_family_engine()
        assert engine.ask("parent", "john", "mary")
        assert not engine.ask("parent", "mary", "john")
        assert engine.ask(atom("grandparent", "john", "Who"))

    def test_ask_with_source_text(self):
        engine = create_family_engine()
        assert engine.ask("grandparent(john, alice)")
        assert not engine.ask("grandparent(tom, X)")

    def test_set_trace(self, engine, caplog):
        caplog.set_level(logging.INFO, logger="datalite.engine")
        engine.add_fact(fact("p", "a"))
        engine.query(atom("p", "X"))
        assert not any("Query: p(X)" in r.getMessage() for r in caplog.records)

        engine.set_trace(True)
        engine.query(atom("p", "X"))
        messages = [r.getMessage() for r in caplog.records]
        assert "Query: p(X) -> 1 answer(s)" in messages
        assert "  p(a)" in messages

    def test_find_all(self):
        engine = create_family_engine()
        assert engine.find_all("parent", "john", "X") == [{"X": "mary"}, {"X": "tom"}]
        assert engine.find_all("grandparent", "X", "Y") == [{"X": "john", "Y": "alice"}]
        assert engine.find_all("parent", "john", "mary") == []

    def test_solve_is_cached_until_program_changes(self, engine):
        engine.add_fact(fact("p", "a"))
        kb = engine.solve()
        assert engine.solve() is kb

        engine.add_fact(fact("p", "b"))
        assert len(engine.solve()) == 2

    def test_invalid_program(self, engine):
        engine.add_rule(rule(atom("q", "X", "Y"), atom("p", "X")))
        with pytest.raises(RangeRestrictionError):
            engine.solve()

    def test_load_source(self, engine):
        parsed = engine.load_source("first(a). second(X) :- first(X). - second(Y)?")
        assert len(engine.program) == 2
        assert engine.query(parsed.query_atom) == [atom("second", "a")]

    def test_run_file(self, engine, tmp_path):
        source = tmp_path / "grandparent.dl"
        source.write_text(
            "parent(a, b).\nparent(b, c).\n"
            "grandparent(X, Z) :- parent(X, Y), parent(Y, Z).\n"
            "- grandparent(G, C2)?\n"
        )
        assert engine.run_file(source) == [atom("grandparent", "a", "c")]

    def test_run_file_replaces_program(self, engine, tmp_path):
        engine.add_fact(fact("old", "fact"))
        source = tmp_path / "new.dl"
        source.write_text("new(fact).\n")
        assert engine.run_file(source) == [atom("new", "fact")]

    def test_clear_knowledge(self):
        engine = create_family_engine()
        engine.clear_knowledge()
        assert len(engine.program) == 0
        assert len(engine.solve()) == 0
