"""Unit tests for the clause store and its scoped assumptions."""

import pytest

from pyclue.reasoner.clauses import ClauseStore, EmptyClause


class TestAddClause:
    """Test permanent clause addition."""
    
    def test_add_returns_index(self):
        store = ClauseStore()
        assert store.add_clause([1, -2]) == 0
        assert store.add_clause([3]) == 1
        assert store.clauses == ((1, -2), (3,))
        assert len(store) == 2
    
    def test_empty_clause_rejected(self):
        store = ClauseStore()
        with pytest.raises(EmptyClause):
            store.add_clause([])
        assert len(store) == 0
    
    @pytest.mark.parametrize("clause", [[0], [1, 0], ["1"], [1.5], [True]])
    def test_malformed_literals_rejected(self, clause):
        store = ClauseStore()
        with pytest.raises(ValueError):
            store.add_clause(clause)
    
    def test_add_clauses_is_all_or_nothing(self):
        store = ClauseStore([[1]])
        with pytest.raises(EmptyClause):
            store.add_clauses([[2], [], [3]])
        assert store.clauses == ((1,),)
    
    def test_snapshot_is_immutable(self):
        store = ClauseStore([[1, 2]])
        snapshot = store.clauses
        store.add_clause([3])
        assert snapshot == ((1, 2),)
    
    def test_prefix(self):
        store = ClauseStore([[1], [2], [3]])
        assert store.prefix(2) == ((1,), (2,))
        assert store.prefix(0) == ()
        with pytest.raises(IndexError):
            store.prefix(4)


class TestAssumptions:
    """Test scoped assumptions."""
    
    def test_assumption_visible_inside_and_retracted_after(self):
        store = ClauseStore([[1, 2]])
        with store.assumption(-1):
            assert store.clauses == ((1, 2), (-1,))
            assert store.has_assumption
            assert store.permanent_count == 1
        assert store.clauses == ((1, 2),)
        assert not store.has_assumption
    
    def test_retracted_when_body_raises(self):
        store = ClauseStore([[1]])
        with pytest.raises(KeyError):
            with store.assumption(2):
                raise KeyError("boom")
        assert store.clauses == ((1,),)
    
    def test_with_assumption_returns_body_result(self):
        store = ClauseStore([[1]])
        result = store.with_assumption(5, lambda s: s.clauses)
        assert result == ((1,), (5,))
        assert len(store) == 1
    
    def test_with_assumption_retracts_on_failure(self):
        store = ClauseStore()
        
        def body(_store):
            raise RuntimeError("solver blew up")
        
        with pytest.raises(RuntimeError):
            store.with_assumption(1, body)
        assert len(store) == 0
    
    def test_nested_assumptions(self):
        store = ClauseStore()
        with store.assumption(1):
            with store.assumption(-2):
                assert store.clauses == ((1,), (-2,))
            assert store.clauses == ((1,),)
        assert store.clauses == ()
    
    def test_permanent_add_blocked_during_assumption(self):
        store = ClauseStore()
        with store.assumption(1):
            with pytest.raises(RuntimeError):
                store.add_clause([2])
            with pytest.raises(RuntimeError):
                store.add_clauses([[2]])
        assert store.clauses == ()
    
    def test_zero_assumption_rejected(self):
        store = ClauseStore()
        with pytest.raises(ValueError):
            with store.assumption(0):
                pass
        assert len(store) == 0
