"""Unit tests for the DPLL satisfiability oracle."""

from itertools import combinations

import pytest

from pyclue.reasoner.solver import Assignment, SATSolver


def satisfies(clauses, model) -> bool:
    return all(
        any(model.get(abs(lit), False) == (lit > 0) for lit in clause)
        for clause in clauses
    )


def pigeonhole(pigeons: int, holes: int):
    """Every pigeon in some hole, no hole shared."""
    def var(p, h):
        return p * holes + h + 1
    clauses = [tuple(var(p, h) for h in range(holes)) for p in range(pigeons)]
    for h in range(holes):
        for a, b in combinations(range(pigeons), 2):
            clauses.append((-var(a, h), -var(b, h)))
    return clauses


@pytest.fixture
def solver() -> SATSolver:
    return SATSolver()


class TestTrivialFormulas:
    
    def test_no_clauses_is_satisfiable(self, solver):
        result = solver.solve([])
        assert result.satisfiable
        assert result.model == {}
    
    def test_empty_clause_is_unsatisfiable(self, solver):
        assert not solver.satisfiable([(1, 2), ()])
    
    def test_contradictory_units(self, solver):
        result = solver.solve([(1,), (-1,)])
        assert not result.satisfiable
        assert result.stats.conflicts == 1
    
    def test_duplicate_units(self, solver):
        assert solver.satisfiable([(3,), (3,), (3, -3)])
    
    def test_result_is_truthy_when_satisfiable(self, solver):
        assert solver.solve([(1,)])
        assert not solver.solve([(1,), (-1,)])


class TestPropagation:
    
    def test_unit_chain_forces_model(self, solver):
        clauses = [(1,), (-1, 2), (-2, 3), (-3, -4)]
        result = solver.solve(clauses)
        assert result.satisfiable
        assert result.model == {1: True, 2: True, 3: True, 4: False}
        assert result.stats.decisions == 0
        assert result.stats.propagations == 3
    
    def test_propagation_conflict_without_search(self, solver):
        clauses = [(1,), (-1, 2), (-1, -2)]
        result = solver.solve(clauses)
        assert not result.satisfiable
        assert result.stats.decisions == 0
    
    def test_duplicate_literal_clause_acts_as_unit(self, solver):
        result = solver.solve([(-1,), (1, 2, 2)])
        assert result.model[2] is True
        assert result.stats.decisions == 0


class TestSearch:
    
    def test_needs_backtracking(self, solver):
        """Trying 1=True first fails; the solver must flip it."""
        clauses = [(-1, 2), (-1, -2), (1, 3)]
        result = solver.solve(clauses)
        assert result.satisfiable
        assert result.model[1] is False
        assert result.model[3] is True
        assert result.stats.conflicts >= 1
        assert satisfies(clauses, result.model)
    
    def test_all_sign_combinations_unsat(self, solver):
        clauses = [(1, 2), (1, -2), (-1, 2), (-1, -2)]
        result = solver.solve(clauses)
        assert not result.satisfiable
        assert result.stats.decisions >= 1
    
    def test_pigeonhole_unsat(self, solver):
        result = solver.solve(pigeonhole(4, 3))
        assert not result.satisfiable
        assert result.stats.conflicts > 1
    
    def test_pigeonhole_sat_when_enough_holes(self, solver):
        clauses = pigeonhole(3, 3)
        result = solver.solve(clauses)
        assert result.satisfiable
        assert satisfies(clauses, result.model)
    
    def test_model_covers_every_variable(self, solver):
        clauses = [(1, 2, 3), (-4, 5)]
        result = solver.solve(clauses)
        assert set(result.model) == {1, 2, 3, 4, 5}
        assert satisfies(clauses, result.model)
    
    def test_deterministic(self, solver):
        clauses = pigeonhole(3, 3) + [(-1,)]
        assert solver.solve(clauses).model == solver.solve(clauses).model
    
    def test_input_not_mutated(self, solver):
        clauses = [[1, 2], [-1], [-2, 3]]
        solver.solve(clauses)
        assert clauses == [[1, 2], [-1], [-2, 3]]
    
    def test_independent_calls(self, solver):
        """State from an UNSAT call must not leak into the next one."""
        assert not solver.satisfiable(pigeonhole(3, 2))
        assert solver.satisfiable([(1, 2)])


class TestAssignment:
    
    def test_value_and_undo(self):
        assignment = Assignment()
        assignment.assign(3)
        mark = assignment.mark()
        assignment.assign(-5, decision=True)
        assignment.assign(7)
        assert assignment.value(-5) is True
        assert assignment.value(5) is False
        assert assignment.value(9) is None
        
        assignment.undo_to(mark)
        assert assignment.trail == [(3, False)]
        assert not assignment.is_assigned(5)
        assert not assignment.is_assigned(7)
        assert assignment.value(3) is True
