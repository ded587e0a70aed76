"""
SAT Solver - Satisfiability oracle for the clause store.

A DPLL-style decision procedure: unit propagation to a fixpoint followed by
chronological backtracking search. Backtracking works on an explicit trail
of assignments with marks for each decision, so no recursion is involved.
All search state lives in an Assignment created per call; the clauses are
only read.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pyclue.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SolverStats:
    """Counters collected during one solve."""
    decisions: int = 0
    propagations: int = 0
    conflicts: int = 0
    
    def to_dict(self) -> Dict[str, int]:
        return {
            "decisions": self.decisions,
            "propagations": self.propagations,
            "conflicts": self.conflicts
        }


@dataclass
class SolverResult:
    """Outcome of a satisfiability check."""
    satisfiable: bool
    model: Dict[int, bool] = field(default_factory=dict)
    stats: SolverStats = field(default_factory=SolverStats)
    
    def __bool__(self) -> bool:
        return self.satisfiable


class Assignment:
    """
    Partial assignment with an ordered trail.
    
    Each trail entry is (literal, is_decision). ``undo_to(mark)`` pops
    entries back to a previously taken ``mark()``.
    """
    
    def __init__(self):
        self.values: Dict[int, bool] = {}
        self.trail: List[Tuple[int, bool]] = []
    
    def value(self, literal: int) -> Optional[bool]:
        """Truth value of a literal, None while its variable is unassigned."""
        value = self.values.get(abs(literal))
        if value is None:
            return None
        return value if literal > 0 else not value
    
    def assign(self, literal: int, decision: bool = False) -> None:
        self.values[abs(literal)] = literal > 0
        self.trail.append((literal, decision))
    
    def mark(self) -> int:
        return len(self.trail)
    
    def undo_to(self, mark: int) -> None:
        while len(self.trail) > mark:
            literal, _ = self.trail.pop()
            del self.values[abs(literal)]
    
    def is_assigned(self, variable: int) -> bool:
        return variable in self.values


class SATSolver:
    """
    Complete SAT solver for small CNF formulas.
    
    Variables are chosen lowest id first and tried true before false.
    """
    
    def satisfiable(self, clauses: Iterable[Sequence[int]]) -> bool:
        """Check whether the conjunction of ``clauses`` has a model."""
        return self.solve(clauses).satisfiable
    
    def solve(self, clauses: Iterable[Sequence[int]]) -> SolverResult:
        """
        Search for a satisfying assignment.
        
        Args:
            clauses: Clauses as sequences of signed integer literals
        
        Returns:
            SolverResult with the model when satisfiable
        """
        formula = [tuple(clause) for clause in clauses]
        stats = SolverStats()
        
        if any(not clause for clause in formula):
            return SolverResult(satisfiable=False, stats=stats)
        
        occurrences: Dict[int, List[int]] = defaultdict(list)
        variables = set()
        for index, clause in enumerate(formula):
            for literal in clause:
                occurrences[literal].append(index)
                variables.add(abs(literal))
        
        assignment = Assignment()
        
        # Unit clauses are fixed before any decision and never undone.
        for clause in formula:
            if len(clause) != 1:
                continue
            value = assignment.value(clause[0])
            if value is False:
                stats.conflicts += 1
                return SolverResult(satisfiable=False, stats=stats)
            if value is None:
                assignment.assign(clause[0])
        
        # (trail mark, decision literal, already flipped)
        decisions: List[Tuple[int, int, bool]] = []
        head = 0
        
        while True:
            head, conflict = self._propagate(formula, occurrences, assignment, head, stats)
            
            if conflict:
                stats.conflicts += 1
                while decisions:
                    mark, literal, flipped = decisions.pop()
                    assignment.undo_to(mark)
                    if not flipped:
                        decisions.append((mark, -literal, True))
                        assignment.assign(-literal, decision=True)
                        head = mark
                        break
                else:
                    return SolverResult(satisfiable=False, stats=stats)
                continue
            
            variable = self._pick_variable(formula, assignment)
            if variable is None:
                # Every clause is satisfied; unassigned variables are free.
                model = {v: assignment.values.get(v, False) for v in sorted(variables)}
                return SolverResult(satisfiable=True, model=model, stats=stats)
            
            stats.decisions += 1
            decisions.append((assignment.mark(), variable, False))
            assignment.assign(variable, decision=True)
    
    @staticmethod
    def _pick_variable(formula: List[Tuple[int, ...]], assignment: Assignment) -> Optional[int]:
        """
        Lowest unassigned variable of the first clause not yet satisfied.
        
        Returns:
            The variable to branch on, or None when every clause is satisfied
        """
        for clause in formula:
            free = []
            for literal in clause:
                value = assignment.value(literal)
                if value is True:
                    break
                if value is None:
                    free.append(abs(literal))
            else:
                if free:
                    return min(free)
        return None
    
    @staticmethod
    def _propagate(
        formula: List[Tuple[int, ...]],
        occurrences: Dict[int, List[int]],
        assignment: Assignment,
        head: int,
        stats: SolverStats
    ) -> Tuple[int, bool]:
        """
        Run unit propagation over the trail from ``head``.
        
        Only clauses containing the negation of a newly assigned literal can
        become unit or falsified, so those are the only ones visited.
        
        Returns:
            (new head, whether a clause was falsified)
        """
        trail = assignment.trail
        while head < len(trail):
            literal = trail[head][0]
            head += 1
            for index in occurrences.get(-literal, ()):
                unassigned = 0
                candidate = 0
                satisfied = False
                for other in formula[index]:
                    value = assignment.value(other)
                    if value is True:
                        satisfied = True
                        break
                    if value is None and other != candidate:
                        unassigned += 1
                        candidate = other
                        if unassigned > 1:
                            break
                if satisfied or unassigned > 1:
                    continue
                if unassigned == 0:
                    return head, True
                assignment.assign(candidate)
                stats.propagations += 1
        return head, False
