"""
Clause Store - Append-only CNF knowledge base.

Clauses are tuples of signed integer literals, read as disjunctions. The
store only grows, except for the single-literal assumption clauses pushed
for the duration of one entailment check.
"""

from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Tuple, TypeVar

Clause = Tuple[int, ...]
T = TypeVar("T")


class EmptyClause(ValueError):
    """A clause with no literals; always an encoding bug upstream."""


class ClauseStore:
    """
    Ordered, monotonically growing collection of clauses.
    
    Assumptions are scoped: ``assumption(lit)`` appends the unit clause
    ``(lit,)`` and removes it again on exit, whatever the body does.
    """
    
    def __init__(self, clauses: Iterable[Iterable[int]] = ()):
        self._clauses: List[Clause] = []
        self._assumptions = 0
        for clause in clauses:
            self.add_clause(clause)
    
    def add_clause(self, literals: Iterable[int]) -> int:
        """
        Append a clause.
        
        Args:
            literals: Signed, non-zero integer literals
        
        Returns:
            Index of the new clause
        
        Raises:
            EmptyClause: If no literals were given
            ValueError: If a literal is zero or not an integer
            RuntimeError: If called while an assumption is active
        """
        if self._assumptions:
            raise RuntimeError("cannot add permanent clauses while an assumption is active")
        clause = self._normalize(literals)
        self._clauses.append(clause)
        return len(self._clauses) - 1
    
    def add_clauses(self, clauses: Iterable[Iterable[int]]) -> int:
        """
        Append several clauses, validating all of them first.
        
        Returns:
            Number of clauses added
        """
        batch = [self._normalize(clause) for clause in clauses]
        if self._assumptions:
            raise RuntimeError("cannot add permanent clauses while an assumption is active")
        self._clauses.extend(batch)
        return len(batch)
    
    @contextmanager
    def assumption(self, literal: int) -> Iterator["ClauseStore"]:
        """
        Temporarily assert a single literal.
        
        Args:
            literal: Literal to assume for the body of the with block
        """
        unit = self._normalize((literal,))
        depth = len(self._clauses)
        self._clauses.append(unit)
        self._assumptions += 1
        try:
            yield self
        finally:
            self._assumptions -= 1
            if len(self._clauses) != depth + 1 or self._clauses[-1] != unit:
                raise RuntimeError("clause store changed while an assumption was active")
            self._clauses.pop()
    
    def with_assumption(self, literal: int, body: Callable[["ClauseStore"], T]) -> T:
        """Run ``body(store)`` with ``literal`` assumed, then retract it."""
        with self.assumption(literal):
            return body(self)
    
    @property
    def clauses(self) -> Tuple[Clause, ...]:
        """Snapshot of all clauses, active assumptions included."""
        return tuple(self._clauses)
    
    @property
    def permanent_count(self) -> int:
        return len(self._clauses) - self._assumptions
    
    @property
    def has_assumption(self) -> bool:
        return self._assumptions > 0
    
    def prefix(self, count: int) -> Tuple[Clause, ...]:
        """The first ``count`` permanent clauses."""
        if count < 0 or count > self.permanent_count:
            raise IndexError(f"prefix length {count} outside 0..{self.permanent_count}")
        return tuple(self._clauses[:count])
    
    def __len__(self) -> int:
        return len(self._clauses)
    
    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)
    
    @staticmethod
    def _normalize(literals: Iterable[int]) -> Clause:
        clause = tuple(literals)
        if not clause:
            raise EmptyClause("clause must contain at least one literal")
        for lit in clause:
            if isinstance(lit, bool) or not isinstance(lit, int):
                raise ValueError(f"literal must be an int, got {lit!r}")
            if lit == 0:
                raise ValueError("0 is not a valid literal")
        return clause
