"""
Entailment - Three-valued queries against the clause store.

A literal L is proven TRUE when the knowledge base together with ~L has no
model, proven FALSE when the knowledge base together with L has no model,
and UNKNOWN otherwise.
"""

from enum import Enum
from typing import Optional

from pyclue.reasoner.clauses import ClauseStore
from pyclue.reasoner.solver import SATSolver
from pyclue.utils.logger import get_logger

logger = get_logger(__name__)


class Truth(str, Enum):
    """Result of an entailment query."""
    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"
    
    @property
    def symbol(self) -> str:
        """Notepad mark: Y, n or -."""
        if self is Truth.TRUE:
            return "Y"
        if self is Truth.FALSE:
            return "n"
        if self is Truth.UNKNOWN:
            return "-"
        raise ValueError(f"unhandled truth value: {self!r}")
    
    @property
    def is_known(self) -> bool:
        return self is not Truth.UNKNOWN


class EntailmentOracle:
    """
    Answers entailment queries by running the solver under assumptions.
    
    Each check pushes a single assumption onto the store and retracts it
    before returning, so the store is unchanged between queries.
    """
    
    def __init__(
        self,
        store: ClauseStore,
        solver: Optional[SATSolver] = None,
        log_stats: bool = False
    ):
        """
        Initialize the oracle.
        
        Args:
            store: Knowledge base to query
            solver: Decision procedure (a fresh SATSolver if not provided)
            log_stats: Log solver statistics for every check at DEBUG level
        """
        self._store = store
        self._solver = solver or SATSolver()
        self._log_stats = log_stats
    
    @property
    def solver(self) -> SATSolver:
        return self._solver
    
    def is_consistent(self) -> bool:
        """Whether the knowledge base still has at least one model."""
        return self._check()
    
    def satisfiable_with(self, literal: int) -> bool:
        """Whether the knowledge base allows ``literal`` to hold."""
        with self._store.assumption(literal):
            return self._check()
    
    def query_literal(self, literal: int) -> Truth:
        """
        Determine the truth value of a literal.
        
        An inconsistent knowledge base entails everything, so every query
        against it answers TRUE; use is_consistent() to tell the cases apart.
        
        Args:
            literal: Signed literal to test
        
        Returns:
            Truth.TRUE, Truth.FALSE or Truth.UNKNOWN
        """
        if not self.satisfiable_with(-literal):
            return Truth.TRUE
        if not self.satisfiable_with(literal):
            return Truth.FALSE
        return Truth.UNKNOWN
    
    def _check(self) -> bool:
        result = self._solver.solve(self._store.clauses)
        if self._log_stats:
            logger.debug(
                f"solve over {len(self._store)} clauses: "
                f"{'SAT' if result.satisfiable else 'UNSAT'} {result.stats.to_dict()}"
            )
        return result.satisfiable
