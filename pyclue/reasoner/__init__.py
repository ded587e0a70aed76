"""
Reasoner module - Propositional deduction engine for pyclue.

This module contains:
- encoding: (owner, card) <-> SAT variable bijection
- clauses: append-only clause store with scoped assumptions
- solver: DPLL satisfiability oracle with an explicit trail
- entailment: three-valued TRUE/FALSE/UNKNOWN queries
- rules: axioms and event encodings for the game
- history: log of applied events and their clause ranges
- engine: ClueReasoner, one game's knowledge base
- notepad: text rendering of the deduction grid
"""

from pyclue.reasoner.encoding import InvalidIdentifier, VariableEncoder
from pyclue.reasoner.clauses import ClauseStore, EmptyClause
from pyclue.reasoner.solver import Assignment, SATSolver, SolverResult, SolverStats
from pyclue.reasoner.entailment import EntailmentOracle, Truth
from pyclue.reasoner.rules import AccusationPolicy, ClueRules, InvalidEvent
from pyclue.reasoner.history import EventHistory, EventRecord, EventType
from pyclue.reasoner.engine import ClueReasoner
from pyclue.reasoner.notepad import NotepadRow, notepad_rows, render_notepad

__all__ = [
    # Encoding
    "InvalidIdentifier",
    "VariableEncoder",
    # Clauses
    "ClauseStore",
    "EmptyClause",
    # Solver
    "Assignment",
    "SATSolver",
    "SolverResult",
    "SolverStats",
    # Entailment
    "EntailmentOracle",
    "Truth",
    # Rules
    "AccusationPolicy",
    "ClueRules",
    "InvalidEvent",
    # History
    "EventHistory",
    "EventRecord",
    "EventType",
    # Engine
    "ClueReasoner",
    # Notepad
    "NotepadRow",
    "notepad_rows",
    "render_notepad",
]
