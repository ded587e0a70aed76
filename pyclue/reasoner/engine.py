"""
Clue Reasoner - One game's knowledge base and the queries against it.

This module ties the encoder, clause store, rules and oracle together. A
ClueReasoner is created per game, starts from the axioms, grows by one
clause group per observed event and answers "does owner hold card?" with
TRUE, FALSE or UNKNOWN.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from pyclue.config import get_config
from pyclue.data.schemas.models import (
    AccuseEvent,
    CardCategory,
    GameEvent,
    GameSetup,
    HandEvent,
    SuggestEvent,
)
from pyclue.reasoner.clauses import Clause, ClauseStore
from pyclue.reasoner.encoding import CardRef, OwnerRef, VariableEncoder
from pyclue.reasoner.entailment import EntailmentOracle, Truth
from pyclue.reasoner.history import EventHistory, EventRecord, EventType
from pyclue.reasoner.notepad import render_notepad
from pyclue.reasoner.rules import AccusationPolicy, ClueRules
from pyclue.reasoner.solver import SATSolver
from pyclue.utils.logger import get_logger

logger = get_logger(__name__)


class ClueReasoner:
    """
    Propositional reasoner for a single game.
    
    Attributes:
        setup: Players and cards of the game
        encoder: (owner, card) <-> variable mapping
        store: The knowledge base
        rules: Domain encoder for axioms and events
        oracle: Entailment queries over the store
        history: Events applied so far, with their clause ranges
    """
    
    def __init__(
        self,
        setup: Optional[GameSetup] = None,
        accusation_policy: Optional[AccusationPolicy] = None,
        solver: Optional[SATSolver] = None,
        name: str = "game",
        log_solver_stats: Optional[bool] = None
    ):
        """
        Initialize the reasoner and assert the axioms.
        
        Args:
            setup: Game setup (defaults to the configured game)
            accusation_policy: How to read wrong accusations (defaults to
                the configured policy)
            solver: SAT solver to use (a fresh SATSolver if not provided)
            name: Game name used in logs
            log_solver_stats: Log solver statistics at DEBUG level
        """
        config = get_config()
        if setup is None:
            setup = config.game.to_setup()
        if accusation_policy is None:
            accusation_policy = (
                AccusationPolicy.RATIONAL_ACCUSER
                if config.reasoner.assume_rational_accuser
                else AccusationPolicy.NO_ASSUMPTION
            )
        if log_solver_stats is None:
            log_solver_stats = config.reasoner.log_solver_stats
        
        self.name = name
        self.setup = setup
        self.encoder = VariableEncoder.from_setup(setup)
        self.store = ClauseStore()
        self.rules = ClueRules(self.encoder, setup, accusation_policy)
        self.oracle = EntailmentOracle(self.store, solver, log_stats=log_solver_stats)
        self.history = EventHistory(name)
        
        self._commit(EventType.AXIOMS, "initial axioms", self.rules.initial_clauses())
        logger.info(
            f"Game '{name}' ready: {self.encoder.player_count} players, "
            f"{self.encoder.card_count} cards, {len(self.store)} axiom clauses"
        )
    
    @property
    def players(self) -> List[str]:
        return self.encoder.players
    
    @property
    def cards(self) -> List[str]:
        return self.encoder.cards
    
    @property
    def case_file(self) -> str:
        return self.encoder.case_file
    
    @property
    def accusation_policy(self) -> AccusationPolicy:
        return self.rules.accusation_policy
    
    # --- Events ---
    
    def hand(self, player: OwnerRef, cards: Sequence[CardRef]) -> EventRecord:
        """
        Record a completely known hand.
        
        Args:
            player: Owner whose hand is known
            cards: Exactly the cards held; partial knowledge must not be
                recorded this way
        
        Returns:
            The history record for the event
        """
        clauses = self.rules.hand_clauses(player, cards)
        name = self._owner(player)
        card_names = [self._card(card) for card in cards]
        return self._commit(
            EventType.HAND,
            f"{name} holds {', '.join(card_names) or 'nothing'}",
            clauses,
            actor=name,
            details={"cards": card_names}
        )
    
    def suggest(
        self,
        suggester: OwnerRef,
        card1: CardRef,
        card2: CardRef,
        card3: CardRef,
        refuter: Optional[OwnerRef] = None,
        shown: Optional[CardRef] = None
    ) -> EventRecord:
        """
        Record a suggestion and its refutation.
        
        Args:
            suggester: Player making the suggestion
            card1, card2, card3: The suggested cards
            refuter: Player who refuted, None if nobody could
            shown: Card shown, None if it was not seen
        
        Returns:
            The history record for the event
        """
        clauses = self.rules.suggest_clauses(suggester, card1, card2, card3, refuter, shown)
        name = self._owner(suggester)
        cards = [self._card(card) for card in (card1, card2, card3)]
        refuter_name = self._owner(refuter) if refuter is not None else None
        shown_name = self._card(shown) if shown is not None else None
        
        if refuter_name is None:
            outcome = "nobody refuted"
        elif shown_name is None:
            outcome = f"{refuter_name} refuted"
        else:
            outcome = f"{refuter_name} showed {shown_name}"
        return self._commit(
            EventType.SUGGEST,
            f"{name} suggests {'/'.join(cards)}; {outcome}",
            clauses,
            actor=name,
            details={"cards": cards, "refuter": refuter_name, "shown": shown_name}
        )
    
    def accuse(
        self,
        accuser: OwnerRef,
        card1: CardRef,
        card2: CardRef,
        card3: CardRef,
        correct: bool
    ) -> EventRecord:
        """
        Record an accusation outcome.
        
        Args:
            accuser: Player making the accusation
            card1, card2, card3: The accused cards
            correct: Whether the accusation was right
        
        Returns:
            The history record for the event
        """
        clauses = self.rules.accuse_clauses(accuser, card1, card2, card3, correct)
        name = self._owner(accuser)
        cards = [self._card(card) for card in (card1, card2, card3)]
        return self._commit(
            EventType.ACCUSE,
            f"{name} accuses {'/'.join(cards)}: {'correct' if correct else 'wrong'}",
            clauses,
            actor=name,
            details={"cards": cards, "correct": bool(correct)}
        )
    
    def apply(self, event: GameEvent) -> EventRecord:
        """
        Apply a parsed event model.
        
        Raises:
            TypeError: If the event is not a known event model
        """
        if isinstance(event, HandEvent):
            return self.hand(event.player, event.cards)
        if isinstance(event, SuggestEvent):
            return self.suggest(event.suggester, *event.cards, refuter=event.refuter, shown=event.shown)
        if isinstance(event, AccuseEvent):
            return self.accuse(event.accuser, *event.cards, correct=event.correct)
        raise TypeError(f"Unsupported event type: {type(event).__name__}")
    
    def apply_all(self, events: Iterable[GameEvent]) -> List[EventRecord]:
        return [self.apply(event) for event in events]
    
    # --- Queries ---
    
    def query(self, owner: OwnerRef, card: CardRef) -> Truth:
        """
        Whether ``owner`` holds ``card`` given everything asserted so far.
        
        Raises:
            InvalidIdentifier: If owner or card is unknown
        """
        return self.oracle.query_literal(self.encoder.variable_of(owner, card))
    
    def is_consistent(self) -> bool:
        """Whether the asserted facts can all be true together."""
        return self.oracle.is_consistent()
    
    def find_contradiction(self) -> Optional[EventRecord]:
        """
        Locate the event that made the knowledge base inconsistent.
        
        Inconsistency is monotone in the clause prefix, so the earliest
        offending event is found by bisection over the history.
        
        Returns:
            The first event after which no model exists, or None if the
            knowledge base is consistent
        """
        if self.is_consistent():
            return None
        
        events = self.history.get_events()
        solver = self.oracle.solver
        low, high = 0, len(events) - 1
        while low < high:
            mid = (low + high) // 2
            if solver.satisfiable(self.store.prefix(events[mid].clause_end)):
                low = mid + 1
            else:
                high = mid
        culprit = events[low]
        logger.warning(f"Knowledge base became inconsistent at event #{culprit.sequence}: {culprit.summary}")
        return culprit
    
    def solution(self) -> Dict[CardCategory, Optional[str]]:
        """
        The case file card of each category, where it is proven.
        
        Nothing is proven by an inconsistent knowledge base, so every
        category is None there even though each query answers TRUE.

        Returns:
            Map of category -> card name, or None while undetermined
        """
        categories = self.setup.categories()
        result: Dict[CardCategory, Optional[str]] = {category: None for category in categories}
        if not self.is_consistent():
            logger.warning(f"[{self.name}] no solution: the knowledge base is inconsistent")
            return result
        for category, cards in categories.items():
            for card in cards:
                if self.query(self.case_file, card) is Truth.TRUE:
                    result[category] = card
                    break
        return result
    
    def notepad(self) -> str:
        """Render the deduction grid as text."""
        return render_notepad(self)
    
    # --- Internals ---
    
    def _commit(
        self,
        event_type: EventType,
        summary: str,
        clauses: List[Clause],
        actor: Optional[str] = None,
        details: Optional[dict] = None
    ) -> EventRecord:
        start = self.store.permanent_count
        count = self.store.add_clauses(clauses)
        record = self.history.record(event_type, summary, start, count, actor=actor, details=details)
        if event_type is not EventType.AXIOMS:
            logger.info(f"[{self.name}] {summary}")
        return record
    
    def _owner(self, owner: OwnerRef) -> str:
        return self.encoder.owner_name(self.encoder.owner_index(owner))
    
    def _card(self, card: CardRef) -> str:
        return self.encoder.card_name(self.encoder.card_index(card))
