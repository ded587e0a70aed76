"""
Clue Rules - Translates game rules and observed events into clauses.

The fixed axioms say that every card is in exactly one place and that the
case file holds exactly one card of each category. Each observed event
(a revealed hand, a suggestion with its refutation, an accusation) becomes
a small group of clauses.
"""

from enum import Enum
from itertools import combinations
from typing import Iterator, List, Optional, Sequence

from pyclue.data.schemas.models import GameSetup
from pyclue.reasoner.clauses import Clause
from pyclue.reasoner.encoding import CardRef, OwnerRef, VariableEncoder
from pyclue.utils.logger import get_logger

logger = get_logger(__name__)


class InvalidEvent(ValueError):
    """An event that cannot happen under the rules of the game."""


class AccusationPolicy(str, Enum):
    """
    What a wrong accusation says about the accuser's own hand.
    
    - RATIONAL_ACCUSER: the accuser holds none of the three named cards,
      since nobody accuses with a card they can see in their hand. This is
      an assumption about play, not a rule of the game.
    - NO_ASSUMPTION: only "not all three are in the case file" is recorded.
    """
    RATIONAL_ACCUSER = "rational_accuser"
    NO_ASSUMPTION = "no_assumption"


class ClueRules:
    """
    Domain encoder for one game.
    
    All methods return clause lists and leave storage to the caller, so an
    event that fails validation contributes nothing.
    """
    
    def __init__(
        self,
        encoder: VariableEncoder,
        setup: GameSetup,
        accusation_policy: AccusationPolicy = AccusationPolicy.RATIONAL_ACCUSER
    ):
        """
        Initialize the rules.
        
        Args:
            encoder: Variable encoder built from the same setup
            setup: Game setup providing the card categories
            accusation_policy: How to read wrong accusations
        """
        self._encoder = encoder
        self._setup = setup
        self.accusation_policy = AccusationPolicy(accusation_policy)
    
    @property
    def case_file(self) -> int:
        return self._encoder.case_file_index
    
    def initial_clauses(self) -> List[Clause]:
        """
        The axioms, emitted once per game in a fixed order.
        
        Returns:
            Coverage clauses, pairwise owner exclusion, at-least-one and
            at-most-one case file card per category
        """
        enc = self._encoder
        owners = range(enc.owner_count)
        clauses: List[Clause] = []
        
        # Each card is somewhere (the case file included).
        for card in range(enc.card_count):
            clauses.append(tuple(enc.variable_of(owner, card) for owner in owners))
        
        # ...and in at most one place.
        for card in range(enc.card_count):
            for first, second in combinations(owners, 2):
                clauses.append((-enc.variable_of(first, card), -enc.variable_of(second, card)))
        
        categories = self._setup.categories()
        
        # The case file holds at least one card per category.
        for cards in categories.values():
            clauses.append(tuple(enc.variable_of(self.case_file, card) for card in cards))
        
        # ...and at most one.
        for cards in categories.values():
            for first, second in combinations(cards, 2):
                clauses.append((
                    -enc.variable_of(self.case_file, first),
                    -enc.variable_of(self.case_file, second)
                ))
        
        logger.debug(f"Generated {len(clauses)} axiom clauses")
        return clauses
    
    def hand_clauses(self, owner: OwnerRef, cards: Sequence[CardRef]) -> List[Clause]:
        """
        Clauses for a completely known hand.
        
        Args:
            owner: Owner whose hand is known (the case file is allowed)
            cards: Exactly the cards the owner holds
        
        Returns:
            A positive unit clause per held card and a negative one per
            every other card
        """
        enc = self._encoder
        owner_index = enc.owner_index(owner)
        held = [enc.card_index(card) for card in cards]
        if len(set(held)) != len(held):
            raise InvalidEvent(f"duplicate cards in hand of {enc.owner_name(owner_index)}: {list(cards)}")
        
        held_set = set(held)
        clauses: List[Clause] = [(enc.variable_of(owner_index, card),) for card in held]
        clauses.extend(
            (-enc.variable_of(owner_index, card),)
            for card in range(enc.card_count)
            if card not in held_set
        )
        return clauses
    
    def suggest_clauses(
        self,
        suggester: OwnerRef,
        card1: CardRef,
        card2: CardRef,
        card3: CardRef,
        refuter: Optional[OwnerRef] = None,
        shown: Optional[CardRef] = None
    ) -> List[Clause]:
        """
        Clauses for a suggestion and how it was answered.
        
        Players between the suggester and the refuter (in turn order) could
        not refute, so they hold none of the three cards. The refuter holds
        the shown card, or at least one of the three when the card was not
        seen. With no refuter at all, each card is with the suggester or in
        the case file.
        
        Args:
            suggester: Player making the suggestion
            card1, card2, card3: The suggested cards
            refuter: Player who refuted, None if nobody could
            shown: Card shown to us, None if not seen
        
        Returns:
            List of clauses
        
        Raises:
            InvalidEvent: If the players or shown card are inconsistent
                with a legal suggestion
        """
        enc = self._encoder
        suggester_index = self._player_index(suggester, "suggester")
        suggested = [enc.card_index(card) for card in (card1, card2, card3)]
        clauses: List[Clause] = []
        
        if refuter is None:
            if shown is not None:
                raise InvalidEvent("a card cannot be shown when nobody refuted")
            for card in suggested:
                clauses.append((
                    enc.variable_of(suggester_index, card),
                    enc.variable_of(self.case_file, card)
                ))
            return clauses
        
        refuter_index = self._player_index(refuter, "refuter")
        if refuter_index == suggester_index:
            raise InvalidEvent(f"{enc.owner_name(suggester_index)} cannot refute their own suggestion")
        
        for player in self.players_between(suggester_index, refuter_index):
            for card in suggested:
                clauses.append((-enc.variable_of(player, card),))
        
        if shown is not None:
            shown_index = enc.card_index(shown)
            if shown_index not in suggested:
                raise InvalidEvent(f"shown card {enc.card_name(shown_index)} was not suggested")
            clauses.append((enc.variable_of(refuter_index, shown_index),))
        else:
            clauses.append(tuple(enc.variable_of(refuter_index, card) for card in suggested))
        return clauses
    
    def accuse_clauses(
        self,
        accuser: OwnerRef,
        card1: CardRef,
        card2: CardRef,
        card3: CardRef,
        correct: bool
    ) -> List[Clause]:
        """
        Clauses for an accusation outcome.
        
        Args:
            accuser: Player making the accusation
            card1, card2, card3: The accused cards
            correct: Whether the accusation was right
        
        Returns:
            List of clauses
        """
        enc = self._encoder
        accuser_index = self._player_index(accuser, "accuser")
        accused = [enc.card_index(card) for card in (card1, card2, card3)]
        
        if correct:
            return [(enc.variable_of(self.case_file, card),) for card in accused]
        
        clauses: List[Clause] = [
            tuple(-enc.variable_of(self.case_file, card) for card in accused)
        ]
        if self.accusation_policy is AccusationPolicy.RATIONAL_ACCUSER:
            clauses.extend((-enc.variable_of(accuser_index, card),) for card in accused)
        return clauses
    
    def players_between(self, start: int, stop: int) -> Iterator[int]:
        """
        Players strictly after ``start`` and before ``stop`` in turn order.
        
        Turn order wraps from the last player back to the first and never
        includes the case file.
        """
        count = self._encoder.player_count
        player = (start + 1) % count
        while player != stop and player != start:
            yield player
            player = (player + 1) % count
    
    def _player_index(self, player: OwnerRef, role: str) -> int:
        index = self._encoder.owner_index(player)
        if index == self.case_file:
            raise InvalidEvent(f"the case file cannot act as {role}")
        return index
