"""
Variable Encoding - Maps "owner holds card" propositions to SAT variables.

Owners are the players in turn order followed by the case file. Cards are
indexed suspects first, then weapons, then rooms. The proposition
"owner O holds card C" is the variable O * M + C + 1 where M is the number
of cards, so variables run from 1 to (N + 1) * M.
"""

from typing import List, Sequence, Tuple, Union

from pyclue.data.schemas.models import GameSetup

OwnerRef = Union[str, int]
CardRef = Union[str, int]


class InvalidIdentifier(KeyError):
    """An owner or card name/index that the game does not know."""
    
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "invalid identifier"


class VariableEncoder:
    """
    Bijection between (owner, card) pairs and positive variable ids.
    
    Owners and cards can be referenced by name or by index. The case file
    has index ``player_count`` and is addressed by its reserved name.
    """
    
    def __init__(self, players: Sequence[str], cards: Sequence[str], case_file: str = "cf"):
        """
        Initialize the encoder.
        
        Args:
            players: Player names in turn order
            cards: All card names in index order
            case_file: Reserved name of the case file pseudo-owner
        """
        if case_file in players:
            raise ValueError(f"case file name '{case_file}' collides with a player")
        self._players: List[str] = list(players)
        self._cards: List[str] = list(cards)
        self._case_file = case_file
        self._owner_index = {name: i for i, name in enumerate(self._players)}
        self._owner_index[case_file] = len(self._players)
        self._card_index = {name: i for i, name in enumerate(self._cards)}
        if len(self._owner_index) != len(self._players) + 1:
            raise ValueError("duplicate player names")
        if len(self._card_index) != len(self._cards):
            raise ValueError("duplicate card names")
    
    @classmethod
    def from_setup(cls, setup: GameSetup) -> "VariableEncoder":
        return cls(setup.players, setup.cards, setup.case_file)
    
    @property
    def player_count(self) -> int:
        return len(self._players)
    
    @property
    def owner_count(self) -> int:
        """Players plus the case file."""
        return len(self._players) + 1
    
    @property
    def card_count(self) -> int:
        return len(self._cards)
    
    @property
    def case_file_index(self) -> int:
        return len(self._players)
    
    @property
    def case_file(self) -> str:
        return self._case_file
    
    @property
    def num_variables(self) -> int:
        return self.owner_count * self.card_count
    
    @property
    def players(self) -> List[str]:
        return list(self._players)
    
    @property
    def cards(self) -> List[str]:
        return list(self._cards)
    
    def owner_index(self, owner: OwnerRef) -> int:
        """
        Resolve an owner reference to its index.
        
        Raises:
            InvalidIdentifier: If the owner is unknown or out of range
        """
        return self._resolve(owner, self._owner_index, self.owner_count, "owner")
    
    def card_index(self, card: CardRef) -> int:
        """
        Resolve a card reference to its index.
        
        Raises:
            InvalidIdentifier: If the card is unknown or out of range
        """
        return self._resolve(card, self._card_index, self.card_count, "card")
    
    def owner_name(self, index: int) -> str:
        index = self.owner_index(index)
        return self._case_file if index == self.case_file_index else self._players[index]
    
    def card_name(self, index: int) -> str:
        return self._cards[self.card_index(index)]
    
    def variable_of(self, owner: OwnerRef, card: CardRef) -> int:
        """
        Get the variable for "owner holds card".
        
        Args:
            owner: Owner name or index (case file included)
            card: Card name or index
        
        Returns:
            Variable id in 1..num_variables
        """
        return self.owner_index(owner) * self.card_count + self.card_index(card) + 1
    
    def literal(self, owner: OwnerRef, card: CardRef, holds: bool = True) -> int:
        """Signed literal asserting (or denying) that owner holds card."""
        variable = self.variable_of(owner, card)
        return variable if holds else -variable
    
    def decode(self, variable: int) -> Tuple[int, int]:
        """
        Invert variable_of.
        
        Args:
            variable: Variable id (sign is ignored)
        
        Returns:
            (owner_index, card_index)
        
        Raises:
            InvalidIdentifier: If the variable is outside the encoded range
        """
        if isinstance(variable, bool) or not isinstance(variable, int):
            raise InvalidIdentifier(f"variable must be an int, got {variable!r}")
        magnitude = abs(variable)
        if not 1 <= magnitude <= self.num_variables:
            raise InvalidIdentifier(f"variable {variable} outside 1..{self.num_variables}")
        return divmod(magnitude - 1, self.card_count)
    
    def describe(self, literal: int) -> str:
        """Readable form of a literal, e.g. '~sc:wh'."""
        owner, card = self.decode(literal)
        sign = "" if literal > 0 else "~"
        return f"{sign}{self.owner_name(owner)}:{self._cards[card]}"
    
    def describe_clause(self, clause: Sequence[int]) -> str:
        return " | ".join(self.describe(lit) for lit in clause)
    
    @staticmethod
    def _resolve(ref: Union[str, int], by_name: dict, size: int, kind: str) -> int:
        if isinstance(ref, bool):
            raise InvalidIdentifier(f"unknown {kind}: {ref!r}")
        if isinstance(ref, int):
            if 0 <= ref < size:
                return ref
            raise InvalidIdentifier(f"{kind} index {ref} outside 0..{size - 1}")
        if isinstance(ref, str) and ref in by_name:
            return by_name[ref]
        raise InvalidIdentifier(f"unknown {kind}: {ref!r}")
