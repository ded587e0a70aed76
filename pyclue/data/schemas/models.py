"""
Pydantic Models for pyclue.

This module defines the data models exchanged with the reasoner:
- GameSetup: players, the three card categories and the case file name
- HandEvent / SuggestEvent / AccuseEvent: observed game events
- GameScript: a setup plus an ordered list of events
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class CardCategory(str, Enum):
    """The three fixed card categories."""
    SUSPECT = "suspect"
    WEAPON = "weapon"
    ROOM = "room"


class GameSetup(BaseModel):
    """
    Static description of one game.
    
    Player order is turn order. Card order is suspects, then weapons, then
    rooms, and fixes the card indexes used by the variable encoding.
    """
    players: List[str] = Field(..., min_length=1, description="Players in turn order")
    suspects: List[str] = Field(..., min_length=1, description="Suspect cards")
    weapons: List[str] = Field(..., min_length=1, description="Weapon cards")
    rooms: List[str] = Field(..., min_length=1, description="Room cards")
    case_file: str = Field("cf", min_length=1, description="Reserved name of the case file")
    
    @field_validator("players", "suspects", "weapons", "rooms")
    @classmethod
    def _names_unique(cls, value: List[str]) -> List[str]:
        if any(not name for name in value):
            raise ValueError("names must be non-empty")
        if len(set(value)) != len(value):
            raise ValueError(f"duplicate names in {value}")
        return value
    
    @model_validator(mode="after")
    def _check_reserved_names(self) -> "GameSetup":
        if self.case_file in self.players:
            raise ValueError(f"case file name '{self.case_file}' collides with a player")
        if len(set(self.cards)) != len(self.cards):
            raise ValueError("a card may belong to only one category")
        return self
    
    @property
    def cards(self) -> List[str]:
        """All cards in index order."""
        return self.suspects + self.weapons + self.rooms
    
    def categories(self) -> Dict[CardCategory, List[str]]:
        """Cards grouped by category, in index order."""
        return {
            CardCategory.SUSPECT: list(self.suspects),
            CardCategory.WEAPON: list(self.weapons),
            CardCategory.ROOM: list(self.rooms),
        }
    
    def category_of(self, card: str) -> CardCategory:
        for category, cards in self.categories().items():
            if card in cards:
                return category
        raise KeyError(card)
    
    @classmethod
    def classic(cls) -> "GameSetup":
        """The six-player board game."""
        return cls(
            players=["sc", "mu", "wh", "gr", "pe", "pl"],
            suspects=["mu", "pl", "gr", "pe", "sc", "wh"],
            weapons=["kn", "ca", "re", "ro", "pi", "wr"],
            rooms=["ha", "lo", "di", "ki", "ba", "co", "bi", "li", "st"],
        )


class HandEvent(BaseModel):
    """A player's complete hand became known."""
    kind: Literal["hand"] = "hand"
    player: str = Field(..., description="Owner whose hand is revealed")
    cards: List[str] = Field(..., description="Exactly the cards held")


class SuggestEvent(BaseModel):
    """A suggestion and its refutation (if any)."""
    kind: Literal["suggest"] = "suggest"
    suggester: str = Field(..., description="Player making the suggestion")
    cards: List[str] = Field(..., min_length=3, max_length=3, description="The three suggested cards")
    refuter: Optional[str] = Field(None, description="Player who refuted, None if nobody could")
    shown: Optional[str] = Field(None, description="Card shown, when it was seen")


class AccuseEvent(BaseModel):
    """An accusation and whether it was correct."""
    kind: Literal["accuse"] = "accuse"
    accuser: str = Field(..., description="Player making the accusation")
    cards: List[str] = Field(..., min_length=3, max_length=3, description="The three accused cards")
    correct: bool = Field(..., description="Whether the accusation matched the case file")


GameEvent = Annotated[
    Union[HandEvent, SuggestEvent, AccuseEvent],
    Field(discriminator="kind")
]


class GameScript(BaseModel):
    """
    A recorded game: the setup and the events observed, in order.
    """
    name: str = Field("game", description="Display name")
    setup: GameSetup = Field(default_factory=GameSetup.classic)
    events: List[GameEvent] = Field(default_factory=list)
    
    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "GameScript":
        """Load and validate a script from a JSON file."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        raw.setdefault("name", path.stem)
        return cls.model_validate(raw)
