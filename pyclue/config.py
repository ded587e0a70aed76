"""
Configuration module for pyclue.

Centralizes configuration management and environment variable handling.
The default game is the classic six-player board game with the case file
addressed as "cf".
"""

import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

from pyclue.data.schemas.models import GameSetup

# Load environment variables
load_dotenv()


DEFAULT_PLAYERS = "sc,mu,wh,gr,pe,pl"
DEFAULT_SUSPECTS = "mu,pl,gr,pe,sc,wh"
DEFAULT_WEAPONS = "kn,ca,re,ro,pi,wr"
DEFAULT_ROOMS = "ha,lo,di,ki,ba,co,bi,li,st"


def _env_list(name: str, default: str) -> List[str]:
    """Read a comma-separated list from the environment."""
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class GameConfig:
    """Players and cards of the game being tracked."""
    players: List[str] = field(default_factory=lambda: _env_list("CLUE_PLAYERS", DEFAULT_PLAYERS))
    suspects: List[str] = field(default_factory=lambda: _env_list("CLUE_SUSPECTS", DEFAULT_SUSPECTS))
    weapons: List[str] = field(default_factory=lambda: _env_list("CLUE_WEAPONS", DEFAULT_WEAPONS))
    rooms: List[str] = field(default_factory=lambda: _env_list("CLUE_ROOMS", DEFAULT_ROOMS))
    case_file: str = field(default_factory=lambda: os.getenv("CLUE_CASE_FILE", "cf"))
    
    def to_setup(self) -> GameSetup:
        """Build a validated GameSetup from this configuration."""
        return GameSetup(
            players=self.players,
            suspects=self.suspects,
            weapons=self.weapons,
            rooms=self.rooms,
            case_file=self.case_file
        )


@dataclass
class ReasonerConfig:
    """Reasoner behaviour."""
    # After a wrong accusation, assume the accuser held none of the named cards
    assume_rational_accuser: bool = field(
        default_factory=lambda: _env_bool("CLUE_RATIONAL_ACCUSER", "true")
    )
    log_solver_stats: bool = field(
        default_factory=lambda: _env_bool("CLUE_LOG_SOLVER_STATS", "false")
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class ClueConfig:
    """Main configuration class for pyclue."""
    game: GameConfig = field(default_factory=GameConfig)
    reasoner: ReasonerConfig = field(default_factory=ReasonerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = ClueConfig()


def get_config() -> ClueConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> ClueConfig:
    """Reload configuration from environment variables."""
    global config
    load_dotenv(override=True)
    config = ClueConfig()
    return config
