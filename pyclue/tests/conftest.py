"""Shared fixtures and configuration for pyclue tests."""

import json
from pathlib import Path
from typing import Any, Dict, Generator

import pytest

from pyclue.config import ClueConfig, reload_config
from pyclue.data import SCRIPTS_DIR
from pyclue.data.schemas.models import GameScript, GameSetup
from pyclue.reasoner.engine import ClueReasoner
from pyclue.reasoner.rules import AccusationPolicy

CONFIG_ENV_VARS = [
    "CLUE_PLAYERS",
    "CLUE_SUSPECTS",
    "CLUE_WEAPONS",
    "CLUE_ROOMS",
    "CLUE_CASE_FILE",
    "CLUE_RATIONAL_ACCUSER",
    "CLUE_LOG_SOLVER_STATS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[ClueConfig, None, None]:
    """Configuration built from an environment with no pyclue variables set."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("pyclue.config.load_dotenv", lambda *args, **kwargs: False)
    
    yield reload_config()
    
    # Restore the environment before rebuilding the global config
    monkeypatch.undo()
    reload_config()


@pytest.fixture
def small_setup() -> GameSetup:
    """Three players, two cards per category."""
    return GameSetup(
        players=["A", "B", "C"],
        suspects=["s1", "s2"],
        weapons=["w1", "w2"],
        rooms=["r1", "r2"],
        case_file="cf"
    )


@pytest.fixture
def small_reasoner(small_setup: GameSetup) -> ClueReasoner:
    """A fresh reasoner for the small game."""
    return ClueReasoner(
        setup=small_setup,
        accusation_policy=AccusationPolicy.RATIONAL_ACCUSER,
        name="small"
    )


@pytest.fixture
def classic_setup() -> GameSetup:
    return GameSetup.classic()


@pytest.fixture
def classic_script() -> GameScript:
    """The bundled classic game."""
    return GameScript.from_json_file(SCRIPTS_DIR / "classic.json")


@pytest.fixture
def write_script(tmp_path: Path):
    """Write a script dict to a temporary JSON file and return its path."""
    def _write(data: Dict[str, Any], name: str = "script.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write

