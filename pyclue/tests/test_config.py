"""Tests for environment-driven configuration."""

import pytest

from pyclue.config import DEFAULT_ROOMS, get_config, reload_config
from pyclue.data.schemas.models import GameSetup
from pyclue.reasoner.engine import ClueReasoner
from pyclue.reasoner.rules import AccusationPolicy


class TestDefaults:
    
    def test_classic_game(self, clean_config):
        setup = clean_config.game.to_setup()
        assert setup == GameSetup.classic()
        assert setup.rooms == DEFAULT_ROOMS.split(",")
        assert setup.case_file == "cf"
    
    def test_reasoner_defaults(self, clean_config):
        assert clean_config.reasoner.assume_rational_accuser is True
        assert clean_config.reasoner.log_solver_stats is False
        assert clean_config.logging.level == "INFO"
    
    def test_reload_replaces_global(self, clean_config):
        assert get_config() is clean_config


class TestEnvironment:
    
    def test_custom_game(self, clean_config, monkeypatch):
        monkeypatch.setenv("CLUE_PLAYERS", "ann, bob ,cy")
        monkeypatch.setenv("CLUE_SUSPECTS", "s1,s2")
        monkeypatch.setenv("CLUE_WEAPONS", "w1,w2,")
        monkeypatch.setenv("CLUE_ROOMS", "r1")
        monkeypatch.setenv("CLUE_CASE_FILE", "envelope")
        setup = reload_config().game.to_setup()
        assert setup.players == ["ann", "bob", "cy"]
        assert setup.weapons == ["w1", "w2"]
        assert setup.case_file == "envelope"
    
    def test_reasoner_uses_configured_game(self, clean_config, monkeypatch):
        monkeypatch.setenv("CLUE_PLAYERS", "A,B")
        monkeypatch.setenv("CLUE_SUSPECTS", "s1,s2")
        monkeypatch.setenv("CLUE_WEAPONS", "w1")
        monkeypatch.setenv("CLUE_ROOMS", "r1")
        reload_config()
        reasoner = ClueReasoner()
        assert reasoner.players == ["A", "B"]
        assert len(reasoner.cards) == 4
    
    @pytest.mark.parametrize("value,expected", [
        ("false", AccusationPolicy.NO_ASSUMPTION),
        ("FALSE", AccusationPolicy.NO_ASSUMPTION),
        ("true", AccusationPolicy.RATIONAL_ACCUSER),
    ])
    def test_accusation_policy(self, clean_config, monkeypatch, small_setup, value, expected):
        monkeypatch.setenv("CLUE_RATIONAL_ACCUSER", value)
        reload_config()
        assert ClueReasoner(setup=small_setup).accusation_policy is expected
    
    def test_explicit_policy_wins(self, clean_config, monkeypatch, small_setup):
        monkeypatch.setenv("CLUE_RATIONAL_ACCUSER", "false")
        reload_config()
        reasoner = ClueReasoner(setup=small_setup, accusation_policy=AccusationPolicy.RATIONAL_ACCUSER)
        assert reasoner.accusation_policy is AccusationPolicy.RATIONAL_ACCUSER
    
    def test_log_level_upper_cased(self, clean_config, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert reload_config().logging.level == "DEBUG"
    
    def test_invalid_game_rejected(self, clean_config, monkeypatch):
        monkeypatch.setenv("CLUE_PLAYERS", "A,cf")
        with pytest.raises(ValueError):
            reload_config().game.to_setup()
