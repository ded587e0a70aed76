"""
Data Schemas for pyclue.

This module exports the Pydantic models and enums describing a game
and the events observed during it.
"""

from pyclue.data.schemas.models import (
    # Enums
    CardCategory,
    
    # Models
    GameSetup,
    HandEvent,
    SuggestEvent,
    AccuseEvent,
    GameEvent,
    GameScript,
)

__all__ = [
    # Enums
    'CardCategory',
    
    # Models
    'GameSetup',
    'HandEvent',
    'SuggestEvent',
    'AccuseEvent',
    'GameEvent',
    'GameScript',
]
