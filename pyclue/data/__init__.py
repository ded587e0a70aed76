"""
Data module - Schemas and bundled game scripts for pyclue.

This module contains:
- schemas: Pydantic models for game setups and events
- scripts: recorded games in JSON form
"""

from pathlib import Path

SCRIPTS_DIR = Path(__file__).parent / "scripts"
