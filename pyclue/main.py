"""
pyclue - Main Entry Point

Replays a recorded game through the reasoner and prints the resulting
notepad and whatever part of the solution has been proven.

Usage:
    python -m pyclue.main [--script PATH] [--no-rational-accuser] [--log-level LEVEL]
                          [--export-history PATH]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from pyclue.config import get_config
from pyclue.data import SCRIPTS_DIR
from pyclue.data.schemas.models import GameScript
from pyclue.reasoner.encoding import InvalidIdentifier
from pyclue.reasoner.engine import ClueReasoner
from pyclue.reasoner.rules import AccusationPolicy
from pyclue.utils.logger import get_logger, set_level

# Load environment variables
load_dotenv()

logger = get_logger("pyclue.main")

DEFAULT_SCRIPT = SCRIPTS_DIR / "classic.json"


def load_script(path: Path) -> GameScript:
    """
    Load a recorded game.
    
    Args:
        path: JSON script path
    
    Returns:
        Validated GameScript
    """
    logger.info(f"Loading script {path}")
    return GameScript.from_json_file(path)


def run_script(script: GameScript, accusation_policy: Optional[AccusationPolicy] = None) -> ClueReasoner:
    """
    Build a reasoner for the script's setup and apply all of its events.
    
    Args:
        script: Recorded game
        accusation_policy: Overrides the configured policy when given
    
    Returns:
        The reasoner after the last event
    """
    reasoner = ClueReasoner(
        setup=script.setup,
        accusation_policy=accusation_policy,
        name=script.name
    )
    reasoner.apply_all(script.events)
    logger.info(f"Applied {len(script.events)} events; knowledge base has {len(reasoner.store)} clauses")
    return reasoner


def format_solution(reasoner: ClueReasoner) -> str:
    parts = []
    for category, card in reasoner.solution().items():
        parts.append(f"{category.value}={card or '?'}")
    return "Solution: " + ", ".join(parts)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    config = get_config()
    
    parser = argparse.ArgumentParser(
        description="pyclue - propositional deduction for Clue-style games"
    )
    parser.add_argument(
        "--script",
        type=Path,
        default=DEFAULT_SCRIPT,
        help="JSON game script to replay (defaults to the bundled classic game)"
    )
    parser.add_argument(
        "--no-rational-accuser",
        action="store_true",
        help="Do not assume a wrong accuser holds none of the accused cards"
    )
    parser.add_argument(
        "--log-level",
        default=config.logging.level,
        help="Logging level (DEBUG, INFO, WARNING, ...)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Shortcut for --log-level DEBUG"
    )
    parser.add_argument(
        "--export-history",
        type=Path,
        default=None,
        help="Write the applied events and their clause ranges to this JSON file"
    )
    
    args = parser.parse_args(argv)
    set_level("DEBUG" if args.verbose else args.log_level)
    
    policy = AccusationPolicy.NO_ASSUMPTION if args.no_rational_accuser else None
    
    try:
        script = load_script(args.script)
        reasoner = run_script(script, accusation_policy=policy)
    except (OSError, ValueError, InvalidIdentifier) as e:
        # Malformed JSON, schema errors and illegal events
        logger.error(f"Cannot replay {args.script}: {e}")
        return 2
    
    if args.export_history is not None:
        args.export_history.write_text(reasoner.history.export_to_json(), encoding="utf-8")
        logger.info(f"History written to {args.export_history}")
    
    if not reasoner.is_consistent():
        culprit = reasoner.find_contradiction()
        print(f"Inconsistent game: contradiction introduced by event #{culprit.sequence}: {culprit.summary}")
        return 1
    
    print(reasoner.notepad())
    print(format_solution(reasoner))
    return 0


if __name__ == "__main__":
    sys.exit(main())
