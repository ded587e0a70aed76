"""
Notepad - Text rendering of the deduction grid.

One row per card, one column per player plus the case file. Cells are
Y (proven held), n (proven not held) or - (unknown).
"""

from typing import TYPE_CHECKING, List, NamedTuple

from pyclue.reasoner.entailment import Truth

if TYPE_CHECKING:
    from pyclue.reasoner.engine import ClueReasoner


class NotepadRow(NamedTuple):
    card: str
    cells: List[Truth]


def notepad_rows(reasoner: "ClueReasoner") -> List[NotepadRow]:
    """
    Query every (owner, card) pair.
    
    Args:
        reasoner: Game to inspect
    
    Returns:
        One row per card; cells ordered as players then case file
    """
    owners = reasoner.players + [reasoner.case_file]
    return [
        NotepadRow(card, [reasoner.query(owner, card) for owner in owners])
        for card in reasoner.cards
    ]


def render_notepad(reasoner: "ClueReasoner") -> str:
    """Tab-separated notepad with a header row of owner names."""
    owners = reasoner.players + [reasoner.case_file]
    lines = ["\t" + "\t".join(owners)]
    for row in notepad_rows(reasoner):
        lines.append(row.card + "\t" + "\t".join(cell.symbol for cell in row.cells))
    return "\n".join(lines)
