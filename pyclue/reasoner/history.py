"""
Event History - Ordered log of the events applied to a game.

Every event records which slice of the clause store it produced, so
diagnostics can map clauses back to the event that asserted them.
"""

import hashlib
import json
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pyclue.utils.logger import get_logger

logger = get_logger(__name__)


class EventType(str, Enum):
    """Types of events in the history."""
    AXIOMS = "axioms"
    HAND = "hand"
    SUGGEST = "suggest"
    ACCUSE = "accuse"


@dataclass
class EventRecord:
    """
    A single applied event.
    
    Attributes:
        event_type: Type of the event
        summary: Human-readable description
        sequence: Position in the history (axioms are 0)
        clause_start: Index of the first clause the event added
        clause_count: Number of clauses the event added
        actor: Player who acted, if any
        details: Event arguments
        timestamp: When the event was applied
        event_id: Short content hash
    """
    event_type: EventType
    summary: str
    sequence: int
    clause_start: int
    clause_count: int
    actor: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default="")
    
    def __post_init__(self):
        """Generate event ID if not provided."""
        if not self.event_id:
            content = f"{self.event_type.value}:{self.summary}:{self.sequence}:{self.timestamp.isoformat()}"
            self.event_id = hashlib.md5(content.encode()).hexdigest()[:12]
    
    @property
    def clause_end(self) -> int:
        """One past the last clause the event added."""
        return self.clause_start + self.clause_count
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "summary": self.summary,
            "sequence": self.sequence,
            "clause_start": self.clause_start,
            "clause_count": self.clause_count,
            "actor": self.actor,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }


class EventHistory:
    """
    Append-only record of the events applied to one game.
    
    Records are never removed, matching the clause store they index into.
    """
    
    def __init__(self, game_name: str = "game"):
        """
        Initialize the history.
        
        Args:
            game_name: Name used in log messages
        """
        self._game_name = game_name
        self._events: List[EventRecord] = []
        self._lock = threading.Lock()
    
    def record(
        self,
        event_type: EventType,
        summary: str,
        clause_start: int,
        clause_count: int,
        actor: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> EventRecord:
        """
        Append an event.
        
        Args:
            event_type: Type of the event
            summary: Human-readable description
            clause_start: Index of the first clause added
            clause_count: Number of clauses added
            actor: Player who acted, if any
            details: Event arguments
        
        Returns:
            The created EventRecord
        """
        with self._lock:
            event = EventRecord(
                event_type=event_type,
                summary=summary,
                sequence=len(self._events),
                clause_start=clause_start,
                clause_count=clause_count,
                actor=actor,
                details=details or {}
            )
            self._events.append(event)
        logger.debug(f"[{self._game_name}] #{event.sequence} {summary} (+{clause_count} clauses)")
        return event
    
    def get_events(self, event_type: Optional[EventType] = None) -> List[EventRecord]:
        """All events, optionally filtered by type."""
        with self._lock:
            if event_type is None:
                return list(self._events)
            return [e for e in self._events if e.event_type == event_type]
    
    def latest(self) -> Optional[EventRecord]:
        with self._lock:
            return self._events[-1] if self._events else None
    
    def export_to_json(self) -> str:
        """Export history to JSON string."""
        with self._lock:
            return json.dumps(
                [e.to_dict() for e in self._events],
                indent=2
            )
    
    def __len__(self) -> int:
        """Return number of events."""
        with self._lock:
            return len(self._events)
    
    def __iter__(self):
        return iter(self.get_events())
