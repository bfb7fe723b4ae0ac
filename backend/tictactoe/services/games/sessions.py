import itertools
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .board import X, empty_board


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class Session:
    id: str
    board: List[Optional[str]] = field(default_factory=empty_board)
    current_player: str = X
    active: bool = True
    winner: Optional[str] = None  # 'X' | 'O' | 'draw' once finished
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    ended_at: Optional[datetime] = None

    def to_dict(self):
        return {
            'id': self.id,
            'board': list(self.board),
            'currentPlayer': self.current_player,
            'active': self.active,
            'winner': self.winner,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
            'endedAt': isoformat(self.ended_at),
        }


class SessionStore:
    """Owner of every live session, keyed by id.

    Only ``create`` and ``get`` are exposed; the match coordinator is the
    single writer and mutates the returned records in place.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._ids = itertools.count(1)

    def create(self) -> Session:
        session_id = str(next(self._ids))
        while session_id in self._sessions:
            session_id = str(next(self._ids))
        now = utcnow()
        session = Session(id=session_id, created_at=now, updated_at=now)
        self._sessions[session_id] = session
        return session

    def get(self, session_id) -> Optional[Session]:
        if session_id is None:
            return None
        return self._sessions.get(str(session_id))

    def __contains__(self, session_id) -> bool:
        return self.get(session_id) is not None

    def __len__(self) -> int:
        return len(self._sessions)
