from collections import deque
from typing import Any, Dict, List

from tictactoe import db, socketio
from tictactoe.models import GameRecord
from .board import move_count, serialize_board
from .sessions import Session

MAX_RECENT_GAMES = 20


def summarize(session: Session) -> Dict[str, Any]:
    """Snapshot of a finished session in the shape stored in ``games``."""
    return {
        'id': session.id,
        'winner': session.winner,
        'created_at': session.created_at,
        'ended_at': session.ended_at,
        'total_moves': move_count(session.board),
        'final_board': serialize_board(session.board),
    }


class HistorySink:
    """Forwards finished games to the database without blocking play.

    ``record`` keeps a bounded in-memory log and dispatches the insert on a
    Socket.IO background task. A failed insert is rolled back and logged;
    the in-memory outcome is already final by then.

    ``recent`` is for diagnostics only; ``list_recent`` reads the database.
    """

    def __init__(self, app=None, memory_limit: int = 100):
        self.app = None
        self.recent = deque(maxlen=memory_limit)
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        self.app = app
        limit = int(app.config.get('HISTORY_MEMORY_LIMIT', self.recent.maxlen or 100))
        self.recent = deque(self.recent, maxlen=limit)

    def record(self, session: Session) -> None:
        app = self.app
        if app is None:
            raise RuntimeError('HistorySink.init_app() must be called before record()')
        summary = summarize(session)
        self.recent.append(summary)
        if app.config.get('TESTING') and not app.config.get('HISTORY_ASYNC_IN_TESTS'):
            self._save(summary)
            return
        try:
            socketio.start_background_task(self._save, summary)
        except Exception:
            app.logger.exception(f"[history-dispatch] game={summary['id']} falling back to inline save")
            self._save(summary)

    def _save(self, summary: Dict[str, Any]) -> None:
        app = self.app
        with app.app_context():
            try:
                db.session.add(GameRecord.from_summary(summary))
                db.session.commit()
                app.logger.info(f"[history-save] game={summary['id']} winner={summary['winner']}")
            except Exception:
                db.session.rollback()
                app.logger.exception(f"[history-save] game={summary['id']} failed")

    def list_recent(self, limit: int = MAX_RECENT_GAMES) -> List[Dict[str, Any]]:
        limit = max(1, min(int(limit), MAX_RECENT_GAMES))
        rows = (
            GameRecord.query
            .order_by(GameRecord.ended_at.desc(), GameRecord.id.desc())
            .limit(limit)
            .all()
        )
        return [row.to_dict() for row in rows]
