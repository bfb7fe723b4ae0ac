import logging
import threading
from typing import Optional

from flask import current_app

from .board import DRAW, check_draw, check_win, is_legal_move, other_mark
from .errors import SessionNotFound, WrongTurn
from .roles import RoleAssignment
from .sessions import Session, SessionStore, utcnow

EXTENSION_KEY = 'match_coordinator'


class MatchCoordinator:
    """Turns join / move / disconnect intents into session transitions.

    Every intent runs to completion under one lock, so two moves can never
    both pass the turn and legality checks for the same session. The
    coordinator talks to clients only through ``transport`` (subscribe,
    broadcast to a session, unicast to a connection) and hands finished
    sessions to ``history`` without waiting on it.
    """

    def __init__(self, transport, history, store: Optional[SessionStore] = None,
                 roles: Optional[RoleAssignment] = None, logger=None):
        self.transport = transport
        self.history = history
        self.store = store or SessionStore()
        self.roles = roles or RoleAssignment()
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()

    def create_session(self) -> Session:
        with self._lock:
            session = self.store.create()
        self.logger.info(f"[create] game={session.id}")
        return session

    def get_session(self, session_id) -> Optional[Session]:
        return self.store.get(session_id)

    def join(self, session_id, connection: str) -> str:
        with self._lock:
            session = self.store.get(session_id)
            if session is None:
                raise SessionNotFound()
            previous = self.roles.role_of(connection)
            role = self.roles.join(session.id, connection)
            if previous and previous[0] != session.id:
                self.transport.unsubscribe(connection, previous[0])
                self._broadcast_players(previous[0], skip=connection)
            self.transport.subscribe(connection, session.id)
            self.transport.unicast(connection, 'joinedGame', {
                'gameId': session.id,
                'symbol': role,
                'game': session.to_dict(),
            })
            self._broadcast_players(session.id)
        self.logger.info(f"[join] sid={connection} game={session.id} symbol={role}")
        return role

    def apply_move(self, connection: str, index, session_id=None) -> Optional[Session]:
        """Apply ``index`` for the mark bound to ``connection``.

        Returns the session when the move was accepted and ``None`` when it
        was silently dropped (unbound connection, unknown or finished game,
        out-of-range or occupied cell). Raises ``WrongTurn`` when it is the
        other player's move.
        """
        with self._lock:
            binding = self.roles.role_of(connection)
            if binding is None:
                self.logger.debug(f"[move-drop] sid={connection} unbound")
                return None
            bound_id, mark = binding
            if session_id is not None and str(session_id) != bound_id:
                self.logger.debug(f"[move-drop] sid={connection} bound to game={bound_id} not {session_id}")
                return None

            session = self.store.get(bound_id)
            if session is None or not session.active:
                return None
            if session.current_player != mark:
                raise WrongTurn()
            if not is_legal_move(session.board, index):
                self.logger.debug(f"[move-drop] game={session.id} illegal index={index!r}")
                return None

            session.board[index] = mark
            session.updated_at = utcnow()
            if check_win(session.board, mark):
                self._finish(session, mark)
            elif check_draw(session.board):
                self._finish(session, DRAW)
            else:
                session.current_player = other_mark(mark)

            self.transport.broadcast(session.id, 'gameState', {'game': session.to_dict()})
            return session

    def disconnect(self, connection: str):
        with self._lock:
            binding = self.roles.leave(connection)
            if binding is None:
                return None
            session_id, role = binding
            self._broadcast_players(session_id, skip=connection)
        self.logger.info(f"[leave] sid={connection} game={session_id} symbol={role}")
        return binding

    def _finish(self, session: Session, winner: str) -> None:
        session.active = False
        session.winner = winner
        session.ended_at = utcnow()
        self.logger.info(f"[finish] game={session.id} winner={winner}")
        self.history.record(session)

    def _broadcast_players(self, session_id: str, skip: Optional[str] = None) -> None:
        self.transport.broadcast(session_id, 'playerInfo', {
            'gameId': session_id,
            'players': self.roles.occupancy(session_id),
        }, skip=skip)


def current_coordinator() -> MatchCoordinator:
    return current_app.extensions[EXTENSION_KEY]
