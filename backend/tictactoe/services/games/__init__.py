"""Game domain services: board rules, sessions, seats and match flow.

This package contains the game logic imported by HTTP routes and socket
handlers, keeping transport concerns separated from core game mechanics.
Only ``history`` touches the database.
"""

from .coordinator import MatchCoordinator, current_coordinator
from .errors import GameError, SessionFull, SessionNotFound, WrongTurn
from .history import HistorySink
from .roles import RoleAssignment
from .sessions import Session, SessionStore
