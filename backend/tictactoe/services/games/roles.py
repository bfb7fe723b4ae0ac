from typing import Dict, Optional, Tuple

from .board import O, X
from .errors import SessionFull

ROLES = (X, O)

Binding = Tuple[str, str]


class RoleAssignment:
    """Seats connections in sessions.

    Keeps two tables: per session the connection holding each role, and per
    connection the (session_id, role) it holds. Sessions are referenced by
    id only; existence is checked by the caller.
    """

    def __init__(self):
        self._seats: Dict[str, Dict[str, Optional[str]]] = {}
        self._bindings: Dict[str, Binding] = {}

    def join(self, session_id: str, connection: str) -> str:
        session_id = str(session_id)
        current = self._bindings.get(connection)
        if current is not None and current[0] == session_id:
            return current[1]

        seats = self._seats.setdefault(session_id, {X: None, O: None})
        role = next((r for r in ROLES if seats[r] is None), None)
        if role is None:
            raise SessionFull()

        # one seat per connection: drop whatever it held elsewhere
        if current is not None:
            self.leave(connection)
        seats[role] = connection
        self._bindings[connection] = (session_id, role)
        return role

    def leave(self, connection: str) -> Optional[Binding]:
        binding = self._bindings.pop(connection, None)
        if binding is None:
            return None
        session_id, role = binding
        seats = self._seats.get(session_id)
        if seats and seats.get(role) == connection:
            seats[role] = None
        return binding

    def role_of(self, connection: str) -> Optional[Binding]:
        return self._bindings.get(connection)

    def occupancy(self, session_id: str) -> Dict[str, bool]:
        seats = self._seats.get(str(session_id)) or {}
        return {role: bool(seats.get(role)) for role in ROLES}
