from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from tictactoe import socketio
from tictactoe.services.games import GameError, WrongTurn, current_coordinator


def room_for(game_id) -> str:
    return f"game:{game_id}"


class SocketIOTransport:
    """Room-per-game delivery used by the match coordinator.

    The Socket.IO room ``game:<id>`` is the subscriber set of a game.
    """

    def __init__(self, server, namespace: str = '/'):
        self.server = server
        self.namespace = namespace

    def subscribe(self, sid: str, game_id: str) -> None:
        join_room(room_for(game_id), sid=sid, namespace=self.namespace)

    def unsubscribe(self, sid: str, game_id: str) -> None:
        leave_room(room_for(game_id), sid=sid, namespace=self.namespace)

    def broadcast(self, game_id: str, event: str, payload, skip=None) -> None:
        self.server.emit(event, payload, to=room_for(game_id), namespace=self.namespace, skip_sid=skip)

    def unicast(self, sid: str, event: str, payload) -> None:
        self.server.emit(event, payload, to=sid, namespace=self.namespace)


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    current_coordinator().disconnect(_get_sid())
    current_app.logger.info(f"[disconnect] sid={_get_sid()}")


def handle_join_game(data):
    game_id = data.get('gameId') if isinstance(data, dict) else None
    if game_id is None or game_id == '':
        emit('errorMessage', 'gameId is required')
        return
    try:
        current_coordinator().join(str(game_id), _get_sid())
    except GameError as exc:
        current_app.logger.info(f"[join-reject] sid={_get_sid()} game={game_id} reason={exc.message}")
        emit('errorMessage', exc.message)


def handle_make_move(data):
    if not isinstance(data, dict):
        return
    try:
        current_coordinator().apply_move(_get_sid(), data.get('index'), session_id=data.get('gameId'))
    except WrongTurn as exc:
        emit('errorMessage', exc.message)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('makeMove', handle_make_move, namespace=namespace)
