class GameError(Exception):
    """Base for conditions reported back to the connection that caused them."""

    message = 'Game error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class SessionNotFound(GameError):
    message = 'Game not found'


class SessionFull(GameError):
    message = 'Game room is full (already 2 players).'


class WrongTurn(GameError):
    message = 'Not your turn'
