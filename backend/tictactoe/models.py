from datetime import timezone

from tictactoe import db


def _as_utc_iso(value):
    if value is None:
        return None
    # SQLite hands DateTime columns back naive; they are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class GameRecord(db.Model):
    """One finished game, written once by the history sink."""
    __tablename__ = 'games'
    id = db.Column(db.Integer, primary_key=True)
    game_uuid = db.Column(db.String(36), nullable=False, index=True)
    winner = db.Column(db.String(8), nullable=False)  # X, O, draw
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)
    ended_at = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    total_moves = db.Column(db.Integer, nullable=False)
    final_board = db.Column(db.String(9), nullable=False)

    @classmethod
    def from_summary(cls, summary):
        return cls(
            game_uuid=summary['id'],
            winner=summary['winner'],
            created_at=summary['created_at'],
            ended_at=summary['ended_at'],
            total_moves=summary['total_moves'],
            final_board=summary['final_board'],
        )

    def to_dict(self):
        return {
            'id': self.game_uuid,
            'winner': self.winner,
            'createdAt': _as_utc_iso(self.created_at),
            'endedAt': _as_utc_iso(self.ended_at),
            'totalMoves': self.total_moves,
            'finalBoard': self.final_board,
        }
