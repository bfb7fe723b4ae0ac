from flask import Blueprint, jsonify, request, current_app
from tictactoe.services.games import current_coordinator
from tictactoe.services.games.history import MAX_RECENT_GAMES


games = Blueprint('games', __name__)


@games.route('/new-game', methods=['POST'])
def create_game():
    """
    Creates a new game; players join it over Socket.IO with its id.
    """
    game = current_coordinator().create_session()
    return jsonify({'game': game.to_dict()})


@games.route('/game/<string:game_id>', methods=['GET'])
def get_game(game_id):
    """
    Returns the full state of a live or finished game.
    """
    game = current_coordinator().get_session(game_id)
    if not game:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify({'game': game.to_dict()})


@games.route('/recent-games', methods=['GET'])
def recent_games():
    """
    Lists the most recently finished games, newest first.
    """
    default_limit = current_app.config.get('RECENT_GAMES_LIMIT', MAX_RECENT_GAMES)
    try:
        limit = int(request.args.get('limit', default_limit))
    except (TypeError, ValueError):
        limit = default_limit
    try:
        rows = current_coordinator().history.list_recent(limit)
    except Exception:
        current_app.logger.exception('[recent-games] failed to fetch recent games')
        return jsonify({'error': 'Failed to fetch recent games'}), 500
    return jsonify({'games': rows})
