from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from tictactoe.main import main
    flask_app.register_blueprint(main)

    from tictactoe.api.games import games
    # Mount game routes under /api to match the browser client
    flask_app.register_blueprint(games, url_prefix='/api')

    # One coordinator per app: it owns the live sessions and seat bindings
    from tictactoe.services.games import HistorySink, MatchCoordinator
    from tictactoe.services.games.coordinator import EXTENSION_KEY
    from tictactoe.socketio_events import SocketIOTransport, register_socketio_handlers
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions[EXTENSION_KEY] = MatchCoordinator(
        transport=SocketIOTransport(socketio, namespace=namespace),
        history=HistorySink(flask_app),
        logger=flask_app.logger,
    )
    register_socketio_handlers(namespace=namespace)

    @click.command('history-reset')
    def history_reset_command():
        """Drops and recreates the finished-games table."""
        from tictactoe.models import GameRecord
        with flask_app.app_context():
            GameRecord.__table__.drop(db.engine, checkfirst=True)
            GameRecord.__table__.create(db.engine)
            print('Game history has been reset!')

    flask_app.cli.add_command(history_reset_command)

    return flask_app
