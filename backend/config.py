import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///tictactoe.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Socket.IO namespace the game events are served on
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Comma separated list of browser origins allowed to talk to the server
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    PORT = int(os.environ.get('PORT', '3000'))
    # Number of finished games returned by /api/recent-games (hard max 20)
    RECENT_GAMES_LIMIT = int(os.environ.get('RECENT_GAMES_LIMIT', '20'))
    # Finished-game summaries kept in memory besides the database
    HISTORY_MEMORY_LIMIT = int(os.environ.get('HISTORY_MEMORY_LIMIT', '100'))
