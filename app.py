"""
Lobby Chat Server

Flask-SocketIO backend that lets clients create or join lobbies, chat,
and watch membership change live. app.py is purely server setup and
handler registration; the lobby logic lives in the lobby package.
"""

import logging
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from lobby import (
    SessionRegistry, LobbyRegistry, Broadcaster, LobbyManager,
    MessageRouter, StaleConnectionSweeper
)
from handlers import register_socket_handlers, register_api_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'SECRET_KEY': settings.SECRET_KEY,
    'CORS_ORIGINS': settings.CORS_ORIGINS,
    'ASYNC_MODE': settings.ASYNC_MODE,
    'SWEEP_ENABLED': settings.SWEEP_ENABLED,
    'SWEEP_INTERVAL_SECONDS': settings.SWEEP_INTERVAL_SECONDS,
    'SWEEP_FULL_LEAVE': settings.SWEEP_FULL_LEAVE,
    'LOBBY_CODE_LENGTH': settings.LOBBY_CODE_LENGTH,
    'LOBBY_CODE_MAX_ATTEMPTS': settings.LOBBY_CODE_MAX_ATTEMPTS
}

def create_app(config=None):
    """
    Application factory that creates and configures the Flask app.

    Args:
        config: Optional overrides for DEFAULT_CONFIG

    Returns:
        Configured Flask app with SocketIO
    """

    # Flask configuration
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    if config:
        app.config.from_mapping(config)

    cors_origins = app.config['CORS_ORIGINS'].split(',')

    # CORS configuration for the web frontend
    CORS(app, origins=cors_origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=app.config['ASYNC_MODE'],
        ping_timeout=60,
        ping_interval=25
    )

    # Lobby core, one independent set per app
    sessions = SessionRegistry()
    lobbies = LobbyRegistry()
    broadcaster = Broadcaster(sessions, lobbies)
    lobby_manager = LobbyManager(
        sessions=sessions,
        lobbies=lobbies,
        broadcaster=broadcaster,
        code_length=app.config['LOBBY_CODE_LENGTH'],
        max_code_attempts=app.config['LOBBY_CODE_MAX_ATTEMPTS']
    )
    router = MessageRouter(lobby_manager)
    sweeper = StaleConnectionSweeper(
        lobby_manager,
        interval_seconds=app.config['SWEEP_INTERVAL_SECONDS'],
        full_leave=app.config['SWEEP_FULL_LEAVE']
    )

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_socket_handlers(socketio, router)
    register_api_handlers(app, lobby_manager)

    app.extensions['lobby_manager'] = lobby_manager
    app.extensions['message_router'] = router
    app.extensions['sweeper'] = sweeper

    if app.config['SWEEP_ENABLED']:
        sweeper.start(socketio)

    logger.info("Application initialization complete")

    return app, socketio

def main():
    """Main entry point for development server."""

    app, socketio = create_app()

    logger.info(f"Starting lobby chat server on port {settings.PORT}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host='0.0.0.0')

if __name__ == '__main__':
    main()
