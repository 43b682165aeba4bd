"""
API Route Handlers for the lobby chat server.

Read-only status endpoints. Contains no lobby logic - only
request/response handling.
"""

import logging
from flask import jsonify
from lobby import LobbyManager

logger = logging.getLogger(__name__)

API_VERSION = '1.0.0'

def register_api_handlers(app, lobby_manager: LobbyManager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        lobby_manager: Lobby management instance
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'Lobby chat server is running',
            'version': API_VERSION
        })

    @app.route('/api/stats')
    def get_stats():
        """Live lobby and member counts."""
        try:
            return jsonify(lobby_manager.get_stats())

        except Exception as e:
            logger.error(f"Error getting statistics: {e}")
            return jsonify({'error': 'Failed to get statistics'}), 500

    @app.route('/api/lobbies/active')
    def get_active_lobbies():
        """Get list of active lobbies."""
        try:
            return jsonify({'lobbies': lobby_manager.get_active_lobbies()})

        except Exception as e:
            logger.error(f"Error getting active lobbies: {e}")
            return jsonify({'error': 'Failed to get lobbies'}), 500

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
