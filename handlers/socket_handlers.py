"""
Socket.IO Event Handlers for the lobby chat server.

Pure transport layer: wraps each Socket.IO session in a connection handle
and hands frames and disconnects to the message router. Contains no lobby
logic.
"""

import logging
from typing import Dict
from flask import request
from lobby import MessageRouter, SocketIOConnection

logger = logging.getLogger(__name__)

def register_socket_handlers(socketio, router: MessageRouter) -> Dict[str, SocketIOConnection]:
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        router: Message router for decoded frames

    Returns:
        The live sid -> connection table, owned by these handlers
    """
    connections: Dict[str, SocketIOConnection] = {}

    def _connection_for(sid: str) -> SocketIOConnection:
        connection = connections.get(sid)
        if connection is None:
            connection = SocketIOConnection(socketio, sid)
            connections[sid] = connection
        return connection

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        _connection_for(request.sid)
        logger.info(f"Client connected: {request.sid}")

    @socketio.on('message')
    def handle_message(data):
        """Handle one inbound JSON frame."""
        router.handle_frame(_connection_for(request.sid), data)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid} ({reason})")
        connection = connections.pop(request.sid, None)
        if connection is None:
            return
        connection.mark_closed()
        router.handle_disconnect(connection)

    logger.info("Socket.IO handlers registered successfully")
    return connections
