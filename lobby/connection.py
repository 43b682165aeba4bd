"""
Connection handles for lobby members.

A handle wraps one duplex channel to a remote client. The lobby core only
ever asks a handle whether it is open and hands it text frames to send;
the transport layer owns the underlying socket.
"""

import logging

logger = logging.getLogger(__name__)

class ConnectionHandle:
    """Base class for a channel to one client."""

    @property
    def connection_id(self) -> str:
        raise NotImplementedError

    @property
    def is_open(self) -> bool:
        raise NotImplementedError

    def _deliver(self, text: str) -> None:
        raise NotImplementedError

    def send(self, text: str) -> bool:
        """
        Send a text frame to the client.

        Fails silently when the connection is closed or the transport
        raises; the failure is only logged.

        Returns:
            True if the frame was handed to the transport, False otherwise
        """
        if not self.is_open:
            logger.debug(f"Skipped send to closed connection {self.connection_id}")
            return False
        try:
            self._deliver(text)
            return True
        except Exception as e:
            logger.debug(f"Send to connection {self.connection_id} failed: {e}")
            return False

class SocketIOConnection(ConnectionHandle):
    """
    Connection handle backed by a Flask-SocketIO session.

    Frames are sent as Socket.IO 'message' events addressed to the session
    id. The server queues them per client, so a send never waits on a slow
    receiver.
    """

    def __init__(self, socketio, sid: str, namespace: str = '/'):
        """
        Args:
            socketio: SocketIO instance the session belongs to
            sid: Socket.IO session id
            namespace: Socket.IO namespace
        """
        self.socketio = socketio
        self.sid = sid
        self.namespace = namespace
        self._closed = False

    @property
    def connection_id(self) -> str:
        return self.sid

    @property
    def is_open(self) -> bool:
        if self._closed:
            return False
        server = self.socketio.server
        if server is None:
            return False
        return server.manager.is_connected(self.sid, self.namespace)

    def mark_closed(self) -> None:
        """Called by the transport layer when the session disconnects."""
        self._closed = True

    def _deliver(self, text: str) -> None:
        self.socketio.send(text, to=self.sid, namespace=self.namespace)

    def __repr__(self) -> str:
        return f"SocketIOConnection(sid={self.sid!r}, closed={self._closed})"
