"""
Message router for inbound client frames.

Decodes each frame into a command and dispatches it to the LobbyManager.
Holds no state of its own. Errors are reported only to the connection
that sent the offending frame.
"""

import logging
from typing import Any, Callable, Dict, Optional
from .commands import (
    CreateLobby, JoinLobby, SendMessage, LeaveLobby,
    parse_frame, decode_command, request_id_of
)
from .connection import ConnectionHandle
from .errors import LobbyError
from .manager import LobbyManager
from utils.constants import MESSAGE_TYPES, ERROR_MESSAGES

logger = logging.getLogger(__name__)

class MessageRouter:
    """Dispatches decoded commands by type."""

    def __init__(self, lobby_manager: LobbyManager):
        self.lobby_manager = lobby_manager
        self._handlers: Dict[type, Callable[[ConnectionHandle, Any], None]] = {
            CreateLobby: self._handle_create_lobby,
            JoinLobby: self._handle_join_lobby,
            SendMessage: self._handle_send_message,
            LeaveLobby: self._handle_leave_lobby
        }

    def handle_frame(self, connection: ConnectionHandle, raw: Any) -> None:
        """
        Process one inbound frame from a connection.

        Never raises: client errors become ERROR frames, unexpected faults
        are logged and reported as a generic error.
        """
        request_id = None
        try:
            frame = parse_frame(raw)
            request_id = request_id_of(frame)
            command = decode_command(frame)
            logger.debug(f"Received {frame.get('type')} from {connection.connection_id}")
            self._handlers[type(command)](connection, command)

        except LobbyError as e:
            logger.info(f"Request from {connection.connection_id} failed: {e.message}")
            self.send_error(connection, e.message, request_id)

        except Exception as e:
            logger.error(f"Error processing frame from {connection.connection_id}: {e}")
            self.send_error(connection, ERROR_MESSAGES['INTERNAL'], request_id)

    def handle_disconnect(self, connection: ConnectionHandle) -> None:
        """Transport callback: the connection closed without an explicit leave."""
        try:
            removed = self.lobby_manager.disconnect(connection)
            if removed:
                logger.info(f"Connection {connection.connection_id} closed, removed {removed} member(s)")
        except Exception as e:
            logger.error(f"Error handling disconnect of {connection.connection_id}: {e}")

    def send_error(self, connection: ConnectionHandle, message: str,
                   request_id: Optional[str] = None) -> None:
        frame = {'type': MESSAGE_TYPES['ERROR'], 'message': message}
        if request_id is not None:
            frame['requestId'] = request_id
        self.lobby_manager.broadcaster.send_to(connection, frame)

    def _handle_create_lobby(self, connection: ConnectionHandle, command: CreateLobby) -> None:
        self.lobby_manager.create_lobby(connection, command.display_name, command.request_id)

    def _handle_join_lobby(self, connection: ConnectionHandle, command: JoinLobby) -> None:
        self.lobby_manager.join_lobby(
            connection, command.lobby_code, command.display_name, command.request_id
        )

    def _handle_send_message(self, connection: ConnectionHandle, command: SendMessage) -> None:
        self.lobby_manager.send_message(command.lobby_code, command.member_id, command.text)

    def _handle_leave_lobby(self, connection: ConnectionHandle, command: LeaveLobby) -> None:
        self.lobby_manager.leave_lobby(command.member_id)
