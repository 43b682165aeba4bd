"""
Broadcast engine for lobby events.

Fans a payload out to every open connection in a lobby. Contains no
lobby logic; callers hold the lobby lock while broadcasting so clients
see events in the order the lobby changed.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from .connection import ConnectionHandle
from .registry import SessionRegistry, LobbyRegistry
from utils.constants import MESSAGE_TYPES

logger = logging.getLogger(__name__)

class Broadcaster:
    """Sends frames to lobby members and single connections."""

    def __init__(self, sessions: SessionRegistry, lobbies: LobbyRegistry):
        self.sessions = sessions
        self.lobbies = lobbies

    @staticmethod
    def encode(payload: Dict[str, Any]) -> str:
        return json.dumps(payload)

    def send_to(self, connection: ConnectionHandle, payload: Dict[str, Any]) -> bool:
        """Send one frame directly to a connection."""
        return connection.send(self.encode(payload))

    def broadcast(self, lobby_code: str, payload: Dict[str, Any],
                  exclude_member_id: Optional[str] = None) -> int:
        """
        Send a payload to every member of a lobby whose connection is open.

        Closed connections and member ids without a session are skipped.
        Nothing is removed here; stale members are the sweeper's job.

        Args:
            lobby_code: Code of the lobby
            payload: Frame to send
            exclude_member_id: Member that should not receive the frame

        Returns:
            Number of connections the frame was sent to
        """
        lobby = self.lobbies.get(lobby_code)
        if not lobby:
            logger.debug(f"Broadcast to unknown lobby {lobby_code} dropped")
            return 0

        text = self.encode(payload)
        sent = 0
        for member_id in list(lobby.members):
            if member_id == exclude_member_id:
                continue
            member = self.sessions.get(member_id)
            if member is None or not member.connection.is_open:
                continue
            if member.connection.send(text):
                sent += 1

        logger.debug(f"Broadcast {payload.get('type')} to {sent} member(s) of lobby {lobby.code}")
        return sent

    def build_snapshot(self, lobby_code: str) -> Optional[Dict[str, Any]]:
        """Full lobby state: members in join order plus the whole history."""
        lobby = self.lobbies.get(lobby_code)
        if not lobby:
            return None

        players: List[Dict[str, Any]] = []
        for member_id in lobby.members:
            member = self.sessions.get(member_id)
            if member is not None:
                players.append(member.to_dict())

        return {
            'code': lobby.code,
            'players': players,
            'messages': [entry.to_dict() for entry in lobby.history]
        }

    def send_snapshot(self, lobby_code: str) -> int:
        """Broadcast the current lobby snapshot to every member."""
        snapshot = self.build_snapshot(lobby_code)
        if snapshot is None:
            return 0
        return self.broadcast(lobby_code, {
            'type': MESSAGE_TYPES['LOBBY_UPDATED'],
            'data': snapshot
        })
