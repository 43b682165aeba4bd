"""
Main lobby management system.

Handles the lobby lifecycle: creating lobbies, members joining and
leaving, chat messages and disconnects. Every change to a lobby happens
under that lobby's lock and is followed, still under the lock, by the
broadcasts that announce it.
"""

import logging
from typing import Any, Dict, List, Optional
from .broadcaster import Broadcaster
from .connection import ConnectionHandle
from .errors import LobbyNotFound, InvalidReference, LobbyCodeExhausted
from .models import Member, Lobby, ChatEntry
from .registry import SessionRegistry, LobbyRegistry
from utils.constants import (
    MESSAGE_TYPES, SYSTEM_MESSAGES, LOBBY_CODE_LENGTH, LOBBY_CODE_MAX_ATTEMPTS
)
from utils.helpers import generate_id, generate_lobby_code, normalize_lobby_code

logger = logging.getLogger(__name__)

class LobbyManager:
    """Main lobby management coordinator."""

    def __init__(self,
                 sessions: Optional[SessionRegistry] = None,
                 lobbies: Optional[LobbyRegistry] = None,
                 broadcaster: Optional[Broadcaster] = None,
                 code_length: int = LOBBY_CODE_LENGTH,
                 max_code_attempts: int = LOBBY_CODE_MAX_ATTEMPTS):
        self.sessions = sessions or SessionRegistry()
        self.lobbies = lobbies or LobbyRegistry()
        self.broadcaster = broadcaster or Broadcaster(self.sessions, self.lobbies)
        self.code_length = code_length
        self.max_code_attempts = max_code_attempts

    @staticmethod
    def _direct_response(message_type: str, member: Member,
                         request_id: Optional[str]) -> Dict[str, Any]:
        response = {
            'type': message_type,
            'success': True,
            'data': {
                'lobbyCode': member.lobby_code,
                'playerId': member.id,
                'player': member.to_dict()
            }
        }
        if request_id is not None:
            response['requestId'] = request_id
        return response

    def create_lobby(self, connection: ConnectionHandle, display_name: str,
                     request_id: Optional[str] = None) -> Member:
        """
        Create a lobby with the caller as its only member.

        The creator gets a CREATE_LOBBY response, then the first snapshot.

        Raises:
            LobbyCodeExhausted: no unused code found
        """
        member = Member(id=generate_id(), display_name=display_name, connection=connection)

        for _ in range(self.max_code_attempts):
            lobby = Lobby(
                code=generate_lobby_code(self.code_length),
                creator_id=member.id,
                members=[member.id]
            )
            with self.lobbies.lock(lobby.code):
                if not self.lobbies.put_if_absent(lobby):
                    logger.debug(f"Lobby code {lobby.code} already in use, regenerating")
                    continue

                member.lobby_code = lobby.code
                self.sessions.put(member)
                lobby.append_entry(ChatEntry.system(
                    lobby.code, SYSTEM_MESSAGES['WELCOME'].format(code=lobby.code)
                ))
                logger.info(f"Created lobby {lobby.code} for {display_name} ({member.id})")

                self.broadcaster.send_to(
                    connection,
                    self._direct_response(MESSAGE_TYPES['CREATE_LOBBY'], member, request_id)
                )
                self.broadcaster.send_snapshot(lobby.code)
                return member

        logger.error(f"Could not generate an unused lobby code after {self.max_code_attempts} attempts")
        raise LobbyCodeExhausted()

    def join_lobby(self, connection: ConnectionHandle, lobby_code: str, display_name: str,
                   request_id: Optional[str] = None) -> Member:
        """
        Add a new member to an existing lobby.

        Order of frames: JOIN_LOBBY response to the joiner, PLAYER_JOINED to
        everyone else, then the snapshot to the whole lobby.

        Raises:
            LobbyNotFound: no lobby with that code
        """
        lobby_code = normalize_lobby_code(lobby_code)

        with self.lobbies.lock(lobby_code):
            lobby = self.lobbies.get(lobby_code)
            if not lobby:
                logger.info(f"Join rejected: lobby {lobby_code} not found")
                raise LobbyNotFound()

            member = Member(
                id=generate_id(),
                display_name=display_name,
                connection=connection,
                lobby_code=lobby.code
            )
            self.sessions.put(member)
            lobby.add_member(member.id)
            lobby.append_entry(ChatEntry.system(
                lobby.code, SYSTEM_MESSAGES['JOINED'].format(name=display_name)
            ))
            logger.info(f"{display_name} ({member.id}) joined lobby {lobby.code}")

            self.broadcaster.send_to(
                connection,
                self._direct_response(MESSAGE_TYPES['JOIN_LOBBY'], member, request_id)
            )
            self.broadcaster.broadcast(lobby.code, {
                'type': MESSAGE_TYPES['PLAYER_JOINED'],
                'data': {'player': member.to_dict()}
            }, exclude_member_id=member.id)
            self.broadcaster.send_snapshot(lobby.code)
            return member

    def send_message(self, lobby_code: str, member_id: str, text: str) -> ChatEntry:
        """
        Append a member's chat message and broadcast it to the whole lobby,
        sender included.

        Raises:
            InvalidReference: unknown lobby or member, or member not in lobby
        """
        lobby_code = normalize_lobby_code(lobby_code)

        with self.lobbies.lock(lobby_code):
            lobby = self.lobbies.get(lobby_code)
            member = self.sessions.get(member_id)
            if (not lobby or not member
                    or member.lobby_code != lobby.code
                    or not lobby.has_member(member.id)):
                logger.info(f"Message rejected: invalid lobby {lobby_code} or member {member_id}")
                raise InvalidReference()

            entry = lobby.append_entry(ChatEntry.from_member(member, lobby.code, text))
            self.broadcaster.broadcast(lobby.code, {
                'type': MESSAGE_TYPES['CHAT_MESSAGE'],
                'data': entry.to_dict()
            })
            return entry

    def leave_lobby(self, member_id: str) -> bool:
        """
        Remove a member after an explicit leave. Unknown members are ignored.

        Returns:
            True if a member was removed
        """
        return self._remove_member(member_id, SYSTEM_MESSAGES['LEFT'])

    def disconnect(self, connection: ConnectionHandle) -> int:
        """
        Remove every member bound to a closed connection.

        Same transition as leave_lobby, announced as a disconnect.

        Returns:
            Number of members removed
        """
        removed = 0
        for member_id in self.sessions.find_by_connection(connection.connection_id):
            if self.disconnect_member(member_id):
                removed += 1
        return removed

    def disconnect_member(self, member_id: str) -> bool:
        return self._remove_member(member_id, SYSTEM_MESSAGES['DISCONNECTED'])

    def _remove_member(self, member_id: str, template: str) -> bool:
        member = self.sessions.get(member_id)
        if member is None:
            logger.debug(f"Leave ignored: member {member_id} not found")
            return False

        lobby_code = member.lobby_code
        if lobby_code is None:
            # Another leave for this member is already detaching it
            logger.debug(f"Leave ignored: member {member_id} is already leaving")
            return False

        with self.lobbies.lock(lobby_code):
            # A concurrent leave for the same member may have won the lock
            if self.sessions.get(member_id) is not member or member.lobby_code != lobby_code:
                return False
            self._detach_from_lobby(member, template)
            self.sessions.remove(member_id)
        return True

    def _detach_from_lobby(self, member: Member, template: str) -> None:
        """Caller holds the lock of member.lobby_code."""
        lobby_code = member.lobby_code
        member.lobby_code = None

        lobby = self.lobbies.get(lobby_code)
        if not lobby or not lobby.remove_member(member.id):
            return

        lobby.append_entry(ChatEntry.system(lobby.code, template.format(name=member.display_name)))
        logger.info(f"{member.display_name} ({member.id}) removed from lobby {lobby.code}")

        self.broadcaster.broadcast(lobby.code, {
            'type': MESSAGE_TYPES['PLAYER_LEFT'],
            'data': {
                'playerId': member.id,
                'playerName': member.display_name
            }
        })

        if not self.delete_if_abandoned(lobby.code):
            self.broadcaster.send_snapshot(lobby.code)

    def has_live_members(self, lobby: Lobby) -> bool:
        """True if any id in the lobby still has a Session Registry entry."""
        return any(member_id in self.sessions for member_id in lobby.members)

    def delete_if_abandoned(self, lobby_code: str) -> bool:
        """
        Delete a lobby that is empty or only holds ids left dangling by a
        registry-only sweep.

        Returns:
            True if the lobby was deleted
        """
        with self.lobbies.lock(lobby_code):
            lobby = self.lobbies.get(lobby_code)
            if lobby is None or self.has_live_members(lobby):
                return False
            self.lobbies.remove(lobby.code)
            logger.info(f"Deleted empty lobby {lobby.code}")
            return True

    def get_lobby(self, lobby_code: str) -> Optional[Lobby]:
        return self.lobbies.get(lobby_code)

    def get_member(self, member_id: str) -> Optional[Member]:
        return self.sessions.get(member_id)

    def get_active_lobbies(self) -> List[Dict[str, Any]]:
        """Summaries of every live lobby, oldest first."""
        lobbies = sorted(self.lobbies.values(), key=lambda lobby: lobby.created_at)
        return [lobby.to_summary() for lobby in lobbies]

    def get_stats(self) -> Dict[str, int]:
        members = self.sessions.values()
        return {
            'active_lobbies': len(self.lobbies),
            'active_members': len(members),
            'open_connections': len({
                m.connection.connection_id for m in members if m.connection.is_open
            })
        }
