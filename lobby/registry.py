"""
Session and lobby registries.

Plain thread-safe key-value stores for members and lobbies. They hold no
lobby logic; the LobbyManager decides what goes in and out. Each
registry is an ordinary object so several independent servers can live
in one process (and in one test run).
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional
from .models import Member, Lobby
from utils.helpers import normalize_lobby_code

logger = logging.getLogger(__name__)

class SessionRegistry:
    """
    Maps member ids to Member records.

    Also keeps an index from connection id to the ids of the members bound
    to that connection, so a closed connection can be resolved to its
    members without scanning.
    """

    def __init__(self):
        self.members: Dict[str, Member] = {}  # member_id -> Member
        self.connection_index: Dict[str, List[str]] = {}  # connection_id -> [member_id]
        self._lock = threading.RLock()
        logger.debug("Session registry initialized")

    def put(self, member: Member) -> None:
        with self._lock:
            previous = self.members.get(member.id)
            if previous is not None:
                self._unindex(previous)
            self.members[member.id] = member
            self.connection_index.setdefault(member.connection.connection_id, []).append(member.id)

    def get(self, member_id: str) -> Optional[Member]:
        with self._lock:
            return self.members.get(member_id)

    def remove(self, member_id: str) -> Optional[Member]:
        """
        Remove a member.

        Returns:
            The removed Member, or None if it was not registered
        """
        with self._lock:
            member = self.members.pop(member_id, None)
            if member is not None:
                self._unindex(member)
            return member

    def values(self) -> List[Member]:
        """Snapshot of all members, safe to iterate while others mutate."""
        with self._lock:
            return list(self.members.values())

    def find_by_connection(self, connection_id: str) -> List[str]:
        """Ids of the members bound to a connection, oldest first."""
        with self._lock:
            return list(self.connection_index.get(connection_id, []))

    def _unindex(self, member: Member) -> None:
        connection_id = member.connection.connection_id
        member_ids = self.connection_index.get(connection_id)
        if not member_ids:
            return
        if member.id in member_ids:
            member_ids.remove(member.id)
        if not member_ids:
            del self.connection_index[connection_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self.members)

    def __contains__(self, member_id: str) -> bool:
        with self._lock:
            return member_id in self.members

class _LobbyLock:
    """Re-entrant lock for one lobby code plus the number of callers using it."""

    def __init__(self):
        self.lock = threading.RLock()
        self.holders = 0

class LobbyRegistry:
    """
    Maps lobby codes to Lobby records.

    Codes are case-insensitive and normalized on every access. The
    registry also hands out one re-entrant lock per lobby code; all
    mutations of a lobby and the broadcasts that follow them happen while
    holding it. A code's lock entry only lives while a lobby has that code
    or some caller is holding or waiting on it, so lookups of unknown codes
    leave nothing behind.
    """

    def __init__(self):
        self.lobbies: Dict[str, Lobby] = {}  # code -> Lobby
        self._locks: Dict[str, _LobbyLock] = {}  # code -> lock entry
        self._lock = threading.RLock()
        logger.debug("Lobby registry initialized")

    def put(self, lobby: Lobby) -> None:
        lobby.code = normalize_lobby_code(lobby.code)
        with self._lock:
            self.lobbies[lobby.code] = lobby

    def put_if_absent(self, lobby: Lobby) -> bool:
        """
        Insert a lobby unless its code is taken.

        Returns:
            True if inserted, False if the code already exists
        """
        lobby.code = normalize_lobby_code(lobby.code)
        with self._lock:
            if lobby.code in self.lobbies:
                return False
            self.lobbies[lobby.code] = lobby
            return True

    def get(self, code: str) -> Optional[Lobby]:
        with self._lock:
            return self.lobbies.get(normalize_lobby_code(code))

    def remove(self, code: str) -> Optional[Lobby]:
        code = normalize_lobby_code(code)
        with self._lock:
            entry = self._locks.get(code)
            if entry is not None and entry.holders == 0:
                del self._locks[code]
            return self.lobbies.pop(code, None)

    def values(self) -> List[Lobby]:
        with self._lock:
            return list(self.lobbies.values())

    @contextmanager
    def lock(self, code: str) -> Iterator[None]:
        """Hold the lock serializing every mutation of one lobby."""
        code = normalize_lobby_code(code)
        with self._lock:
            entry = self._locks.get(code)
            if entry is None:
                entry = _LobbyLock()
                self._locks[code] = entry
            entry.holders += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._lock:
                entry.holders -= 1
                if (entry.holders == 0 and code not in self.lobbies
                        and self._locks.get(code) is entry):
                    del self._locks[code]

    def lock_count(self) -> int:
        """Number of lobby codes that currently have a lock entry."""
        with self._lock:
            return len(self._locks)

    def __len__(self) -> int:
        with self._lock:
            return len(self.lobbies)

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return normalize_lobby_code(code) in self.lobbies
