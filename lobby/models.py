"""
Data models for lobby management.

These are pure data structures shared by the registries, the lobby
manager and the broadcaster. The to_dict methods produce the exact
field names the web client expects.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, TYPE_CHECKING
from datetime import datetime
from utils.constants import ENTRY_KINDS, WIRE_ENTRY_KINDS, SYSTEM_AUTHOR_NAME
from utils.helpers import generate_id, utc_now

if TYPE_CHECKING:
    from .connection import ConnectionHandle

@dataclass
class Member:
    """One connected participant, bound to at most one lobby."""
    id: str
    display_name: str
    connection: 'ConnectionHandle'
    lobby_code: Optional[str] = None
    joined_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'name': self.display_name,
            'joinedAt': self.joined_at.isoformat()
        }

@dataclass(frozen=True)
class ChatEntry:
    """A single line of lobby history. Immutable once appended."""
    id: str
    kind: str
    author_id: Optional[str]
    author_name: str
    text: str
    timestamp: datetime
    lobby_code: str

    @classmethod
    def system(cls, lobby_code: str, text: str) -> 'ChatEntry':
        """Create an entry authored by the server itself."""
        return cls(
            id=generate_id(),
            kind=ENTRY_KINDS['SYSTEM'],
            author_id=None,
            author_name=SYSTEM_AUTHOR_NAME,
            text=text,
            timestamp=utc_now(),
            lobby_code=lobby_code
        )

    @classmethod
    def from_member(cls, member: Member, lobby_code: str, text: str) -> 'ChatEntry':
        """Create an entry authored by a member, using their current name."""
        return cls(
            id=generate_id(),
            kind=ENTRY_KINDS['MEMBER'],
            author_id=member.id,
            author_name=member.display_name,
            text=text,
            timestamp=utc_now(),
            lobby_code=lobby_code
        )

    @property
    def is_system(self) -> bool:
        return self.kind == ENTRY_KINDS['SYSTEM']

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            'id': self.id,
            'type': WIRE_ENTRY_KINDS[self.kind],
            'playerName': self.author_name,
            'message': self.text,
            'timestamp': self.timestamp.isoformat(),
            'lobbyCode': self.lobby_code
        }
        if self.author_id is not None:
            data['playerId'] = self.author_id
        return data

@dataclass
class Lobby:
    """Represents a lobby's current state."""
    code: str
    creator_id: str
    members: List[str] = field(default_factory=list)
    history: List[ChatEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)

    @property
    def member_count(self) -> int:
        return len(self.members)

    def has_member(self, member_id: str) -> bool:
        return member_id in self.members

    def add_member(self, member_id: str) -> bool:
        """Append a member id. Returns False if it was already present."""
        if member_id in self.members:
            return False
        self.members.append(member_id)
        return True

    def remove_member(self, member_id: str) -> bool:
        """Remove a member id. Returns False if it was not present."""
        if member_id not in self.members:
            return False
        self.members.remove(member_id)
        return True

    def append_entry(self, entry: ChatEntry) -> ChatEntry:
        self.history.append(entry)
        return entry

    def to_summary(self) -> Dict[str, Any]:
        """Lightweight lobby info for listing active lobbies."""
        return {
            'code': self.code,
            'player_count': self.member_count,
            'created_at': self.created_at.isoformat()
        }
