"""
Lobby Module for the lobby chat server.

Contains the lobby core: data models, registries, the message router,
the broadcast engine and the stale-connection sweeper.
"""

from .models import Member, Lobby, ChatEntry
from .connection import ConnectionHandle, SocketIOConnection
from .errors import (
    LobbyError, LobbyNotFound, InvalidReference, MalformedRequest, LobbyCodeExhausted
)
from .registry import SessionRegistry, LobbyRegistry
from .broadcaster import Broadcaster
from .manager import LobbyManager
from .router import MessageRouter
from .sweeper import StaleConnectionSweeper

__all__ = [
    # Data models
    'Member',
    'Lobby',
    'ChatEntry',

    # Connections
    'ConnectionHandle',
    'SocketIOConnection',

    # Errors
    'LobbyError',
    'LobbyNotFound',
    'InvalidReference',
    'MalformedRequest',
    'LobbyCodeExhausted',

    # Registries and managers
    'SessionRegistry',
    'LobbyRegistry',
    'Broadcaster',
    'LobbyManager',
    'MessageRouter',
    'StaleConnectionSweeper'
]
