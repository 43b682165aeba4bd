"""
Pytest fixtures for tests.

Core tests run the lobby manager and router against FakeConnection, an
in-memory handle that records every frame it is sent.
"""

import itertools
import json

import pytest

from lobby import ConnectionHandle, LobbyManager, MessageRouter, StaleConnectionSweeper

_connection_ids = itertools.count(1)

class FakeConnection(ConnectionHandle):
    """Connection handle that stores sent frames as decoded JSON."""

    def __init__(self, connection_id=None):
        self._id = connection_id or f"conn-{next(_connection_ids)}"
        self.open = True
        self.sent = []

    @property
    def connection_id(self):
        return self._id

    @property
    def is_open(self):
        return self.open

    def _deliver(self, text):
        self.sent.append(json.loads(text))

    def close(self):
        self.open = False

    def types(self):
        return [frame['type'] for frame in self.sent]

    def of_type(self, message_type):
        return [frame for frame in self.sent if frame['type'] == message_type]

    def last(self):
        return self.sent[-1]

    def clear(self):
        self.sent.clear()

class BrokenConnection(FakeConnection):
    """Reports open but raises on every send."""

    def _deliver(self, text):
        raise RuntimeError("socket exploded")

@pytest.fixture
def lobby_manager():
    return LobbyManager()

@pytest.fixture
def router(lobby_manager):
    return MessageRouter(lobby_manager)

@pytest.fixture
def sweeper(lobby_manager):
    return StaleConnectionSweeper(lobby_manager, interval_seconds=0.01)

def frame(message_type, **fields):
    """Build an inbound JSON frame."""
    return json.dumps({'type': message_type, **fields})
