"""Tests for environment settings and their defaults."""

import importlib

import pytest

from config import settings
from lobby import LobbyManager, StaleConnectionSweeper
from utils import constants

TUNABLES = ('LOBBY_CODE_LENGTH', 'LOBBY_CODE_MAX_ATTEMPTS', 'SWEEP_INTERVAL_SECONDS')

@pytest.fixture
def reload_settings(monkeypatch):
    def _reload(**env):
        for name in TUNABLES:
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(settings)

    yield _reload
    monkeypatch.undo()
    importlib.reload(settings)

def test_defaults_come_from_constants(reload_settings):
    loaded = reload_settings()

    for name in TUNABLES:
        assert getattr(loaded, name) == getattr(constants, name)

    assert LobbyManager().code_length == loaded.LOBBY_CODE_LENGTH
    assert LobbyManager().max_code_attempts == loaded.LOBBY_CODE_MAX_ATTEMPTS
    assert StaleConnectionSweeper(LobbyManager()).interval_seconds == loaded.SWEEP_INTERVAL_SECONDS

def test_environment_overrides_defaults(reload_settings):
    loaded = reload_settings(LOBBY_CODE_LENGTH='8', SWEEP_INTERVAL_SECONDS='2.5')

    assert loaded.LOBBY_CODE_LENGTH == 8
    assert loaded.SWEEP_INTERVAL_SECONDS == 2.5
    assert loaded.LOBBY_CODE_MAX_ATTEMPTS == constants.LOBBY_CODE_MAX_ATTEMPTS
