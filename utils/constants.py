"""
Constants for the lobby chat server.

Wire message types, chat entry kinds and lobby code settings used
throughout the application.
"""

import string

# Frame types exchanged with clients. These strings are the wire contract.
MESSAGE_TYPES = {
    'CREATE_LOBBY': 'CREATE_LOBBY',
    'JOIN_LOBBY': 'JOIN_LOBBY',
    'LEAVE_LOBBY': 'LEAVE_LOBBY',
    'SEND_MESSAGE': 'SEND_MESSAGE',
    'LOBBY_UPDATED': 'LOBBY_UPDATED',
    'CHAT_MESSAGE': 'CHAT_MESSAGE',
    'ERROR': 'ERROR',
    'PLAYER_JOINED': 'PLAYER_JOINED',
    'PLAYER_LEFT': 'PLAYER_LEFT'
}

# Chat entry kinds
ENTRY_KINDS = {
    'SYSTEM': 'system',
    'MEMBER': 'member'
}

# Member entries are spelled 'player' on the wire
WIRE_ENTRY_KINDS = {
    'system': 'system',
    'member': 'player'
}

SYSTEM_AUTHOR_NAME = 'System'

# Lobby codes: 6 characters of A-Z0-9 gives ~2.2 billion combinations.
# Defaults for the settings of the same name in config/settings.py
LOBBY_CODE_ALPHABET = string.ascii_uppercase + string.digits
LOBBY_CODE_LENGTH = 6
LOBBY_CODE_MAX_ATTEMPTS = 100

# Error messages reported to clients
ERROR_MESSAGES = {
    'LOBBY_NOT_FOUND': 'Lobby not found',
    'INVALID_REFERENCE': 'Invalid lobby or player',
    'MALFORMED_REQUEST': 'Invalid message format',
    'INTERNAL': 'Internal server error'
}

# System entry templates
SYSTEM_MESSAGES = {
    'WELCOME': 'Welcome to lobby {code}!',
    'JOINED': '{name} joined the lobby',
    'LEFT': '{name} left the lobby',
    'DISCONNECTED': '{name} disconnected'
}

# Sweeper default, overridable through config/settings.py
SWEEP_INTERVAL_SECONDS = 30
