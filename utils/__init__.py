"""
Utilities module for the lobby chat server.

This module contains constants and helper functions used throughout
the application.
"""

from .constants import MESSAGE_TYPES, ENTRY_KINDS, ERROR_MESSAGES, SYSTEM_MESSAGES
from .helpers import (
    generate_lobby_code, normalize_lobby_code, generate_id, utc_now,
    validate_display_name, validate_message_text
)

__all__ = [
    'MESSAGE_TYPES',
    'ENTRY_KINDS',
    'ERROR_MESSAGES',
    'SYSTEM_MESSAGES',
    'generate_lobby_code',
    'normalize_lobby_code',
    'generate_id',
    'utc_now',
    'validate_display_name',
    'validate_message_text'
]
