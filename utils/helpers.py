"""
Helper utilities for the lobby chat server.

This module contains small functions used throughout the application
for identifier generation, validation and timestamps.
"""

import random
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Tuple
from .constants import LOBBY_CODE_ALPHABET, LOBBY_CODE_LENGTH

def generate_lobby_code(length: int = LOBBY_CODE_LENGTH) -> str:
    """Generate a random lobby code."""
    return ''.join(random.choices(LOBBY_CODE_ALPHABET, k=length))

def normalize_lobby_code(code: str) -> str:
    """Lobby codes are case-insensitive; store and compare them upper-cased."""
    return code.strip().upper()

def generate_id() -> str:
    """Generate an opaque unique identifier for members and chat entries."""
    return str(uuid.uuid4())

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def validate_display_name(name: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate a display name sent by a client.

    Any non-blank string is accepted; the name is shown as typed.

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(name, str):
        return False, "Display name must be a string"

    if not name.strip():
        return False, "Display name cannot be empty"

    return True, None

def validate_message_text(text: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate chat message text.

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(text, str):
        return False, "Message must be a string"

    if not text.strip():
        return False, "Message cannot be empty"

    return True, None
