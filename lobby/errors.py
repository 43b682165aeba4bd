"""
Errors raised by the lobby core.

Every error carries a human-readable message that is sent back to the
originating connection as an ERROR frame.
"""

from utils.constants import ERROR_MESSAGES

class LobbyError(Exception):
    """Base class for errors reported to the client that caused them."""
    default_message = ERROR_MESSAGES['INTERNAL']

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class LobbyNotFound(LobbyError):
    """No lobby exists for the requested code."""
    default_message = ERROR_MESSAGES['LOBBY_NOT_FOUND']

class InvalidReference(LobbyError):
    """Unknown member, unknown lobby, or a member that is not in that lobby."""
    default_message = ERROR_MESSAGES['INVALID_REFERENCE']

class MalformedRequest(LobbyError):
    """Undecodable frame, unknown type, or missing required fields."""
    default_message = ERROR_MESSAGES['MALFORMED_REQUEST']

class LobbyCodeExhausted(LobbyError):
    """Could not find an unused lobby code. Internal fault."""
    default_message = ERROR_MESSAGES['INTERNAL']
