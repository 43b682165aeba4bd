"""
Inbound command decoding.

Turns a raw client frame into one of the typed commands below, or raises
MalformedRequest. Decoding never touches lobby state.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
from .errors import MalformedRequest
from utils.constants import MESSAGE_TYPES, ERROR_MESSAGES
from utils.helpers import validate_display_name, validate_message_text

@dataclass(frozen=True)
class CreateLobby:
    display_name: str
    request_id: Optional[str] = None

@dataclass(frozen=True)
class JoinLobby:
    lobby_code: str
    display_name: str
    request_id: Optional[str] = None

@dataclass(frozen=True)
class SendMessage:
    lobby_code: str
    member_id: str
    text: str
    request_id: Optional[str] = None

@dataclass(frozen=True)
class LeaveLobby:
    member_id: str
    request_id: Optional[str] = None

Command = Union[CreateLobby, JoinLobby, SendMessage, LeaveLobby]

def _malformed(detail: str) -> MalformedRequest:
    return MalformedRequest(f"{ERROR_MESSAGES['MALFORMED_REQUEST']}: {detail}")

def parse_frame(raw: Any) -> Dict[str, Any]:
    """
    Decode a raw frame into a JSON object.

    Accepts JSON text, UTF-8 bytes, or an already decoded mapping.
    """
    if isinstance(raw, Mapping):
        return dict(raw)

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError:
            raise MalformedRequest()

    if not isinstance(raw, str):
        raise MalformedRequest()

    try:
        frame = json.loads(raw)
    except ValueError:
        raise MalformedRequest()

    if not isinstance(frame, dict):
        raise MalformedRequest()
    return frame

def request_id_of(frame: Mapping[str, Any]) -> Optional[str]:
    """Optional client-chosen id echoed on the direct reply."""
    request_id = frame.get('requestId')
    return request_id if isinstance(request_id, str) else None

def _required_string(frame: Mapping[str, Any], key: str) -> str:
    value = frame.get(key)
    if not isinstance(value, str) or not value.strip():
        raise _malformed(f"missing {key}")
    return value

def _display_name(frame: Mapping[str, Any]) -> str:
    name = frame.get('playerName')
    is_valid, error_msg = validate_display_name(name)
    if not is_valid:
        raise _malformed(error_msg)
    return name

def decode_command(frame: Mapping[str, Any]) -> Command:
    """
    Build a typed command from a decoded frame.

    Raises:
        MalformedRequest: unknown type or missing/invalid fields
    """
    message_type = frame.get('type')
    request_id = request_id_of(frame)

    if message_type == MESSAGE_TYPES['CREATE_LOBBY']:
        return CreateLobby(display_name=_display_name(frame), request_id=request_id)

    if message_type == MESSAGE_TYPES['JOIN_LOBBY']:
        return JoinLobby(
            lobby_code=_required_string(frame, 'lobbyCode'),
            display_name=_display_name(frame),
            request_id=request_id
        )

    if message_type == MESSAGE_TYPES['SEND_MESSAGE']:
        lobby_code = _required_string(frame, 'lobbyCode')
        member_id = _required_string(frame, 'playerId')
        text = frame.get('message')
        is_valid, error_msg = validate_message_text(text)
        if not is_valid:
            raise _malformed(error_msg)
        return SendMessage(
            lobby_code=lobby_code,
            member_id=member_id,
            text=text,
            request_id=request_id
        )

    if message_type == MESSAGE_TYPES['LEAVE_LOBBY']:
        return LeaveLobby(member_id=_required_string(frame, 'playerId'), request_id=request_id)

    raise _malformed(f"unknown type {message_type!r}")
