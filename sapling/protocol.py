"""
Scriptevent Protocol
====================

Defines the events travelling on the shared scriptevent channel and
the payloads Sapling understands inside its own namespace.

Identifiers are colon and dot delimited:

    <namespace>:command.<name>      command invocation  {"senderName", "args"}
    <namespace>:gamerules           gamerule push       {"<gamerule>": value}
    <namespace>:event_<identifier>  custom protocol     free-form message
    sapling:extension_load          extension announcement (outbound)
    sapling:debugscreen_push        debug screen content (outbound)
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


# Outbound identifiers consumed by host-side tooling
EXTENSION_LOAD = "sapling:extension_load"
DEBUGSCREEN_PUSH = "sapling:debugscreen_push"

# Sub-protocol prefixes inside an extension namespace
COMMAND_PREFIX = "command."
GAMERULES_PREFIX = "gamerules"
CUSTOM_PREFIX = "event_"


class SourceType(str, Enum):
    """Who emitted a script event."""

    SERVER = "Server"
    ENTITY = "Entity"
    BLOCK = "Block"
    NPC_DIALOGUE = "NPCDialogue"


class PayloadError(ValueError):
    """Raised when a payload does not match its sub-protocol schema."""
    pass


@dataclass
class ScriptEvent:
    """One inbound event on the channel."""

    id: str
    message: str = ""
    source_type: SourceType = SourceType.SERVER

    @property
    def is_server(self) -> bool:
        return self.source_type == SourceType.SERVER

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'message': self.message,
            'sourceType': getattr(self.source_type, 'value', self.source_type),
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize the way debug mode echoes events."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class CommandInvocation:
    """Payload of ``<namespace>:command.<name>``."""

    command: str
    sender_name: str
    args: Any = None

    @classmethod
    def parse(cls, command: str, message: str) -> 'CommandInvocation':
        data = _load_object(message)
        sender_name = data.get('senderName')
        if not isinstance(sender_name, str) or not sender_name:
            raise PayloadError("command payload needs a 'senderName' string")
        return cls(command=command, sender_name=sender_name, args=data.get('args'))

    def to_json(self) -> str:
        return json.dumps({'senderName': self.sender_name, 'args': self.args})


@dataclass
class GamerulePush:
    """Payload of ``<namespace>:gamerules``: a flat mapping of values."""

    values: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, message: str) -> 'GamerulePush':
        return cls(values=_load_object(message))

    def to_json(self) -> str:
        return json.dumps(self.values)


def _load_object(message: str) -> Dict[str, Any]:
    try:
        data = json.loads(message)
    except (TypeError, ValueError) as e:
        raise PayloadError(f"payload is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError(f"payload must be a JSON object, got {type(data).__name__}")
    return data
