"""
Protocol Router
===============

Demultiplexes the shared scriptevent channel for one extension.

Two tables are consulted for every inbound event, in this order:

1. Custom protocols: exact identifier match (``<ns>:event_<id>``),
   any source type.
2. Namespace handler: ``source_type == Server`` and identifier under
   ``<ns>:``; the remainder selects command invocation
   (``command.<name>``) or gamerule sync (``gamerules``).

Events from other namespaces pass through untouched. A malformed event
is logged and dropped; it never escapes ``dispatch``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from .command import CommandData, CommandRegistry, INVOCATION_PREFIX
from .errors import ConfigurationError
from .host import Actor, Host
from .protocol import (
    COMMAND_PREFIX,
    CUSTOM_PREFIX,
    GAMERULES_PREFIX,
    CommandInvocation,
    GamerulePush,
    PayloadError,
    ScriptEvent,
)

if TYPE_CHECKING:
    from .extension import SaplingExtension

logger = logging.getLogger(__name__)

SYNTAX_ERROR = "§cSyntax error"

ProtocolHandler = Callable[[ScriptEvent], Any]
CommandValidator = Callable[["SaplingExtension", Actor, CommandData], bool]


class ProtocolRouter:
    """
    Routes inbound events to commands, gamerules and custom protocols.

    Args:
        extension: Owning extension (namespace, commands, gamerule data)
        host: Host used to resolve senders and broadcast
        registry: Registry commands are resolved from
        validator: Optional policy called before a command callback; a
            falsy return drops the invocation
    """

    def __init__(
        self,
        extension: "SaplingExtension",
        host: Host,
        registry: CommandRegistry,
        validator: Optional[CommandValidator] = None,
    ):
        self.extension = extension
        self.host = host
        self.registry = registry
        self.validator = validator
        self.protocols: Dict[str, ProtocolHandler] = {}

    @property
    def namespace(self) -> str:
        return self.extension.extension_namespace

    # =========================================================================
    # Registration
    # =========================================================================

    def protocol_id(self, identifier: str) -> str:
        return f"{self.namespace}:{CUSTOM_PREFIX}{identifier}"

    def add_protocol(self, identifier: str, handler: ProtocolHandler) -> str:
        """Register a custom protocol. Returns the full event identifier."""
        protocol_id = self.protocol_id(identifier)

        if protocol_id in self.protocols:
            raise ConfigurationError(f"The protocol {identifier} is already saved!")
        if not callable(handler):
            raise ConfigurationError("The callback is not a function!")

        self.protocols[protocol_id] = handler
        logger.debug(f"Registered protocol: {protocol_id}")
        return protocol_id

    # =========================================================================
    # Dispatch
    # =========================================================================

    def dispatch(self, event: ScriptEvent):
        """Handle one inbound event. Subscribed on the host channel."""
        config = self.extension.config
        if config is not None and config.debug_mode:
            self.host.broadcast(event.to_json())

        self._handle_protocol(event)
        self._handle_script_event(event)

    def _handle_protocol(self, event: ScriptEvent):
        handler = self.protocols.get(event.id)
        if handler is None:
            return

        try:
            handler(event)
        except Exception:
            logger.exception(f"Error handling protocol {event.id}")

    def _handle_script_event(self, event: ScriptEvent):
        prefix = f"{self.namespace}:"
        if not event.is_server or not event.id.startswith(prefix):
            return

        path = event.id[len(prefix):]

        if path.startswith(COMMAND_PREFIX):
            self._handle_command(path[len(COMMAND_PREFIX):], event.message)
        elif path.startswith(GAMERULES_PREFIX):
            self._handle_gamerules(event.message)

    def _handle_command(self, name: str, message: str):
        command = self.extension.commands.get(name)
        if command is None:
            logger.debug(f"[{self.namespace}] Unknown command: {name}")
            return

        try:
            invocation = CommandInvocation.parse(name, message)
        except PayloadError as e:
            logger.warning(f"[{self.namespace}] Dropped command {name}: {e}")
            return

        sender = self.host.find_actor(invocation.sender_name)
        if sender is None:
            logger.debug(f"[{self.namespace}] Sender not found: {invocation.sender_name}")
            return

        data = self.registry.lookup(f"{INVOCATION_PREFIX}{command.name}")
        if data is None or data.callback is None:
            logger.debug(f"[{self.namespace}] Command not registered: {command.name}")
            return

        args = invocation.args
        if isinstance(args, list) and len(args) != len(data.args):
            sender.send_message(SYNTAX_ERROR)
            return

        if self.validator is not None and not self.validator(self.extension, sender, data):
            logger.debug(f"[{self.namespace}] {sender.name} failed validation for {data.name}")
            return

        try:
            data.callback(sender, args)
        except Exception:
            logger.exception(f"Error in command {data.name}")

    def _handle_gamerules(self, message: str):
        try:
            push = GamerulePush.parse(message)
        except PayloadError as e:
            logger.warning(f"[{self.namespace}] Dropped gamerule push: {e}")
            return

        self.extension.gamerules_data.update(push.values)
        logger.debug(f"[{self.namespace}] Gamerules updated: {list(push.values)}")
