"""
Sapling Extension
=================

The unit of isolation between plugins sharing one scriptevent channel.

Example:
    extension = SaplingExtension(
        extension_id="my-extension",
        extension_namespace="myextension",
        extension_name="My Extension",
        host=host,
    )

    extension.set_gamerules({"clientGR": "client", "serverGR": "server"})
    extension.set_command(my_command)

    @extension.protocol("test")
    def on_test(event):
        print(event.message)

    extension.load(ConfigBuilder().set_debug_mode(True))
"""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from .command import Command, CommandData, CommandRegistry, command_registry
from .config import ConfigBuilder
from .errors import ConfigurationError, ValidationError
from .host import Actor, Host
from .protocol import EXTENSION_LOAD
from .router import CommandValidator, ProtocolHandler, ProtocolRouter

logger = logging.getLogger(__name__)

CLIENT_TAG_PREFIX = "client:"


class GameruleScope(str, Enum):
    """Where a gamerule value lives."""

    CLIENT = "client"  # per player, read from tags
    SERVER = "server"  # pushed by the server side
    ENGINE = "engine"  # pushed by the server side


class SaplingExtension:
    """
    An extension on the Sapling framework.

    Lifecycle is one-way: unloaded -> loaded. Commands, gamerules and
    protocols can be declared before ``load``; ``update`` and
    ``get_gamerule`` require a loaded extension.
    """

    def __init__(
        self,
        extension_id: str,
        extension_namespace: str,
        extension_name: str,
        host: Host,
        registry: Optional[CommandRegistry] = None,
        validator: Optional[CommandValidator] = None,
    ):
        self.extension_id = extension_id
        self.extension_namespace = extension_namespace
        self.extension_name = extension_name
        self.host = host
        self.registry = registry if registry is not None else command_registry

        self.commands: Dict[str, CommandData] = {}
        self.gamerules: Dict[str, GameruleScope] = {}
        self.gamerules_data: Dict[str, Any] = {}
        self.config: Optional[ConfigBuilder] = None

        self._loaded = False
        self.router = ProtocolRouter(self, host, self.registry, validator=validator)

        host.subscribe(self.router.dispatch)

    # ==================== PROTOCOLS ====================

    @property
    def protocols(self) -> Dict[str, ProtocolHandler]:
        return self.router.protocols

    def set_protocol(self, identifier: str, callback: ProtocolHandler) -> 'SaplingExtension':
        """
        Register a custom protocol.

        The handler fires for ``<namespace>:event_<identifier>`` with the raw
        event, whatever its source type.

        Raises:
            ConfigurationError: identifier already registered, or callback
                not callable
        """
        self.router.add_protocol(identifier, callback)
        return self

    def protocol(self, identifier: str) -> Callable[[ProtocolHandler], ProtocolHandler]:
        """Decorator form of ``set_protocol``."""
        def decorator(func: ProtocolHandler) -> ProtocolHandler:
            self.set_protocol(identifier, func)
            return func
        return decorator

    # ==================== GAMERULES ====================

    def set_gamerules(self, gamerules: Dict[str, str]) -> 'SaplingExtension':
        """Declare gamerules. Entries with an unknown scope are ignored."""
        scopes = {s.value for s in GameruleScope}
        for key, value in gamerules.items():
            if isinstance(value, str) and value in scopes:
                self.gamerules[key] = GameruleScope(value)
            else:
                logger.debug(f"[{self.extension_namespace}] Ignored gamerule {key}: {value!r}")
        return self

    def get_gamerule(self, gamerule: str, is_client: bool = False, actor: Optional[Actor] = None) -> Any:
        """
        Read a gamerule.

        Client gamerules are read from the ``client:<name>`` tag of ``actor``;
        server and engine gamerules return the last pushed value (None if
        never pushed).

        Raises:
            ConfigurationError: extension not loaded
            ValidationError: unknown gamerule, or client read without a
                valid actor
        """
        self._ensure_loaded()

        if gamerule not in self.gamerules:
            raise ValidationError("Invalid gamerule!")

        if is_client:
            if not isinstance(actor, Actor):
                raise ValidationError("Invalid player instance!")
            return actor.has_tag(CLIENT_TAG_PREFIX + gamerule)

        return self.gamerules_data.get(gamerule)

    # ==================== COMMANDS ====================

    def set_command(self, command: Union[Command, CommandData]) -> 'SaplingExtension':
        """Add a command to this extension's local command set."""
        data = command.data if isinstance(command, Command) else command
        self.commands[data.name] = data
        return self

    # ==================== LIFECYCLE ====================

    def load(self, config: Optional[ConfigBuilder] = None):
        """
        Load the extension and announce it on the channel.

        Raises:
            ConfigurationError: already loaded, or config is not a
                ``ConfigBuilder``
        """
        if self._loaded:
            raise ConfigurationError("The extension is already loaded")

        if config is None:
            config = ConfigBuilder()
        if not isinstance(config, ConfigBuilder):
            raise ConfigurationError("Invalid configuration")

        self._loaded = True
        self.config = config

        self._announce()
        logger.info(f"Extension loaded: {self.extension_name} ({self.extension_namespace})")

    def update(self):
        """
        Re-announce the extension, e.g. after adding commands.

        Raises:
            ConfigurationError: extension not loaded
        """
        self._ensure_loaded()
        self._announce()

    def get_load_state(self) -> bool:
        return self._loaded

    @property
    def loaded(self) -> bool:
        return self._loaded

    def _ensure_loaded(self):
        if not self._loaded:
            raise ConfigurationError("The extension is not already loaded")

    def _announce(self):
        if self.config.debug_mode:
            self.host.broadcast(json.dumps(self.to_dict(), indent=2))
        self.host.emit(EXTENSION_LOAD, json.dumps(self.to_dict()))

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> Dict[str, Any]:
        """Self-description announced to host-side tooling."""
        return {
            'extensionId': self.extension_id,
            'extensionNamespace': self.extension_namespace,
            'extensionName': self.extension_name,
            'commands': {name: data.to_dict() for name, data in self.commands.items()},
            'gamerules': {name: scope.value for name, scope in self.gamerules.items()},
            'config': self.config.to_dict() if self.config is not None else {},
        }

    def __repr__(self) -> str:
        state = "loaded" if self._loaded else "unloaded"
        return f"<SaplingExtension {self.extension_namespace} ({state})>"
