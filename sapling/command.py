"""
Commands
========

Fluent command builder and the registry commands are published into.

A built command is stored twice in its registry:

    "<prefix><name>"   e.g. "./home"  for host-side textual command parsers
    "#<name>"          e.g. "#home"   used by scriptevent command invocation

Example:
    home = (
        Command()
        .set_name("home")
        .set_usage("<name: string>")
        .add_argument("string", "name")
        .set_callback(lambda sender, args: sender.send_message("Teleporting..."))
        .set_validation({"check_admin": False})
        .build()
    )
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "./"
INVOCATION_PREFIX = "#"


@dataclass
class CommandArgument:
    """Declared argument. Only the count is enforced at dispatch."""

    type: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {'type': self.type, 'name': self.name}


@dataclass
class ExtensionValidation:
    """Declared command requirements, see ``sapling.validation``."""

    check_admin: bool = False
    required_gamerules: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtensionValidation':
        # camelCase keys are accepted for wire compatibility
        check_admin = data.get('check_admin', data.get('checkAdmin', False))
        required = data.get('required_gamerules', data.get('requiredGamerules', []))
        if isinstance(required, str):
            required = [required]
        return cls(check_admin=bool(check_admin), required_gamerules=list(required or []))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'checkAdmin': self.check_admin,
            'requiredGamerules': list(self.required_gamerules),
        }


@dataclass
class CommandData:
    """A command descriptor."""

    name: str = ""
    description: str = ""
    args: List[CommandArgument] = field(default_factory=list)
    extension_validation: ExtensionValidation = field(default_factory=ExtensionValidation)
    subcommands: Dict[str, 'CommandData'] = field(default_factory=dict)
    callback: Optional[Callable[[Any, Any], None]] = None

    def bind_args(self, values: Any) -> Dict[str, Any]:
        """
        Map positional invocation args onto the declared argument names.

        Keyed payloads are returned as a plain dict copy.
        """
        if isinstance(values, dict):
            return dict(values)
        if values is None:
            values = []
        return {arg.name: value for arg, value in zip(self.args, values)}

    def to_dict(self) -> Dict[str, Any]:
        """Wire form of the descriptor. Callbacks are not serialized."""
        return {
            'name': self.name,
            'description': self.description,
            'args': [a.to_dict() for a in self.args],
            'extensionValidation': self.extension_validation.to_dict(),
            'subcommands': {k: v.to_dict() for k, v in self.subcommands.items()},
        }


class CollisionPolicy(str, Enum):
    """What a registry does when an alias is already taken."""

    OVERWRITE = "overwrite"
    WARN = "warn"
    ERROR = "error"


class CommandRegistry:
    """
    Flat table of commands shared by every extension that uses it.

    Names are expected to be unique across those extensions; namespacing
    command names is the caller's job. ``policy`` decides what happens on
    a clash. The default silently overwrites.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
    ):
        self.prefix = prefix
        self.policy = CollisionPolicy(policy)
        self._commands: Dict[str, CommandData] = {}

    def aliases(self, name: str) -> List[str]:
        return [f"{self.prefix}{name}", f"{INVOCATION_PREFIX}{name}"]

    def register(self, data: CommandData):
        """Publish ``data`` under both of its aliases."""
        if not data.name:
            raise ConfigurationError("Cannot register a command without a name")

        for alias in self.aliases(data.name):
            existing = self._commands.get(alias)
            if existing is not None and existing is not data:
                if self.policy == CollisionPolicy.ERROR:
                    raise ConfigurationError(f"The command {alias} is already registered")
                if self.policy == CollisionPolicy.WARN:
                    logger.warning(f"Command {alias} overwritten")

        for alias in self.aliases(data.name):
            self._commands[alias] = data

        logger.debug(f"Registered command: {data.name}")

    def lookup(self, key: str) -> Optional[CommandData]:
        """Find a command by alias (``"#home"`` or ``"./home"``)."""
        return self._commands.get(key)

    def unregister(self, name: str):
        for alias in self.aliases(name):
            self._commands.pop(alias, None)

    def names(self) -> List[str]:
        """Registered command names, without aliases."""
        return sorted({c.name for c in self._commands.values()})

    def clear(self):
        self._commands.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._commands

    def __len__(self) -> int:
        return len(self.names())


# Default instance used when no registry is passed explicitly
command_registry = CommandRegistry()


class Command:
    """Fluent builder for ``CommandData``."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, registry: Optional[CommandRegistry] = None):
        data = dict(data or {})
        self.registry = registry if registry is not None else command_registry

        validation = data.pop('extension_validation', None)
        args = data.pop('args', [])

        self.data = CommandData(**data)
        for arg in args:
            if isinstance(arg, CommandArgument):
                self.data.args.append(arg)
            else:
                self.data.args.append(CommandArgument(type=arg['type'], name=arg['name']))
        if validation is not None:
            self.set_validation(validation)

    def build(self) -> 'Command':
        """Publish the command into its registry."""
        self.registry.register(self.data)
        return self

    def set_validation(self, validation: Optional[Dict[str, Any]] = None) -> 'Command':
        """
        Declare the command requirements.

        Args:
            validation: ``check_admin`` (bool, default False) and
                ``required_gamerules`` (list of names, default empty).
        """
        if isinstance(validation, ExtensionValidation):
            self.data.extension_validation = validation
        else:
            self.data.extension_validation = ExtensionValidation.from_dict(validation or {})
        return self

    def set_name(self, name: str) -> 'Command':
        self.data.name = name
        return self

    def set_usage(self, usage: str) -> 'Command':
        self.data.description = usage
        return self

    def set_callback(self, callback: Callable[[Any, Any], None]) -> 'Command':
        self.data.callback = callback
        return self

    def add_argument(self, type: str, name: str) -> 'Command':
        self.data.args.append(CommandArgument(type=type, name=name))
        return self

    def add_subcommand(self, command: 'Command') -> 'Command':
        """Declare a nested command. Subcommands are not dispatched yet."""
        sub = command.data if isinstance(command, Command) else command
        self.data.subcommands[sub.name] = sub
        return self
