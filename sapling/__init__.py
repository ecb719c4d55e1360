"""
Sapling - Extension framework for the scriptevent channel
=========================================================

Lets independent extensions share one scriptevent channel: each claims a
namespace, registers commands and custom protocols, syncs gamerules with
the server side and persists JSON documents in host properties.

Example:

    from sapling import Command, ConfigBuilder, SaplingExtension

    extension = SaplingExtension(
        extension_id="my-extension",
        extension_namespace="myextension",
        extension_name="My Extension",
        host=host,
    )

    extension.set_command(
        Command()
        .set_name("hello")
        .add_argument("string", "name")
        .set_callback(lambda sender, args: sender.send_message(f"Hello {args[0]}!"))
        .build()
    )

    extension.load(ConfigBuilder().set_debug_mode(True))
"""
__version__ = "1.0.0"

from sapling.errors import SaplingError, ConfigurationError, ValidationError
from sapling.host import Actor, Host
from sapling.protocol import (
    ScriptEvent,
    SourceType,
    CommandInvocation,
    GamerulePush,
    PayloadError,
    EXTENSION_LOAD,
    DEBUGSCREEN_PUSH,
)
from sapling.config import ConfigBuilder, ConfigField
from sapling.command import (
    Command,
    CommandArgument,
    CommandData,
    CommandRegistry,
    CollisionPolicy,
    ExtensionValidation,
    command_registry,
)
from sapling.database import JsonDB
from sapling.router import ProtocolRouter
from sapling.extension import SaplingExtension, GameruleScope
from sapling.debug import DebugScreen
from sapling.validation import is_sapling_admin, enforce_extension_validation

__all__ = [
    # Errors
    "SaplingError",
    "ConfigurationError",
    "ValidationError",

    # Host
    "Actor",
    "Host",

    # Protocol
    "ScriptEvent",
    "SourceType",
    "CommandInvocation",
    "GamerulePush",
    "PayloadError",
    "EXTENSION_LOAD",
    "DEBUGSCREEN_PUSH",

    # Config
    "ConfigBuilder",
    "ConfigField",

    # Commands
    "Command",
    "CommandArgument",
    "CommandData",
    "CommandRegistry",
    "CollisionPolicy",
    "ExtensionValidation",
    "command_registry",

    # Core
    "JsonDB",
    "ProtocolRouter",
    "SaplingExtension",
    "GameruleScope",
    "DebugScreen",

    # Validation
    "is_sapling_admin",
    "enforce_extension_validation",
]
