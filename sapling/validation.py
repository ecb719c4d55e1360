"""
Command validation policies.

Commands declare ``extension_validation`` but the router does not enforce
it unless a validator is installed:

    extension = SaplingExtension(..., validator=enforce_extension_validation)
"""
from __future__ import annotations

import logging

from .command import CommandData
from .extension import CLIENT_TAG_PREFIX, GameruleScope, SaplingExtension
from .host import Actor

logger = logging.getLogger(__name__)

ADMIN_TAG = "sapling_admin"


def is_sapling_admin(actor: Actor) -> bool:
    """Whether the actor has the ``sapling_admin`` tag."""
    return actor.has_tag(ADMIN_TAG)


def enforce_extension_validation(extension: SaplingExtension, sender: Actor, data: CommandData) -> bool:
    """
    Check a command's declared requirements.

    - ``check_admin``: sender must be a Sapling admin
    - ``required_gamerules``: each must be declared and currently truthy
      (client gamerules are read from the sender's tags)

    The sender is told why the command was refused.
    """
    validation = data.extension_validation

    if validation.check_admin and not is_sapling_admin(sender):
        sender.send_message("§cYou need to be a Sapling admin to use this command")
        return False

    for name in validation.required_gamerules:
        scope = extension.gamerules.get(name)
        if scope is None:
            logger.warning(f"Command {data.name} requires undeclared gamerule {name}")
            sender.send_message(f"§cThe gamerule {name} is disabled")
            return False

        if scope == GameruleScope.CLIENT:
            enabled = sender.has_tag(CLIENT_TAG_PREFIX + name)
        else:
            enabled = extension.gamerules_data.get(name)
        if not enabled:
            sender.send_message(f"§cThe gamerule {name} is disabled")
            return False

    return True
