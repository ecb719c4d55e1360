"""
Host Interfaces
===============

Everything Sapling needs from the host application. The host owns
message delivery, the player list and the persistent scalar slots;
Sapling only talks to it through these two classes.

    ┌─────────────────┐   scriptevent bus   ┌─────────────────┐
    │   Host (world)  │◄───────────────────►│ SaplingExtension│
    │                 │  id + JSON payload  │  ProtocolRouter │
    └────────┬────────┘                     └────────┬────────┘
             │ get/set_property                      │
             └──────────────► JsonDB ◄───────────────┘
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol import ScriptEvent


class Actor(ABC):
    """A connected player as seen by Sapling."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Exact display name, used to resolve command senders."""
        pass

    @abstractmethod
    def has_tag(self, tag: str) -> bool:
        """Whether the actor carries a boolean tag."""
        pass

    @abstractmethod
    def send_message(self, message: str) -> None:
        """Send a private message to this actor."""
        pass


class Host(ABC):
    """
    The host application.

    Implementations adapt the real runtime (or an in-memory stand-in, see
    ``sapling.testing.MockHost``) to the operations below.
    """

    # ==================== CHANNEL ====================

    @abstractmethod
    def subscribe(self, handler: Callable[["ScriptEvent"], None]) -> None:
        """Register a handler called once per inbound script event."""
        pass

    @abstractmethod
    def emit(self, identifier: str, payload: str) -> None:
        """Emit an outbound script event."""
        pass

    # ==================== ACTORS ====================

    @abstractmethod
    def find_actor(self, name: str) -> Optional[Actor]:
        """Return the connected actor with exactly this name, if any."""
        pass

    # ==================== PERSISTENCE ====================

    @abstractmethod
    def get_property(self, name: str) -> Optional[str]:
        """Read a scalar persistence slot."""
        pass

    @abstractmethod
    def set_property(self, name: str, value: str) -> None:
        """Overwrite a scalar persistence slot."""
        pass

    # ==================== BROADCAST ====================

    @abstractmethod
    def broadcast(self, message: str) -> None:
        """Send a plain-text message to every connected actor."""
        pass
