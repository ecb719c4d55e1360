"""
Debug screen overlay for extensions.
"""
from __future__ import annotations

import json
from typing import List

from .errors import ConfigurationError
from .extension import SaplingExtension
from .protocol import DEBUGSCREEN_PUSH


class DebugScreen:
    """Pushes lines of text to the host-side debug screen."""

    def __init__(self, extension: SaplingExtension):
        if not isinstance(extension, SaplingExtension):
            raise ConfigurationError("Is not a SaplingExtension instance")
        self._extension = extension

    def display_content(self, content: List[str]):
        """
        Replace the debug screen content of this extension.

        Raises:
            ConfigurationError: extension not loaded
        """
        if not self._extension.get_load_state():
            raise ConfigurationError("The extension is not loaded!")

        data = {'id': self._extension.extension_id, 'content': list(content)}
        self._extension.host.emit(DEBUGSCREEN_PUSH, json.dumps(data))
