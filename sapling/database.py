"""
JSON Database
=============

A multi-key JSON document stored in a single host persistence slot.

Every read re-fetches and re-parses the slot; every write re-fetches,
mutates a throwaway dict and serializes it back. There is no locking,
so two writers racing on the same name end with the last write.
"""
from __future__ import annotations

import asyncio
import inspect
import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Tuple

from .host import Host

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "{}"


class JsonDB:
    """
    JSON-based database backed by one dynamic property.

    Example:
        db = JsonDB("homes", host)
        db.set("Steve", {"x": 10, "y": 64, "z": -3})
        db.get("Steve")["y"]    # 64

    Note:
        ``size`` is a cached counter updated by ``set``/``remove`` from the
        truthiness of the current value, and ``clear`` leaves it alone, so it
        can drift from the real key count. Use ``count()`` when the exact
        number matters.
    """

    def __init__(self, name: str, host: Host):
        self.name = name
        self._host = host

        raw = host.get_property(name)
        if not raw:
            host.set_property(name, EMPTY_DOCUMENT)
            raw = EMPTY_DOCUMENT

        self.size = len(json.loads(raw))
        logger.debug(f"Opened database '{name}' with {self.size} keys")

    def _read(self) -> Dict[str, Any]:
        return json.loads(self._host.get_property(self.name))

    def _write(self, document: Dict[str, Any]):
        self._host.set_property(self.name, json.dumps(document))

    # ==================== KEYS ====================

    def get(self, key: str) -> Any:
        """Value stored under ``key``, or None."""
        return self._read().get(key)

    def set(self, key: str, value: Any):
        """Store ``value`` under ``key``."""
        document = self._read()

        if not document.get(key):
            self.size += 1
        document[key] = value

        self._write(document)

    def has(self, key: str) -> bool:
        """
        Whether ``key`` holds a truthy value.

        Keys holding ``0``, ``""``, ``False``, ``None`` or an empty container
        report False even though they exist.
        """
        return bool(self._read().get(key))

    def remove(self, key: str):
        """Delete ``key`` if present."""
        document = self._read()

        if document.get(key):
            self.size -= 1
        document.pop(key, None)

        self._write(document)

    # ==================== WHOLE DOCUMENT ====================

    def keys(self) -> List[str]:
        return list(self._read().keys())

    def values(self) -> List[Any]:
        return list(self._read().values())

    def parse(self) -> Dict[str, Any]:
        """The whole document as a dict."""
        return self._read()

    def clear(self):
        """Reset to an empty document. ``size`` is not reset."""
        self._host.set_property(self.name, EMPTY_DOCUMENT)

    def count(self) -> int:
        """Real number of keys, recomputed from the document."""
        return len(self._read())

    # ==================== ITERATION ====================

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Lazily walk a snapshot of the document taken at call time."""
        return iter(self._read().items())

    async def for_each(self, callback: Callable[[str, Any], Any], concurrent: bool = False):
        """
        Call ``callback(key, value)`` for every entry of a snapshot.

        Callbacks may be plain functions or return awaitables. In sequential
        mode each awaitable is awaited before the next entry is visited; in
        concurrent mode every callback is called first and the awaitables are
        gathered together.
        """
        entries = self.items()

        if not concurrent:
            for key, value in entries:
                result = callback(key, value)
                if inspect.isawaitable(result):
                    await result
            return

        pending = []
        for key, value in entries:
            result = callback(key, value)
            if inspect.isawaitable(result):
                pending.append(result)
        if pending:
            await asyncio.gather(*pending)

    def __repr__(self) -> str:
        return f"JsonDB(name={self.name!r}, size={self.size})"
