"""
Tests for the JSON database over a single host property.
"""
import asyncio
import json

import pytest

from sapling import JsonDB


class Ready:
    """Awaitable that is neither a coroutine nor a Future."""

    def __init__(self, seen, key):
        self.seen = seen
        self.key = key

    def __await__(self):
        yield from asyncio.sleep(0).__await__()
        self.seen.append(self.key)


class TestJsonDBBasics:
    """Key operations."""

    def test_seeds_empty_document(self, host):
        """An empty slot is seeded with an empty object."""
        JsonDB("homes", host)
        assert host.properties["homes"] == "{}"

    def test_keeps_existing_document(self, host):
        """An existing document is kept and counted."""
        host.set_property("homes", json.dumps({"Steve": [1, 2, 3], "Alex": [0, 0, 0]}))
        db = JsonDB("homes", host)
        assert db.size == 2
        assert db.get("Alex") == [0, 0, 0]

    def test_set_then_get(self, host):
        """set then get returns the stored value."""
        db = JsonDB("homes", host)
        db.set("Steve", {"x": 10, "y": 64})
        assert db.get("Steve") == {"x": 10, "y": 64}

    def test_get_missing_is_none(self, host):
        """Missing keys read as None."""
        db = JsonDB("homes", host)
        assert db.get("nobody") is None

    def test_remove_then_has(self, host):
        """A removed key is gone."""
        db = JsonDB("homes", host)
        db.set("Steve", "home")
        db.remove("Steve")
        assert db.has("Steve") is False
        assert "Steve" not in db.keys()

    def test_has_is_false_for_falsy_values(self, host):
        """has reports stored falsy values as absent."""
        db = JsonDB("flags", host)
        for key, value in {"zero": 0, "empty": "", "off": False}.items():
            db.set(key, value)
            assert db.has(key) is False
        assert sorted(db.keys()) == ["empty", "off", "zero"]

    def test_writes_go_to_the_property(self, host):
        """Writes serialize the whole document into the slot."""
        db = JsonDB("homes", host)
        db.set("Steve", 1)
        assert json.loads(host.properties["homes"]) == {"Steve": 1}

    def test_reads_see_external_writes(self, host):
        """Every read re-fetches the slot."""
        db = JsonDB("homes", host)
        host.set_property("homes", json.dumps({"Alex": 5}))
        assert db.get("Alex") == 5
        assert db.parse() == {"Alex": 5}

    def test_keys_values_parse(self, host):
        """keys, values and parse follow insertion order."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)
        assert db.keys() == ["a", "b"]
        assert db.values() == [1, 2]
        assert db.parse() == {"a": 1, "b": 2}

    def test_malformed_document_raises(self, host):
        """A corrupted slot raises on read."""
        db = JsonDB("homes", host)
        host.set_property("homes", "not json")
        with pytest.raises(json.JSONDecodeError):
            db.get("x")

    def test_empty_store_is_truthy(self, host):
        """An empty store is still a usable object in boolean context."""
        db = JsonDB("homes", host)
        assert (db or None) is db


class TestJsonDBSize:
    """Cached size counter and its drift."""

    def test_size_counts_unique_sets(self, host):
        """size counts sets on absent keys."""
        db = JsonDB("homes", host)
        for i in range(5):
            db.set(f"key{i}", i + 1)
        assert db.size == 5

    def test_overwrite_does_not_increment(self, host):
        """Overwriting a truthy value keeps size."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("a", 2)
        assert db.size == 1

    def test_remove_decrements(self, host):
        """Removing a truthy value decrements size."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)
        db.remove("a")
        assert db.size == 1

    def test_remove_missing_key_keeps_size(self, host):
        """Removing an absent key keeps size."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.remove("zzz")
        assert db.size == 1

    def test_clear_keeps_cached_size(self, host):
        """clear empties the document but not the counter."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)
        db.clear()
        assert db.keys() == []
        assert db.size == 2
        assert db.count() == 0

    def test_falsy_overwrite_drifts(self, host):
        """Re-setting a falsy value counts it again."""
        db = JsonDB("flags", host)
        db.set("a", 0)
        db.set("a", 0)
        assert db.size == 2
        assert db.count() == 1


class TestJsonDBIteration:
    """Snapshot iteration."""

    def test_items_is_a_snapshot(self, host):
        """items ignores writes made after the call."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        entries = db.items()
        db.set("b", 2)
        assert list(entries) == [("a", 1)]

    @pytest.mark.asyncio
    async def test_for_each_sequential(self, host):
        """Plain callbacks see every entry in order."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)
        seen = []
        await db.for_each(lambda k, v: seen.append((k, v)))
        assert seen == [("a", 1), ("b", 2)]

    @pytest.mark.asyncio
    async def test_for_each_awaits_in_order(self, host):
        """Sequential mode awaits each callback before the next."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)
        seen = []

        async def visit(key, value):
            await asyncio.sleep(0.01 if key == "a" else 0)
            seen.append(key)

        await db.for_each(visit)
        assert seen == ["a", "b"]

    @pytest.mark.asyncio
    async def test_for_each_concurrent(self, host):
        """Concurrent mode gathers the callbacks."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)
        seen = []

        async def visit(key, value):
            await asyncio.sleep(0.02 if key == "a" else 0)
            seen.append(key)

        await db.for_each(visit, concurrent=True)
        assert seen == ["b", "a"]

    @pytest.mark.asyncio
    async def test_for_each_awaits_any_awaitable(self, host):
        """Custom awaitables are awaited in both modes."""
        db = JsonDB("homes", host)
        db.set("a", 1)
        db.set("b", 2)

        seen = []
        await db.for_each(lambda k, v: Ready(seen, k))
        assert seen == ["a", "b"]

        seen = []
        await db.for_each(lambda k, v: Ready(seen, k), concurrent=True)
        assert sorted(seen) == ["a", "b"]
