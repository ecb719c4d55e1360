"""
Example extension tests
=======================

Shows how to test an extension with ExtensionTestCase.

    pytest tests/test_example_extension.py -v
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sapling import DEBUGSCREEN_PUSH, Command, CommandRegistry, command_registry
from sapling.testing import ExtensionTestCase, MockHost
from examples.my_extension import create_extension


class TestExampleExtension(unittest.TestCase):
    """The example wiring, end to end."""

    def setUp(self):
        self.host = MockHost()
        self.registry = CommandRegistry()
        self.extension = create_extension(self.host, registry=self.registry)

    def test_loaded_in_debug_mode(self):
        """The example loads in debug mode."""
        self.assertTrue(self.extension.get_load_state())
        self.assertTrue(self.extension.config.debug_mode)

    def test_command_pushes_debug_screen(self):
        """mycommand pushes its message to the debug screen."""
        self.host.add_player("Steve")
        self.host.send_script_event(
            "myextension:command.mycommand",
            '{"senderName": "Steve", "args": ["hello"]}',
        )
        payloads = self.host.emitted_payloads(DEBUGSCREEN_PUSH)
        self.assertEqual(len(payloads), 1)
        self.assertIn("Test: hello", payloads[0])

    def test_test_protocol(self):
        """The test protocol logs the event message."""
        with self.assertLogs("examples.my_extension", level="WARNING") as logs:
            self.host.send_script_event("myextension:event_test", "hiii")
        self.assertIn("hiii", logs.output[0])


class TestWithExtensionTestCase(ExtensionTestCase):
    """ExtensionTestCase helpers."""

    namespace = "shop"

    def setup_extension(self, extension):
        extension.set_gamerules({"sales": "server"})
        self.bought = []
        extension.set_command(
            Command(registry=self.registry)
            .set_name("buy")
            .add_argument("string", "item")
            .add_argument("int", "amount")
            .set_callback(lambda sender, args: self.bought.append((sender.name, args)))
            .build()
        )

    def test_buy(self):
        """A well-formed purchase reaches the callback."""
        self.load()
        self.add_player("Steve")
        self.run_command("buy", "Steve", ["apple", 3])
        self.assertEqual(self.bought, [("Steve", ["apple", 3])])

    def test_buy_syntax_error(self):
        """A missing argument answers with a syntax error."""
        self.load()
        steve = self.add_player("Steve")
        self.run_command("buy", "Steve", ["apple"])
        self.assertEqual(self.bought, [])
        self.assertPlayerReceived(steve, "Syntax error")

    def test_sales_gamerule(self):
        """Pushed gamerules are readable."""
        self.load()
        self.push_gamerules({"sales": True})
        self.assertTrue(self.extension.get_gamerule("sales"))

    def test_announcement(self):
        """load announces the extension namespace."""
        self.load()
        self.assertEmitted("sapling:extension_load")
        self.assertEqual(self.last_emitted("sapling:extension_load")["extensionNamespace"], "shop")

    def test_registry_is_private(self):
        """Commands stay in the per-test registry."""
        self.assertIs(self.extension.registry, self.registry)
        self.assertIsNotNone(self.registry.lookup("#buy"))
        self.assertNotIn("#buy", command_registry)


if __name__ == '__main__':
    unittest.main(verbosity=2)
