"""
Example extension.

Declares gamerules, one command and one custom protocol, then loads.
Run it against any ``Host``; ``sapling.testing.MockHost`` works locally:

    from sapling.testing import MockHost
    from examples.my_extension import create_extension

    host = MockHost()
    extension = create_extension(host)
    host.add_player("Steve")
    host.send_script_event(
        "myextension:command.mycommand",
        '{"senderName": "Steve", "args": ["hi"]}',
    )
"""
import logging

from sapling import Command, ConfigBuilder, DebugScreen, SaplingExtension

logger = logging.getLogger(__name__)


def create_extension(host, registry=None, debug_mode=True) -> SaplingExtension:
    extension = SaplingExtension(
        extension_id="my-extension",
        extension_name="My Extension",
        extension_namespace="myextension",
        host=host,
        registry=registry,
    )

    # Gamerules patching
    extension.set_gamerules({
        "clientGR": "client",
        "serverGR": "server",
        "engineGR": "engine",
    })

    def on_mycommand(sender, args):
        message = command.data.bind_args(args)["message"]
        DebugScreen(extension).display_content(["Test: " + message])

    command = (
        Command(registry=registry)
        .set_name("mycommand")
        .set_usage("<message: string>")
        .add_argument("string", "message")
        .set_callback(on_mycommand)
        .set_validation({"check_admin": True})
        .build()
    )
    extension.set_command(command)

    # scriptevent myextension:event_test hiii
    @extension.protocol("test")
    def on_test(event):
        logger.warning(event.message)

    config = (
        ConfigBuilder()
        .set_debug_mode(debug_mode)
        .set_automatic_translations(False)
        .set_description_keys({"sapling.help.command.mycommand": "This is a test command"})
    )

    extension.load(config)
    return extension
