import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from sapling import CommandRegistry, SaplingExtension
from sapling.testing import MockHost


@pytest.fixture
def host():
    return MockHost()


@pytest.fixture
def registry():
    return CommandRegistry()


@pytest.fixture
def extension(host, registry):
    return SaplingExtension(
        extension_id="my-extension",
        extension_namespace="myext",
        extension_name="My Extension",
        host=host,
        registry=registry,
    )
