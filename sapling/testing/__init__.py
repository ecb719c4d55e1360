"""
Sapling - Testing Module
========================

Tools to develop and test extensions without the game running.

Components:
- MockHost: in-memory world with players, tags, properties and a scriptevent bus
- MockPlayer: simulated player
- ExtensionTestCase: unittest base class for extensions
"""

from .mocks import MockHost, MockPlayer
from .runner import ExtensionTestCase

__all__ = [
    'MockHost',
    'MockPlayer',
    'ExtensionTestCase',
]
