"""
Errors raised by the Sapling extension framework.
"""
from __future__ import annotations


class SaplingError(RuntimeError):
    """Base class for every error raised by Sapling."""
    pass


class ConfigurationError(SaplingError):
    """
    Raised when an extension is wired incorrectly.

    Duplicate protocols, invalid configs, loading twice or operating
    before load all end up here.
    """
    pass


class ValidationError(SaplingError):
    """Raised when a caller asks for something the extension never declared."""
    pass
