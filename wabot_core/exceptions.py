#!/usr/bin/env python
"""
core/exceptions.py - Central module for custom exception classes.
"""


class DomainError(Exception):
    """
    Base class for domain-specific exceptions.
    """


class PluginArgError(DomainError):
    """
    Raised by a handler when the caller's arguments are invalid.

    The message is sent back to the caller verbatim and nothing is persisted.
    """


class PluginLoadError(DomainError):
    """A plugin descriptor could not be registered. Recorded, never fatal."""


class HandlerTimeout(DomainError):
    """A handler did not finish within the per-message time budget."""


class RegistryUnavailable(DomainError):
    """The plugin source could not be constructed at all (fatal at startup)."""


# End of core/exceptions.py
