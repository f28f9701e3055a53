"""
plugins/__init__.py
-------------------
Plugin package initialization.
Exposes the ``@plugin`` decorator, the registry and the handler context.
"""

# Lazy-loading: command modules are imported by the registry, not here.

from wabot_plugins.manager import (  # noqa: F401
    CommandSpec,
    PackagePluginSource,
    StaticPluginSource,
    plugin,
)
from wabot_plugins.registry import LoadMetadata, PluginRegistry  # noqa: F401
from wabot_plugins.context import CommandContext  # noqa: F401

__all__ = [
    "CommandContext",
    "CommandSpec",
    "LoadMetadata",
    "PackagePluginSource",
    "PluginRegistry",
    "StaticPluginSource",
    "plugin",
]

# End of plugins/__init__.py
