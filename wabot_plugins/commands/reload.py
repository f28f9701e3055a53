#!/usr/bin/env python
"""
plugins/commands/reload.py
--------------------------
Summary: Rebuilds the command table from the plugin package.
Usage:
  .rplugins
"""

import logging

from wabot_core.exceptions import RegistryUnavailable
from wabot_core.permissions import Gate
from wabot_plugins.manager import plugin
from wabot_plugins.messages import RELOAD_DONE, RELOAD_FAILED

logger = logging.getLogger(__name__)


@plugin(
    ["rplugins", "rplug"],
    name="rplugins",
    category="core",
    description="Reload all command plugins",
    gates=[Gate.OWNER],
)
async def reload_plugins(ctx) -> str:
    try:
        metadata = await ctx.reload_plugins()
    except RegistryUnavailable as exc:
        logger.error("Plugin reload requested by %s failed: %s", ctx.identity, exc)
        return RELOAD_FAILED.format(error=exc)

    text = RELOAD_DONE.format(
        count=metadata.count,
        time=metadata.loaded_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
    )
    if metadata.errors:
        text += "\n\nErrors:\n" + "\n".join(f"- {error}" for error in metadata.errors)
    return text

# End of plugins/commands/reload.py
