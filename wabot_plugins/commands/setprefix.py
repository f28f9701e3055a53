#!/usr/bin/env python
"""
plugins/commands/setprefix.py
-----------------------------
Summary: Changes the command prefix. Takes effect from the next message.
Usage:
  .setprefix <symbol>
"""

from datetime import datetime, timezone

from wabot_core.exceptions import PluginArgError
from wabot_core.parsers import PREFIX_DOCUMENT, is_valid_prefix
from wabot_core.permissions import Gate
from wabot_plugins.manager import plugin
from wabot_plugins import messages


@plugin(
    ["setprefix", "prefix"],
    name="setprefix",
    category="core",
    description="Change the command prefix",
    gates=[Gate.OWNER],
)
async def setprefix(ctx) -> str:
    if not ctx.args:
        return messages.PREFIX_CURRENT.format(prefix=ctx.prefix)

    new_prefix = ctx.args[0]
    if len(ctx.args) > 1 or len(new_prefix) != 1:
        raise PluginArgError(messages.PREFIX_ONE_CHAR)
    if not is_valid_prefix(new_prefix):
        raise PluginArgError(messages.PREFIX_NOT_ALNUM)

    await ctx.store.set(
        PREFIX_DOCUMENT,
        {"prefix": new_prefix, "updatedAt": datetime.now(timezone.utc).isoformat()},
    )
    return messages.PREFIX_UPDATED.format(old=ctx.prefix, new=new_prefix)

# End of plugins/commands/setprefix.py
