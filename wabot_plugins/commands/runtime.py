"""
plugins/commands/runtime.py - Shows how long the bot has been running.
"""

from wabot_core import metrics
from wabot_plugins.manager import plugin
from wabot_plugins.messages import RUNTIME_TEXT


@plugin("runtime", category="tools", description="Show bot uptime")
async def runtime(ctx) -> str:
    hours, minutes, seconds = metrics.split_hms(metrics.get_uptime())
    return RUNTIME_TEXT.format(hours=hours, minutes=minutes, seconds=seconds)

# End of plugins/commands/runtime.py
