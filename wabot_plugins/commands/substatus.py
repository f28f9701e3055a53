"""
plugins/commands/substatus.py
-----------------------------
Shows the caller's premium subscription state.
"""

from datetime import datetime, timezone

from wabot_plugins.manager import plugin
from wabot_plugins.messages import SUB_NONE, SUB_STATUS


@plugin("substatus", category="billing", description="Show your subscription status")
async def substatus(ctx) -> str:
    record, active = await ctx.subscription()
    if record is None:
        return SUB_NONE
    if active:
        status = "ACTIVE ✅"
    elif record.revoked:
        status = "REVOKED ❌"
    else:
        status = "EXPIRED ❌"
    try:
        expires = datetime.fromtimestamp(record.expires_at_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    except (OverflowError, OSError, ValueError):
        expires = "unknown"
    return SUB_STATUS.format(
        plan=record.plan or "-",
        status=status,
        expires=expires,
    )

# End of plugins/commands/substatus.py
