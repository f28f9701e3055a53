"""
plugins/commands/generic.py
---------------------------
Summary: Sets the generic label used when saving unnamed contacts.
Usage:
  .generic          show the current label
  .generic <name>   set it
"""

from wabot_core.permissions import Gate
from wabot_plugins.manager import plugin
from wabot_plugins.messages import GENERIC_SET, GENERIC_USAGE

GENERIC_DOCUMENT = "generic"
GENERIC_DEFAULT = {"name": ""}


@plugin("generic", category="autosave", description="Set the generic contact name", gates=[Gate.OWNER])
async def generic(ctx) -> str:
    name = ctx.text.strip()
    document = ctx.store.document(GENERIC_DOCUMENT, GENERIC_DEFAULT)
    if not name:
        data = await document.read()
        current = str(data.get("name") or "").strip()
        return GENERIC_USAGE.format(current=f"*{current}*" if current else "(not set)", prefix=ctx.prefix)

    await document.update(lambda doc: doc.update({"name": name}))
    return GENERIC_SET.format(name=name)

# End of plugins/commands/generic.py
