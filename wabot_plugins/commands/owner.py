#!/usr/bin/env python
"""
plugins/commands/owner.py
-------------------------
Summary: Shows or sets the bot owner's display name.
Usage:
  .owner          show the current name
  .owner <name>   set it (2 to 50 characters)
"""

from pydantic import BaseModel, Field

from wabot_core.parsers import validate_model
from wabot_core.permissions import Gate
from wabot_plugins.manager import plugin
from wabot_plugins.messages import OWNER_CURRENT, OWNER_NAME_LENGTH, OWNER_UPDATED

OWNER_DOCUMENT = "owner"
OWNER_DEFAULT = {"name": "Owner"}


class OwnerName(BaseModel):
    name: str = Field(min_length=2, max_length=50)


@plugin("owner", category="core", description="Show or set the owner display name", gates=[Gate.OWNER])
async def owner(ctx) -> str:
    name = ctx.text.strip()
    if not name or name.lower() == "show":
        data = await ctx.store.get(OWNER_DOCUMENT, OWNER_DEFAULT)
        current = str(data.get("name") or "").strip() or OWNER_DEFAULT["name"]
        return OWNER_CURRENT.format(name=current, prefix=ctx.prefix)

    model = validate_model({"name": name}, OwnerName, OWNER_NAME_LENGTH)
    await ctx.store.document(OWNER_DOCUMENT, OWNER_DEFAULT).update(
        lambda doc: doc.update(model.model_dump())
    )
    return OWNER_UPDATED.format(name=model.name)

# End of plugins/commands/owner.py
