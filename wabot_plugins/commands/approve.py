#!/usr/bin/env python
"""
plugins/commands/approve.py
---------------------------
Summary: Developer-only approval list. The list is informational: no gate
reads it, so approving a number grants nothing.
Usage:
  .approve <number>
  .revoke <number>
  .approved
"""

import logging

from wabot_core.exceptions import PluginArgError
from wabot_core.identity import normalize_number, normalize_numbers
from wabot_core.permissions import Gate
from wabot_plugins.manager import plugin
from wabot_plugins import messages

logger = logging.getLogger(__name__)

APPROVED_DOCUMENT = "approved"
APPROVED_DEFAULT = {"numbers": []}


def _stored_numbers(doc: dict) -> list[str]:
    raw = doc.get("numbers")
    return normalize_numbers(raw) if isinstance(raw, list) else []


@plugin(
    ["approve", "revoke", "approved"],
    name="approval",
    category="dev",
    description="Record approved numbers (info only)",
    gates=[Gate.DEV],
)
async def approval(ctx) -> str:
    document = ctx.store.document(APPROVED_DOCUMENT, APPROVED_DEFAULT)

    if ctx.command == "approved":
        numbers = normalize_numbers([*sorted(ctx.dev_numbers), *_stored_numbers(await document.read())])
        listing = "\n".join(f"{i}. +{n}" for i, n in enumerate(numbers, 1)) or "(empty)"
        return f"{messages.APPROVED_HEADER}\n\n{listing}\n\n{messages.APPROVED_FOOTER}"

    number = normalize_number(ctx.args[0]) if len(ctx.args) == 1 else ""
    if not number:
        raise PluginArgError(messages.APPROVE_USAGE.format(prefix=ctx.prefix))

    if ctx.command == "approve":
        outcome = {}

        def _add(doc: dict) -> dict:
            numbers = _stored_numbers(doc)
            outcome["added"] = number not in numbers
            if outcome["added"]:
                numbers.append(number)
            return {**doc, "numbers": numbers}

        await document.update(_add)
        if not outcome["added"]:
            return messages.APPROVED_ALREADY.format(number=number)
        logger.info("%s approved %s", ctx.identity, number)
        return messages.APPROVED_ADDED.format(number=number)

    if number in ctx.dev_numbers:
        raise PluginArgError(messages.APPROVED_IS_DEV.format(number=number))

    outcome = {}

    def _remove(doc: dict) -> dict:
        numbers = _stored_numbers(doc)
        outcome["removed"] = number in numbers
        return {**doc, "numbers": [n for n in numbers if n != number]}

    await document.update(_remove)
    if not outcome["removed"]:
        return messages.APPROVED_NOT_LISTED.format(number=number)
    logger.info("%s revoked %s", ctx.identity, number)
    return messages.APPROVED_REMOVED.format(number=number)

# End of plugins/commands/approve.py
