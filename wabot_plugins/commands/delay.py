#!/usr/bin/env python
"""
plugins/commands/delay.py
-------------------------
Summary: Owner command that sets the maximum random reply delay.
Usage:
  .delay            show the current value
  .delay <seconds>  set it (fractions are floored, capped at 30, 0 = off)
"""

import logging
import math
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wabot_core.exceptions import PluginArgError
from wabot_core.permissions import Gate
from wabot_core.storage import ConfigStore
from wabot_plugins.manager import plugin
from wabot_plugins.messages import DELAY_CURRENT, DELAY_SET, INVALID_NUMBER

logger = logging.getLogger(__name__)

REPLY_DELAY_DOCUMENT = "reply_delay"
REPLY_DELAY_DEFAULT = {"maxSeconds": 0}
MAX_DELAY_SECONDS = 30
NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


class ReplyDelay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_seconds: int = Field(default=0, ge=0, le=MAX_DELAY_SECONDS, alias="maxSeconds")


def parse_delay(value: str) -> int:
    """
    Parse *value* as a delay in whole seconds.

    Anything but a plain decimal (optionally with an exponent) raises
    PluginArgError, as do non-finite and negative values. Larger values are
    capped at MAX_DELAY_SECONDS.
    """
    if not NUMBER_RE.match(value):
        raise PluginArgError(INVALID_NUMBER)
    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise PluginArgError(INVALID_NUMBER)
    return min(MAX_DELAY_SECONDS, math.floor(number))


async def get_reply_delay(store: ConfigStore) -> int:
    """Current max reply delay in seconds; 0 when the stored value is unusable."""
    data = await store.get(REPLY_DELAY_DOCUMENT, REPLY_DELAY_DEFAULT)
    try:
        return ReplyDelay.model_validate(data).max_seconds
    except ValidationError:
        logger.warning("Ignoring malformed reply delay document: %r", data)
        return 0


@plugin(
    "delay",
    category="core",
    description="Set the max random reply delay in seconds (0 = off)",
    gates=[Gate.OWNER],
)
async def delay(ctx) -> str:
    value = ctx.args[0] if ctx.args else ""
    if not value or value.lower() == "show":
        seconds = await get_reply_delay(ctx.store)
        return DELAY_CURRENT.format(seconds=seconds, prefix=ctx.prefix)

    seconds = parse_delay(value)
    await ctx.store.set(REPLY_DELAY_DOCUMENT, ReplyDelay(max_seconds=seconds).model_dump(by_alias=True))
    logger.info("Reply delay set to %ss by %s", seconds, ctx.identity)
    return DELAY_SET.format(seconds=seconds)

# End of plugins/commands/delay.py
