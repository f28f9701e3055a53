#!/usr/bin/env python
"""
main.py - Main entry point for the chat bot runtime.
Builds the service container, loads the command plugins and runs the message
loop until the transport is exhausted.
"""

import logging
import os

from wabot_core.containers import Container
from wabot_core.exceptions import RegistryUnavailable

logger = logging.getLogger(__name__)


async def main(container: Container | None = None) -> int:
    """
    Start the bot. Returns the process exit code.

    A plugin registry that cannot be built at all is fatal (exit code 1);
    individual plugin errors are only logged.
    """
    container = container or Container()
    settings = container.config()
    if settings.log_level:
        logging.getLogger().setLevel(settings.log_level.upper())

    registry = container.registry()
    try:
        metadata = registry.load()
    except RegistryUnavailable:
        logger.exception("Plugin registry could not be built; aborting startup")
        return 1
    for error in metadata.errors:
        logger.warning("Plugin load error: %s", error)
    logger.info("%d command(s) ready (loaded at %s)", metadata.count, metadata.loaded_at.isoformat())

    if not settings.owner_number:
        logger.warning("OWNER_NUMBER is not set; owner-only commands will deny everyone")
    if os.environ.get("FAST_EXIT_FOR_TESTS") == "1":
        return 0

    manager = container.message_manager()
    try:
        await manager.run(container.transport())
    except KeyboardInterrupt:
        logger.info("Bot shutting down gracefully (KeyboardInterrupt received)")
    finally:
        logger.info("Bot has been shut down")
    return 0


# End of main.py
