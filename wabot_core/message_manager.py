#!/usr/bin/env python
"""
File: core/message_manager.py
-----------------------------
Message loop facade. Drops duplicate deliveries, bounds how many messages are
dispatched at once and keeps one message's failure away from the others.
"""

from __future__ import annotations

import asyncio
import logging

from wabot_core import metrics
from wabot_core.dispatcher import DispatchResult, Dispatcher
from wabot_core.transport import InboundMessage, Transport

logger = logging.getLogger(__name__)

SEEN_LIMIT = 5000


class MessageManager:
    """
    MessageManager - Aggregated facade for message processing.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        max_concurrent: int = 6,
        seen_limit: int = SEEN_LIMIT,
    ) -> None:
        self.dispatcher = dispatcher
        self.max_concurrent = max_concurrent
        self.seen_limit = seen_limit
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._seen: set[str] = set()
        self._tasks: set[asyncio.Task] = set()

    def is_duplicate(self, message: InboundMessage) -> bool:
        """Record *message*'s id; True if it was already seen."""
        if not message.id:
            return False
        if message.id in self._seen:
            return True
        if len(self._seen) >= self.seen_limit:
            self._seen.clear()
        self._seen.add(message.id)
        return False

    async def process_message(self, message: InboundMessage) -> DispatchResult | None:
        """
        Dispatch one message. Returns None for duplicates and for messages whose
        dispatch raised.
        """
        if self.is_duplicate(message):
            logger.debug("Skipping duplicate message %s", message.id)
            return None
        metrics.increment_message_count()
        async with self._semaphore:
            try:
                return await self.dispatcher.handle(message)
            except Exception:  # noqa: BLE001 - isolate each message
                logger.exception("Unhandled error while processing message %s", message.id)
                return None

    def submit(self, message: InboundMessage) -> asyncio.Task:
        task = asyncio.create_task(self.process_message(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight message task."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def run(self, transport: Transport) -> None:
        """Consume *transport* until it is exhausted, then drain."""
        try:
            async for message in transport.receive_messages():
                self.submit(message)
        finally:
            await self.drain()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)


__all__ = ["MessageManager", "SEEN_LIMIT"]

# End of core/message_manager.py
