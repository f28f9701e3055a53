"""
core/transport.py - Boundary to the external chat transport.

The runtime consumes InboundMessage events and replies through
``Transport.send_message(chat, text)``. Connection handling, sessions,
encryption and delivery receipts are the transport's business.
"""

import itertools
import sys
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import TextIO

from wabot_core.utils.async_helpers import run_in_threadpool


@dataclass(frozen=True)
class InboundMessage:
    """
    One inbound chat event.

    sender / participant / remote_jid are the identity candidates, in priority
    order; ``chat`` is where replies go.
    """

    text: str = ""
    chat: str = ""
    sender: str | None = None
    participant: str | None = None
    remote_jid: str | None = None
    id: str | None = None


class Transport(ABC):
    """
    Abstract base class for chat transport layers.
    """

    @abstractmethod
    async def send_message(self, chat: str, text: str) -> None:
        pass

    @abstractmethod
    def receive_messages(self) -> AsyncIterator[InboundMessage]:
        pass


class ConsoleTransport(Transport):
    """
    Line-oriented stand-in transport for local runs.

    Each input line is ``<sender> <text>``; replies are printed as
    ``[<chat>] <text>``.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._ids = itertools.count(1)

    async def send_message(self, chat: str, text: str) -> None:
        print(f"[{chat}] {text}", file=self._stdout, flush=True)

    async def receive_messages(self) -> AsyncIterator[InboundMessage]:
        while True:
            line = await run_in_threadpool(self._stdin.readline)
            if not line:
                return
            message = self.parse_line(line, next(self._ids))
            if message is not None:
                yield message

    @staticmethod
    def parse_line(line: str, seq: int = 0) -> InboundMessage | None:
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return None
        sender = parts[0]
        text = parts[1] if len(parts) > 1 else ""
        return InboundMessage(
            text=text,
            chat=sender,
            sender=sender,
            remote_jid=sender,
            id=f"console-{seq}",
        )


__all__ = ["ConsoleTransport", "InboundMessage", "Transport"]
