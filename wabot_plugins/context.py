"""
plugins/context.py
------------------
CommandContext: everything a command handler is allowed to touch.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from wabot_core.permissions import AuthorizationGate
from wabot_core.storage import ConfigStore
from wabot_core.subscriptions import SubscriptionRecord
from wabot_core.transport import InboundMessage
from wabot_core.utils.async_helpers import run_in_threadpool
from wabot_plugins.manager import CommandSpec
from wabot_plugins.registry import LoadMetadata, PluginRegistry

logger = logging.getLogger(__name__)

ReplyFunc = Callable[[str], Awaitable[None]]


class CommandContext:
    """
    Per-invocation capability object passed to handlers.

    Attributes:
        message: The inbound message.
        identity: Normalized caller identity ("" when unknown).
        command: The alias the caller typed (lowercased).
        args: Whitespace-separated arguments after the command.
        prefix: The prefix in effect for this message.
        store: The config store.
    """

    def __init__(
        self,
        *,
        message: InboundMessage,
        identity: str,
        command: str,
        args: list[str],
        prefix: str,
        store: ConfigStore,
        registry: PluginRegistry,
        gate: AuthorizationGate,
        reply: ReplyFunc,
    ) -> None:
        self.message = message
        self.identity = identity
        self.command = command
        self.args = list(args)
        self.prefix = prefix
        self.store = store
        self._registry = registry
        self._gate = gate
        self._reply = reply

    @property
    def text(self) -> str:
        return " ".join(self.args)

    @property
    def chat(self) -> str:
        return self.message.chat

    async def reply(self, text: str) -> None:
        """Send *text* back to the originating chat."""
        await self._reply(text)

    @property
    def registry_metadata(self) -> LoadMetadata | None:
        return self._registry.metadata

    async def reload_plugins(self) -> LoadMetadata:
        # Module imports block, so the rebuild runs off the event loop.
        return await run_in_threadpool(self._registry.reload)

    async def commands(self) -> list[CommandSpec]:
        """Non-hidden commands the caller passes every gate of."""
        visible: list[CommandSpec] = []
        for spec in self._registry.commands():
            if spec.hidden:
                continue
            if await self._gate.allows(spec.gates, self.identity):
                visible.append(spec)
        return visible

    @property
    def dev_numbers(self) -> frozenset[str]:
        return self._gate.dev_numbers

    @property
    def is_owner(self) -> bool:
        return self._gate.is_owner(self.identity)

    async def subscription(self) -> tuple[SubscriptionRecord | None, bool]:
        """Return the caller's subscription record and whether it is active."""
        lookup = self._gate.subscriptions
        record = await lookup.get_subscription(self.identity)
        return record, lookup.is_active(record)

    def __repr__(self) -> str:
        return f"<CommandContext {self.prefix}{self.command} from {self.identity or '?'}>"


__all__ = ["CommandContext", "ReplyFunc"]
