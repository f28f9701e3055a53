#!/usr/bin/env python
"""
core/dispatcher.py
------------------
Turns one inbound message into at most one handler invocation.

Pipeline: prefix -> parse -> resolve alias -> identity -> gates -> handler.
Every message ends in exactly one Outcome; handler failures are contained here
and never reach the message loop.
"""

from __future__ import annotations

import asyncio
import difflib
import enum
import logging
from dataclasses import dataclass, field

from wabot_core import metrics
from wabot_core.exceptions import HandlerTimeout, PluginArgError
from wabot_core.identity import resolve_identity
from wabot_core.parsers.message_parser import PREFIX_DOCUMENT, is_valid_prefix, parse_command
from wabot_core.permissions import AuthorizationGate, Gate, denial_message
from wabot_core.storage import ConfigStore
from wabot_core.transport import InboundMessage, Transport
from wabot_plugins import messages
from wabot_plugins.context import CommandContext
from wabot_plugins.manager import CommandSpec
from wabot_plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
SUGGESTION_CUTOFF = 0.6


class Outcome(str, enum.Enum):
    IGNORED = "ignored"
    NOT_FOUND = "not_found"
    DENIED = "denied"
    INVALID = "invalid"
    REPLIED = "replied"
    HANDLER_ERROR = "handler_error"


@dataclass
class DispatchResult:
    outcome: Outcome
    command: str | None = None
    replies: list[str] = field(default_factory=list)
    gate: Gate | None = None

    @property
    def reply(self) -> str | None:
        """The last reply sent, if any."""
        return self.replies[-1] if self.replies else None


class Dispatcher:
    """
    Dispatcher - routes parsed commands to plugin handlers.

    ``transport`` may be None, in which case replies are only recorded on the
    DispatchResult.
    """

    def __init__(
        self,
        registry: PluginRegistry,
        gate: AuthorizationGate,
        store: ConfigStore,
        transport: Transport | None = None,
        *,
        default_prefix: str = ".",
        handler_timeout_s: float = 30.0,
        unknown_command_policy: str = "silent",
    ) -> None:
        self.registry = registry
        self.gate = gate
        self.store = store
        self.transport = transport
        self.default_prefix = default_prefix
        self.handler_timeout_s = handler_timeout_s
        self.unknown_command_policy = unknown_command_policy

    async def current_prefix(self) -> str:
        """The prefix saved by setprefix, else the configured default."""
        doc = await self.store.get(PREFIX_DOCUMENT, {})
        prefix = doc.get("prefix")
        if prefix is None:
            return self.default_prefix
        if is_valid_prefix(prefix):
            return prefix
        logger.warning("Stored prefix %r is invalid; using %r", prefix, self.default_prefix)
        return self.default_prefix

    async def _send(self, chat: str, text: str) -> None:
        if self.transport is not None:
            await self.transport.send_message(chat, text)

    async def handle(self, message: InboundMessage) -> DispatchResult:
        """
        handle(message) -> DispatchResult
        ---------------------------------
        Process one message end to end.

        Example:
            result = await dispatcher.handle(InboundMessage(text=".delay 5", chat="c", sender="15551230000"))
            result.outcome  # Outcome.REPLIED
        """
        replies: list[str] = []

        async def reply(text: str) -> None:
            replies.append(text)
            await self._send(message.chat, text)

        async def reply_quietly(text: str) -> None:
            try:
                await reply(text)
            except Exception:  # noqa: BLE001 - transport failure must not escape dispatch
                logger.exception("Failed to deliver reply to %s", message.chat)

        prefix = await self.current_prefix()
        parsed = parse_command(message.text, prefix)
        if parsed is None:
            return DispatchResult(Outcome.IGNORED)

        identity = resolve_identity(message)
        spec = self.registry.resolve(parsed.command)
        if spec is None:
            await self._unknown_command(parsed.command, prefix, identity, reply_quietly)
            return DispatchResult(Outcome.NOT_FOUND, command=parsed.command, replies=replies)

        failed = await self.gate.check(spec.gates, identity)
        if failed is not None:
            logger.info(
                "Denied %s%s for %s (gate: %s)", prefix, parsed.command, identity or "?", failed.value
            )
            await reply_quietly(denial_message(failed, spec.denial_messages))
            return DispatchResult(Outcome.DENIED, command=parsed.command, replies=replies, gate=failed)

        ctx = CommandContext(
            message=message,
            identity=identity,
            command=parsed.command,
            args=parsed.args,
            prefix=prefix,
            store=self.store,
            registry=self.registry,
            gate=self.gate,
            reply=reply,
        )
        metrics.increment_command_count()
        outcome = await self._invoke(spec, ctx, reply_quietly)
        return DispatchResult(outcome, command=parsed.command, replies=replies)

    async def _invoke(self, spec: CommandSpec, ctx: CommandContext, reply_quietly) -> Outcome:
        try:
            result = await asyncio.wait_for(spec.handler(ctx), timeout=self.handler_timeout_s)
        except PluginArgError as exc:
            await reply_quietly(str(exc))
            return Outcome.INVALID
        except asyncio.TimeoutError:
            fault = HandlerTimeout(f"Command '{spec.name}' timed out after {self.handler_timeout_s:.1f}s")
            logger.error("%s (caller %s)", fault, ctx.identity or "?")
            await reply_quietly(messages.INTERNAL_ERROR)
            return Outcome.HANDLER_ERROR
        except Exception:  # noqa: BLE001 - handler failures are isolated per message
            logger.exception("Plugin execution failure in '%s'", spec.name)
            await reply_quietly(messages.INTERNAL_ERROR)
            return Outcome.HANDLER_ERROR

        if isinstance(result, str):
            if result:
                await reply_quietly(result)
        elif result is not None:
            logger.warning(
                "Plugin '%s' returned non-string type %s; ignoring.", spec.name, type(result).__name__
            )
        return Outcome.REPLIED

    async def _unknown_command(self, command: str, prefix: str, identity: str, reply_quietly) -> None:
        policy = self.unknown_command_policy
        if policy == "silent":
            logger.debug("Unknown command %s%s ignored", prefix, command)
            return
        text = messages.UNKNOWN_COMMAND.format(prefix=prefix, command=command)
        if policy == "suggest":
            suggestions = await self.suggest(command, identity)
            if suggestions:
                lines = "\n".join(f"  • {prefix}{alias}" for alias in suggestions)
                text = f"{text}\n\n{messages.DID_YOU_MEAN}\n{lines}"
        await reply_quietly(text)

    async def suggest(self, command: str, identity: str) -> list[str]:
        """Close aliases to *command* among non-hidden commands the caller may run."""
        candidates: dict[str, CommandSpec] = {
            alias: spec for alias, spec in self.registry.aliases().items() if not spec.hidden
        }
        matches = difflib.get_close_matches(
            command, list(candidates), n=len(candidates) or 1, cutoff=SUGGESTION_CUTOFF
        )
        allowed: list[str] = []
        for alias in matches:
            if await self.gate.allows(candidates[alias].gates, identity):
                allowed.append(alias)
            if len(allowed) >= MAX_SUGGESTIONS:
                break
        return allowed


__all__ = ["DispatchResult", "Dispatcher", "Outcome"]

# End of core/dispatcher.py
