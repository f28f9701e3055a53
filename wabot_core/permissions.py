#!/usr/bin/env python
"""
core/permissions.py
-------------------
Centralizes the authorization gates a command may declare.

Gates are independent predicates over a normalized identity. When a command
declares several, they are always evaluated in GATE_ORDER and the first
failure wins, so the caller sees that gate's denial message.
"""

import enum
import logging
from collections.abc import Iterable, Mapping

from wabot_core.identity import normalize_number, normalize_numbers
from wabot_core.subscriptions import NullSubscriptionLookup, SubscriptionLookup

logger = logging.getLogger(__name__)


# IMPORTANT: gate *values* are always lower-case; use the enum members
# everywhere instead of hard-coding strings like "OWNER".
class Gate(str, enum.Enum):
    OWNER = "owner"
    DEV = "dev"
    PREMIUM = "premium"


GATE_ORDER: tuple[Gate, ...] = (Gate.OWNER, Gate.DEV, Gate.PREMIUM)

DEFAULT_DENIALS: Mapping[Gate, str] = {
    Gate.OWNER: "This command is only for the bot owner!",
    Gate.DEV: "🔒 Developer-only feature.",
    Gate.PREMIUM: "🔒 This command requires a premium subscription.",
}


def ordered_gates(gates: Iterable[Gate]) -> tuple[Gate, ...]:
    """Return *gates* in evaluation order, without duplicates."""
    declared = set(gates)
    return tuple(gate for gate in GATE_ORDER if gate in declared)


def denial_message(gate: Gate, overrides: Mapping[Gate, str] | None = None) -> str:
    if overrides and overrides.get(gate):
        return overrides[gate]
    return DEFAULT_DENIALS[gate]


class AuthorizationGate:
    """
    AuthorizationGate - evaluates owner / developer / premium predicates.

    The owner is a single identity and is *not* implied by being a developer
    (or vice versa). The empty identity fails every gate.
    """

    def __init__(
        self,
        owner_number: str = "",
        dev_numbers: Iterable[str] = (),
        subscriptions: SubscriptionLookup | None = None,
    ) -> None:
        self.owner_number = normalize_number(owner_number)
        self._dev_numbers: frozenset[str] = frozenset(normalize_numbers(dev_numbers))
        self.subscriptions: SubscriptionLookup = subscriptions or NullSubscriptionLookup()

    @property
    def dev_numbers(self) -> frozenset[str]:
        return self._dev_numbers

    def update_dev_numbers(self, numbers: Iterable[str]) -> None:
        """Swap in a refreshed developer allow-list."""
        self._dev_numbers = frozenset(normalize_numbers(numbers))

    def is_owner(self, identity: str) -> bool:
        return bool(identity) and bool(self.owner_number) and identity == self.owner_number

    def is_dev(self, identity: str) -> bool:
        return bool(identity) and identity in self._dev_numbers

    async def is_premium(self, identity: str) -> bool:
        if not identity:
            return False
        try:
            record = await self.subscriptions.get_subscription(identity)
            return bool(self.subscriptions.is_active(record))
        except Exception:  # noqa: BLE001 - lookup failures deny access
            logger.exception("Subscription lookup failed for %s", identity)
            return False

    async def passes(self, gate: Gate, identity: str) -> bool:
        if gate is Gate.OWNER:
            return self.is_owner(identity)
        if gate is Gate.DEV:
            return self.is_dev(identity)
        if gate is Gate.PREMIUM:
            return await self.is_premium(identity)
        raise ValueError(f"Unknown gate: {gate!r}")

    async def check(self, gates: Iterable[Gate], identity: str) -> Gate | None:
        """
        check(gates, identity) -> Gate | None
        -------------------------------------
        Return the first declared gate *identity* fails, or None when all pass.

        Example:
            failed = await gate.check({Gate.PREMIUM, Gate.OWNER}, "19998887777")
            # -> Gate.OWNER; the premium lookup is never performed
        """
        for gate in ordered_gates(gates):
            if not await self.passes(gate, identity):
                return gate
        return None

    async def allows(self, gates: Iterable[Gate], identity: str) -> bool:
        return await self.check(gates, identity) is None


__all__ = [
    "AuthorizationGate",
    "DEFAULT_DENIALS",
    "GATE_ORDER",
    "Gate",
    "denial_message",
    "ordered_gates",
]

# End of core/permissions.py
