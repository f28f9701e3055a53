"""
core/subscriptions.py
---------------------
Premium subscription lookup used by the premium gate.

The runtime only needs two calls: ``get_subscription(identity)`` and
``is_active(record)``. Billing, plan catalogues and approvals live elsewhere.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wabot_core.storage import ConfigStore

logger = logging.getLogger(__name__)

SUBSCRIPTION_DOCUMENT = "subscription"
SUBSCRIPTION_DEFAULT: dict[str, dict] = {"users": {}}


class SubscriptionRecord(BaseModel):
    """One subscriber entry as stored in ``subscription.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    plan: str = ""
    expires_at_ms: int = Field(default=0, alias="expiresAtMs")
    revoked: bool = False


@runtime_checkable
class SubscriptionLookup(Protocol):
    async def get_subscription(self, identity: str) -> SubscriptionRecord | None: ...

    def is_active(self, record: SubscriptionRecord | None) -> bool: ...


class NullSubscriptionLookup:
    """Nobody is subscribed."""

    async def get_subscription(self, identity: str) -> SubscriptionRecord | None:
        return None

    def is_active(self, record: SubscriptionRecord | None) -> bool:
        return False


class FileSubscriptionLookup:
    """
    Reads subscribers from the ``subscription`` config document::

        {"users": {"15551230000": {"plan": "monthly", "expiresAtMs": 1767225600000}}}

    The document is re-read on every lookup so that external approvals are
    visible immediately.
    """

    def __init__(self, store: ConfigStore, clock: Callable[[], float] = time.time) -> None:
        self._store = store
        self._clock = clock

    async def get_subscription(self, identity: str) -> SubscriptionRecord | None:
        if not identity:
            return None
        doc = await self._store.get(SUBSCRIPTION_DOCUMENT, SUBSCRIPTION_DEFAULT)
        users = doc.get("users")
        if not isinstance(users, dict):
            return None
        raw = users.get(identity)
        if not isinstance(raw, dict):
            return None
        try:
            return SubscriptionRecord.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Ignoring malformed subscription for %s: %s", identity, exc)
            return None

    def is_active(self, record: SubscriptionRecord | None) -> bool:
        if record is None or record.revoked:
            return False
        return record.expires_at_ms > int(self._clock() * 1000)


__all__ = [
    "FileSubscriptionLookup",
    "NullSubscriptionLookup",
    "SUBSCRIPTION_DEFAULT",
    "SUBSCRIPTION_DOCUMENT",
    "SubscriptionLookup",
    "SubscriptionRecord",
]
