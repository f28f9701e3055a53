"""
File: tests/core/test_subscriptions.py
--------------------------------------
File-backed subscription lookup.
"""

import pytest

from wabot_core.subscriptions import (
    SUBSCRIPTION_DOCUMENT,
    FileSubscriptionLookup,
    NullSubscriptionLookup,
)

NOW_S = 1_700_000_000.0


@pytest.fixture
def lookup(store):
    return FileSubscriptionLookup(store, clock=lambda: NOW_S)


@pytest.mark.asyncio
async def test_active_expired_and_revoked(store, lookup):
    future = int(NOW_S * 1000) + 60_000
    past = int(NOW_S * 1000) - 1
    await store.set(
        SUBSCRIPTION_DOCUMENT,
        {
            "users": {
                "15551230000": {"plan": "monthly", "expiresAtMs": future},
                "19998887777": {"plan": "monthly", "expiresAtMs": past},
                "2348166337692": {"plan": "yearly", "expiresAtMs": future, "revoked": True},
            }
        },
    )
    active = await lookup.get_subscription("15551230000")
    assert active.plan == "monthly"
    assert lookup.is_active(active)
    assert not lookup.is_active(await lookup.get_subscription("19998887777"))
    assert not lookup.is_active(await lookup.get_subscription("2348166337692"))


@pytest.mark.asyncio
async def test_expiry_boundary_is_exclusive(store, lookup):
    await store.set(SUBSCRIPTION_DOCUMENT, {"users": {"15551230000": {"expiresAtMs": int(NOW_S * 1000)}}})
    assert not lookup.is_active(await lookup.get_subscription("15551230000"))


@pytest.mark.asyncio
async def test_missing_and_malformed_records(store, lookup):
    await store.set(
        SUBSCRIPTION_DOCUMENT,
        {"users": {"15551230000": {"expiresAtMs": "soon"}, "19998887777": "yes"}},
    )
    assert await lookup.get_subscription("15551230000") is None
    assert await lookup.get_subscription("19998887777") is None
    assert await lookup.get_subscription("11111111111") is None
    assert await lookup.get_subscription("") is None


@pytest.mark.asyncio
async def test_null_lookup():
    lookup = NullSubscriptionLookup()
    assert await lookup.get_subscription("15551230000") is None
    assert lookup.is_active(None) is False

# End of tests/core/test_subscriptions.py
