"""
Fake chat-side collaborators: a recording transport, an in-memory
subscription lookup and a message builder.
"""

from collections.abc import Iterable

from wabot_core.subscriptions import SubscriptionRecord
from wabot_core.transport import InboundMessage, Transport

OWNER = "15551230000"
DEV = "2348166337692"
STRANGER = "19998887777"


class FakeTransport(Transport):
    """Records every outbound message; replays a fixed inbound list."""

    def __init__(self, inbound: Iterable[InboundMessage] = ()) -> None:
        self.inbound = list(inbound)
        self.sent: list[tuple[str, str]] = []

    async def send_message(self, chat: str, text: str) -> None:
        self.sent.append((chat, text))

    async def receive_messages(self):
        for message in self.inbound:
            yield message


class FailingTransport(FakeTransport):
    async def send_message(self, chat: str, text: str) -> None:
        raise ConnectionError("socket closed")


class FakeSubscriptions:
    """In-memory subscription lookup; set ``fail`` to simulate an outage."""

    def __init__(self, active: Iterable[str] = ()) -> None:
        self.active = set(active)
        self.fail = False
        self.calls: list[str] = []

    async def get_subscription(self, identity: str) -> SubscriptionRecord | None:
        self.calls.append(identity)
        if self.fail:
            raise RuntimeError("subscription database unavailable")
        if identity in self.active:
            return SubscriptionRecord(plan="monthly", expiresAtMs=4102444800000)
        return None

    def is_active(self, record: SubscriptionRecord | None) -> bool:
        return record is not None


def make_message(text: str, sender: str | None = OWNER, **kwargs) -> InboundMessage:
    chat = kwargs.pop("chat", f"{sender}@s.whatsapp.net" if sender else "group@g.us")
    return InboundMessage(text=text, chat=chat, sender=sender, **kwargs)
