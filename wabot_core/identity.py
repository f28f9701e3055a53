"""
core/identity.py - Sender identity normalization.

An identity is the bare digit string of a phone/account number. Anything that
does not normalize to 8-15 digits becomes the empty identity, which every
authorization gate treats as unauthorized.
"""

import re
from typing import Any, Iterable

MIN_DIGITS = 8
MAX_DIGITS = 15

_NON_DIGITS = re.compile(r"\D")


def normalize_number(value: Any) -> str:
    """
    Return the digits of *value* or "" when it is not a plausible number.

    Accepts raw numbers ("+1 555-123-0000"), chat ids ("15551230000@s.whatsapp.net")
    and device-qualified ids ("15551230000:12@s.whatsapp.net").
    """
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    text = text.split("@", 1)[0]
    text = text.split(":", 1)[0]
    digits = _NON_DIGITS.sub("", text)
    if len(digits) < MIN_DIGITS or len(digits) > MAX_DIGITS:
        return ""
    return digits


def normalize_numbers(values: Iterable[Any]) -> list[str]:
    """Normalize every value, dropping failures and duplicates (order kept)."""
    seen: dict[str, None] = {}
    for value in values:
        number = normalize_number(value)
        if number:
            seen.setdefault(number, None)
    return list(seen)


def resolve_identity(message: Any) -> str:
    """
    Derive the caller identity from an inbound message.

    The first non-empty of ``sender``, ``participant`` and ``remote_jid`` is
    normalized. Later fields are only consulted when an earlier one is absent,
    not when it fails to normalize.
    """
    for field in ("sender", "participant", "remote_jid"):
        raw = getattr(message, field, None)
        if raw:
            return normalize_number(raw)
    return ""


__all__ = ["normalize_number", "normalize_numbers", "resolve_identity"]
