"""
core/metrics.py – runtime counters + helpers.
"""

from __future__ import annotations

import time

process_start_time: float = time.time()
# incremented by the MessageManager for every inbound message it accepts
messages_processed: int = 0
# incremented by the Dispatcher whenever a handler is actually invoked
commands_dispatched: int = 0


def increment_message_count() -> None:
    """
    Increment the count of inbound messages processed.
    """
    global messages_processed
    messages_processed += 1


def increment_command_count() -> None:
    """
    Increment the count of commands dispatched to a handler.
    """
    global commands_dispatched
    commands_dispatched += 1


def get_uptime() -> float:
    """
    Return the uptime of the process in seconds (never negative).
    """
    return max(0.0, time.time() - process_start_time)


def split_hms(seconds: float) -> tuple[int, int, int]:
    total = max(0, int(seconds))
    return total // 3600, (total % 3600) // 60, total % 60


# Convenience formatter for HH:MM:SS
def format_hms(seconds: float) -> str:  # noqa: D401 – utility
    h, m, s = split_hms(seconds)
    return f"{h:02d}:{m:02d}:{s:02d}"


def get_stats() -> dict[str, float | int]:
    """
    Convenience – returns a dict that callers (e.g. the ``runtime`` command)
    can format any way they like.
    """
    return {
        "uptime_s": get_uptime(),
        "messages_processed": messages_processed,
        "commands_dispatched": commands_dispatched,
    }


# End of core/metrics.py
