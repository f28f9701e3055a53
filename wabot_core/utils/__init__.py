"""Small shared helpers for the runtime."""

from wabot_core.utils.async_helpers import ensure_awaitable, run_in_threadpool

__all__ = ["ensure_awaitable", "run_in_threadpool"]
