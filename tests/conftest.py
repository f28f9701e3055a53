#!/usr/bin/env python
"""
tests/conftest.py – test harness bootstrap.
Provides a temp-dir config store, a recording transport, a fake subscription
lookup and a dispatcher factory wired to the real command plugins.
"""

from collections.abc import Callable

import pytest

from wabot_core.dispatcher import Dispatcher
from wabot_core.logger_setup import setup_logging
from wabot_core.permissions import AuthorizationGate
from wabot_core.storage import ConfigStore
from wabot_plugins.manager import PackagePluginSource, StaticPluginSource
from wabot_plugins.registry import PluginRegistry
from tests.fakes.fake_chat import DEV, OWNER, FakeSubscriptions, FakeTransport

# ------------------------------------------------------------------+
# Global logging setup                                              +
# ------------------------------------------------------------------+
setup_logging({"root": {"level": "WARNING"}})


@pytest.fixture
def store(tmp_path) -> ConfigStore:
    return ConfigStore(tmp_path / "database")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def subscriptions() -> FakeSubscriptions:
    return FakeSubscriptions()


@pytest.fixture
def gate(subscriptions) -> AuthorizationGate:
    return AuthorizationGate(owner_number=OWNER, dev_numbers=[DEV], subscriptions=subscriptions)


@pytest.fixture
def registry() -> PluginRegistry:
    """Registry over the real built-in command package, already loaded."""
    reg = PluginRegistry(PackagePluginSource("wabot_plugins.commands"))
    reg.load()
    return reg


@pytest.fixture
def make_dispatcher(store, gate, transport) -> Callable[..., Dispatcher]:
    """
    Build a Dispatcher. Pass ``specs`` (decorated handlers or CommandSpecs) to
    use a static registry instead of the built-in commands.
    """

    def _factory(specs=None, **kwargs) -> Dispatcher:
        if specs is None:
            reg = PluginRegistry(PackagePluginSource("wabot_plugins.commands"))
        else:
            reg = PluginRegistry(StaticPluginSource(specs))
        reg.load()
        return Dispatcher(reg, gate, store, transport, **kwargs)

    return _factory


@pytest.fixture
def dispatcher(make_dispatcher) -> Dispatcher:
    return make_dispatcher()
