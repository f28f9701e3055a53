"""
File: tests/plugins/test_plugin_registry.py
-------------------------------------------
PluginRegistry load/reload semantics: validation errors, alias collisions,
idempotent reloads, strictly increasing timestamps and atomic publication.
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from wabot_core.exceptions import RegistryUnavailable
from wabot_plugins.manager import Discovery, StaticPluginSource, plugin
from wabot_plugins.registry import PluginRegistry


def _make(alias, name=None, **kwargs):
    @plugin(alias, name=name, **kwargs)
    async def handler(ctx):
        return alias if isinstance(alias, str) else alias[0]

    return handler


def test_load_reports_count_and_resolves_aliases():
    registry = PluginRegistry(StaticPluginSource([_make(["alpha", "a"]), _make("beta")]))
    meta = registry.load()
    assert meta.count == 2
    assert meta.errors == ()
    assert registry.resolve("ALPHA ") is registry.resolve("a")
    assert registry.resolve("missing") is None
    assert [s.name for s in registry.commands()] == ["alpha", "beta"]


def test_reload_is_idempotent_with_later_timestamp():
    source = StaticPluginSource([_make("alpha"), _make("beta")])
    registry = PluginRegistry(source)
    first = registry.load()
    mapping_first = dict(registry.aliases())
    second = registry.reload()
    assert dict(registry.aliases()) == mapping_first
    assert second.count == first.count
    assert second.errors == ()
    assert second.loaded_at > first.loaded_at


def test_timestamps_increase_even_with_frozen_clock():
    frozen = datetime(2026, 1, 1, tzinfo=timezone.utc)
    registry = PluginRegistry(StaticPluginSource([_make("alpha")]), clock=lambda: frozen)
    stamps = [registry.reload().loaded_at for _ in range(3)]
    assert stamps[0] < stamps[1] < stamps[2]


def test_alias_collision_last_wins_with_one_error():
    first = _make("dup", name="first")
    second = _make("dup", name="second")
    registry = PluginRegistry(StaticPluginSource([first, second]))
    meta = registry.load()
    assert registry.resolve("dup").name == "second"
    assert len(meta.errors) == 1
    assert "dup" in meta.errors[0]
    assert meta.count == 1


def test_invalid_candidates_are_skipped_with_errors():
    good = _make("good")
    no_alias = replace(good.__plugin_spec__, aliases=())
    bad_alias = replace(good.__plugin_spec__, aliases=("has space",))
    not_callable = replace(good.__plugin_spec__, aliases=("nc",), handler="nope")
    bad_gate = _make("gated", gates=["admin"])
    registry = PluginRegistry(
        StaticPluginSource([good, no_alias, bad_alias, not_callable, bad_gate, object()])
    )
    meta = registry.load()
    assert meta.count == 1
    assert len(meta.errors) == 5
    assert registry.resolve("good") is not None
    assert registry.resolve("gated") is None


def test_previous_table_survives_unavailable_source():
    class FlakySource:
        def __init__(self):
            self.broken = False

        def discover(self):
            if self.broken:
                raise RegistryUnavailable("package vanished")
            return Discovery(candidates=[_make("alpha").__plugin_spec__])

    source = FlakySource()
    registry = PluginRegistry(source)
    meta = registry.load()
    source.broken = True
    with pytest.raises(RegistryUnavailable):
        registry.reload()
    assert registry.resolve("alpha") is not None
    assert registry.metadata == meta


def test_old_snapshot_is_unaffected_by_reload():
    source = StaticPluginSource([_make("alpha")])
    registry = PluginRegistry(source)
    registry.load()
    snapshot = registry.aliases()
    source.candidates = [_make("beta")]
    registry.reload()
    assert "alpha" in snapshot
    assert registry.resolve("alpha") is None
    assert registry.resolve("beta") is not None


def test_published_mapping_is_read_only():
    registry = PluginRegistry(StaticPluginSource([_make("alpha")]))
    registry.load()
    with pytest.raises(TypeError):
        registry.aliases()["beta"] = None


def test_unloaded_registry_is_empty():
    registry = PluginRegistry(StaticPluginSource())
    assert registry.metadata is None
    assert not registry.loaded
    assert registry.resolve("anything") is None

# End of tests/plugins/test_plugin_registry.py
