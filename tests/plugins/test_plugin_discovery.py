"""
File: tests/plugins/test_plugin_discovery.py
--------------------------------------------
PackagePluginSource: discovery of the built-in commands, import errors as
load errors, and hot reload of edited plugin modules.
"""

import sys
import textwrap

import pytest

from wabot_core.exceptions import RegistryUnavailable
from wabot_plugins.manager import PackagePluginSource
from wabot_plugins.registry import PluginRegistry

BUILTIN_ALIASES = {
    "delay", "owner", "generic", "approve", "revoke", "approved", "runtime",
    "rplugins", "rplug", "setprefix", "prefix", "menu", "help", "substatus",
}


def test_builtin_commands_are_discovered(registry):
    assert BUILTIN_ALIASES <= set(registry.aliases())
    assert registry.metadata.errors == ()


def test_builtin_reload_is_stable(registry):
    before = {alias: spec.name for alias, spec in registry.aliases().items()}
    meta = registry.reload()
    after = {alias: spec.name for alias, spec in registry.aliases().items()}
    assert before == after
    assert meta.errors == ()


def test_missing_package_is_unavailable():
    registry = PluginRegistry(PackagePluginSource("no_such_plugin_package_xyz"))
    with pytest.raises(RegistryUnavailable):
        registry.load()


@pytest.fixture
def plugin_pkg(tmp_path, monkeypatch):
    name = "tmp_wabot_plugins_pkg"
    pkg = tmp_path / name
    pkg.mkdir()
    (pkg / "__init__.py").write_text("")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setattr(sys, "dont_write_bytecode", True)
    yield name, pkg
    for mod in [m for m in sys.modules if m == name or m.startswith(name + ".")]:
        del sys.modules[mod]


def _write_plugin(path, alias, reply):
    path.write_text(
        textwrap.dedent(
            f"""
            from wabot_plugins.manager import plugin

            @plugin("{alias}")
            async def handler(ctx):
                return "{reply}"
            """
        )
    )


def test_import_errors_are_collected(plugin_pkg):
    name, pkg = plugin_pkg
    _write_plugin(pkg / "good.py", "good", "ok")
    (pkg / "broken.py").write_text("raise RuntimeError('boom')\n")
    (pkg / "_private.py").write_text("raise RuntimeError('never imported')\n")

    registry = PluginRegistry(PackagePluginSource(name))
    meta = registry.load()

    assert meta.count == 1
    assert registry.resolve("good") is not None
    assert len(meta.errors) == 1
    assert meta.errors[0].startswith(f"{name}.broken:")
    assert "boom" in meta.errors[0]


def test_reload_picks_up_edits_and_new_modules(plugin_pkg):
    name, pkg = plugin_pkg
    _write_plugin(pkg / "first.py", "first", "v1")
    registry = PluginRegistry(PackagePluginSource(name))
    registry.load()
    old_spec = registry.resolve("first")

    _write_plugin(pkg / "first.py", "first", "version-two")
    _write_plugin(pkg / "second.py", "second", "new")
    meta = registry.reload()

    assert meta.count == 2
    assert registry.resolve("second") is not None
    assert registry.resolve("first") is not old_spec

# End of tests/plugins/test_plugin_discovery.py
