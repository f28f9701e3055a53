#!/usr/bin/env python
"""
plugins/manager.py
------------------
Plugin descriptors, the ``@plugin`` decorator and the plugin sources the
registry loads from.

The decorator does not register anything globally: it attaches an immutable
CommandSpec to the handler (``handler.__plugin_spec__``) and the registry
collects those specs from a PluginSource on every (re)load.

Writing a plugin:
    1) Create a module under ``wabot_plugins/commands/``.
    2) Decorate an async function taking a CommandContext:

        @plugin(["delay"], category="core", gates=[Gate.OWNER])
        async def delay(ctx: CommandContext) -> str:
            ...

    3) Return the reply text (or call ``ctx.reply``); raise PluginArgError for
       bad arguments.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
import sys
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import ModuleType
from typing import TYPE_CHECKING, Any, Protocol

from wabot_core.exceptions import RegistryUnavailable
from wabot_core.parsers.message_parser import normalize_alias
from wabot_core.permissions import Gate
from wabot_core.utils.async_helpers import ensure_awaitable

if TYPE_CHECKING:
    from wabot_plugins.context import CommandContext

logger = logging.getLogger(__name__)

SPEC_ATTRIBUTE = "__plugin_spec__"

Handler = Callable[["CommandContext"], Awaitable[Any]]


@dataclass(frozen=True)
class CommandSpec:
    """Immutable descriptor of one command handler and the aliases bound to it."""

    name: str
    aliases: tuple[str, ...]
    handler: Handler
    category: str = "misc"
    description: str = ""
    gates: frozenset[Any] = frozenset()
    denials: tuple[tuple[Gate, str], ...] = ()
    hidden: bool = False
    module: str = ""

    @property
    def denial_messages(self) -> dict[Gate, str]:
        return dict(self.denials)

    @property
    def primary_alias(self) -> str:
        return self.aliases[0] if self.aliases else self.name


@dataclass
class Discovery:
    """What a PluginSource found: raw candidates plus import errors."""

    candidates: list[Any] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class PluginSource(Protocol):
    def discover(self) -> Discovery: ...


def _coerce_gate(value: Any) -> Any:
    # Unknown values are kept as-is so the registry can report them.
    if isinstance(value, Gate):
        return value
    try:
        return Gate(str(value).strip().lower())
    except ValueError:
        return value


def plugin(
    commands: str | Iterable[str],
    *,
    name: str | None = None,
    category: str = "misc",
    description: str | None = None,
    gates: Iterable[Gate | str] = (),
    denial_messages: Mapping[Gate | str, str] | None = None,
    hidden: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that describes a function as a command plugin.

    Parameters:
      commands: Command alias or aliases; normalized (stripped, lowercased).
      name: Display name (default is the first alias).
      category: Menu category.
      description: One-line help (default is the first docstring line).
      gates: Required gates, evaluated owner -> dev -> premium.
      denial_messages: Per-gate overrides of the default denial replies.
      hidden: If True, the command is left out of the menu.
    """
    if isinstance(commands, str):
        commands = [commands]
    aliases = tuple(dict.fromkeys(normalize_alias(str(cmd)) for cmd in commands))
    gate_set = frozenset(_coerce_gate(gate) for gate in gates)
    denials = tuple(
        (_coerce_gate(gate), text) for gate, text in (denial_messages or {}).items()
    )

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        doc_line = (func.__doc__ or "").strip().splitlines()
        spec = CommandSpec(
            name=name or (aliases[0] if aliases and aliases[0] else func.__name__),
            aliases=aliases,
            handler=ensure_awaitable(func),
            category=str(category or "misc").strip().lower(),
            description=description if description is not None else (doc_line[0] if doc_line else ""),
            gates=gate_set,
            denials=denials,
            hidden=hidden,
            module=getattr(func, "__module__", "") or "",
        )
        setattr(func, SPEC_ATTRIBUTE, spec)
        return func

    return decorator


def collect_specs(module: ModuleType) -> list[Any]:
    """Return the plugin specs defined (not merely imported) in *module*, in definition order."""
    found: list[Any] = []
    for obj in vars(module).values():
        spec = getattr(obj, SPEC_ATTRIBUTE, None)
        if spec is None:
            continue
        if getattr(obj, "__module__", module.__name__) != module.__name__:
            continue
        found.append(spec)
    return found


def import_module_fresh(module_name: str) -> ModuleType:
    """
    Import *module_name*, or reload it when it was imported before.
    """
    module = sys.modules.get(module_name)
    if module is not None:
        module = importlib.reload(module)
        logger.debug("Reloaded module '%s'.", module_name)
    else:
        module = importlib.import_module(module_name)
        logger.debug("Imported module '%s'.", module_name)
    return module


class PackagePluginSource:
    """
    Discovers plugins in every submodule of a package (default
    ``wabot_plugins.commands``). Modules whose name starts with ``_`` are skipped.
    """

    def __init__(self, package: str) -> None:
        self.package = package

    def iter_module_names(self, root: ModuleType) -> list[str]:
        path = getattr(root, "__path__", None)
        if path is None:
            raise RegistryUnavailable(f"'{self.package}' is not a package")
        names = [
            info.name
            for info in pkgutil.walk_packages(path, root.__name__ + ".")
            if not info.name.rsplit(".", 1)[-1].startswith("_")
        ]
        return sorted(names)

    def discover(self) -> Discovery:
        try:
            root = importlib.import_module(self.package)
        except Exception as exc:  # noqa: BLE001 - without the package there is no registry
            raise RegistryUnavailable(f"Cannot import plugin package '{self.package}': {exc}") from exc

        importlib.invalidate_caches()
        discovery = Discovery()
        for module_name in self.iter_module_names(root):
            try:
                module = import_module_fresh(module_name)
            except Exception as exc:  # noqa: BLE001 - one broken plugin must not stop the load
                logger.error("Failed to import plugin module '%s'", module_name, exc_info=True)
                discovery.errors.append(f"{module_name}: {exc}")
                continue
            discovery.candidates.extend(collect_specs(module))
        return discovery

    def __repr__(self) -> str:
        return f"<PackagePluginSource {self.package}>"


class StaticPluginSource:
    """Serves a fixed list of candidates; handy for embedding and tests."""

    def __init__(self, candidates: Iterable[Any] = ()) -> None:
        self.candidates = list(candidates)

    def discover(self) -> Discovery:
        found: list[Any] = []
        for candidate in self.candidates:
            found.append(getattr(candidate, SPEC_ATTRIBUTE, candidate))
        return Discovery(candidates=found)


__all__ = [
    "CommandSpec",
    "Discovery",
    "Handler",
    "PackagePluginSource",
    "PluginSource",
    "SPEC_ATTRIBUTE",
    "StaticPluginSource",
    "collect_specs",
    "import_module_fresh",
    "plugin",
]

# End of plugins/manager.py
