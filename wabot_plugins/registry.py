"""
plugins/registry.py
-------------------
The live alias -> CommandSpec mapping.

``load()``/``reload()`` rebuild the whole mapping from the PluginSource off to
the side and publish it with one reference assignment, so a concurrent
``resolve()`` sees either the complete old table or the complete new one.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any

from wabot_core.exceptions import PluginLoadError
from wabot_core.parsers.message_parser import normalize_alias
from wabot_core.permissions import Gate
from wabot_plugins.manager import CommandSpec, PluginSource

logger = logging.getLogger(__name__)

ALIAS_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


@dataclass(frozen=True)
class LoadMetadata:
    """Outcome of the most recent (re)load."""

    count: int
    loaded_at: datetime
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class _Snapshot:
    mapping: Mapping[str, CommandSpec]
    specs: tuple[CommandSpec, ...]
    metadata: LoadMetadata | None


def validate_spec(candidate: Any) -> CommandSpec:
    """
    Check that *candidate* is a usable CommandSpec; raise PluginLoadError if not.
    """
    if not isinstance(candidate, CommandSpec):
        raise PluginLoadError(f"invalid plugin descriptor: {type(candidate).__name__}")
    where = f"{candidate.module or '<static>'}:{candidate.name}"
    if not candidate.aliases:
        raise PluginLoadError(f"{where}: no command aliases")
    for alias in candidate.aliases:
        if not isinstance(alias, str) or not ALIAS_RE.match(alias):
            raise PluginLoadError(f"{where}: invalid alias {alias!r}")
    if not callable(candidate.handler):
        raise PluginLoadError(f"{where}: handler is not callable")
    unknown = [gate for gate in candidate.gates if not isinstance(gate, Gate)]
    if unknown:
        raise PluginLoadError(f"{where}: unknown gate(s) {sorted(map(str, unknown))}")
    return candidate


class PluginRegistry:
    """
    PluginRegistry - owns the command table.

    Example:
        registry = PluginRegistry(PackagePluginSource("wabot_plugins.commands"))
        meta = registry.load()
        spec = registry.resolve("delay")
    """

    def __init__(
        self,
        source: PluginSource,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.source = source
        self._clock = clock
        self._snapshot = _Snapshot(MappingProxyType({}), (), None)
        self._rebuild_lock = threading.Lock()

    def load(self) -> LoadMetadata:
        """
        Build the command table from the source and publish it.

        Per-plugin problems are collected into ``LoadMetadata.errors``. Only a
        source that cannot be read at all (RegistryUnavailable) propagates, in
        which case the previous table stays live.
        """
        with self._rebuild_lock:
            discovery = self.source.discover()
            errors = list(discovery.errors)
            mapping: dict[str, CommandSpec] = {}
            accepted: list[CommandSpec] = []

            for candidate in discovery.candidates:
                try:
                    spec = validate_spec(candidate)
                except PluginLoadError as exc:
                    logger.warning("Skipping plugin: %s", exc)
                    errors.append(str(exc))
                    continue
                accepted.append(spec)
                for alias in spec.aliases:
                    previous = mapping.get(alias)
                    if previous is not None and previous is not spec:
                        message = f"alias '{alias}': {spec.name} replaces {previous.name}"
                        logger.warning("Duplicate command %s", message)
                        errors.append(message)
                    mapping[alias] = spec

            specs = tuple(
                spec for spec in accepted if any(mapping.get(alias) is spec for alias in spec.aliases)
            )
            metadata = LoadMetadata(
                count=len(specs),
                loaded_at=self._next_timestamp(),
                errors=tuple(errors),
            )
            self._snapshot = _Snapshot(MappingProxyType(mapping), specs, metadata)

        logger.info(
            "Loaded %d command(s) with %d alias(es) from %r (%d error(s))",
            metadata.count,
            len(mapping),
            self.source,
            len(metadata.errors),
        )
        return metadata

    def reload(self) -> LoadMetadata:
        logger.info("Reloading plugins from %r", self.source)
        return self.load()

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        previous = self._snapshot.metadata
        if previous is not None and now <= previous.loaded_at:
            now = previous.loaded_at + timedelta(microseconds=1)
        return now

    def resolve(self, token: str) -> CommandSpec | None:
        return self._snapshot.mapping.get(normalize_alias(token))

    def commands(self) -> tuple[CommandSpec, ...]:
        """Every reachable command, in load order."""
        return self._snapshot.specs

    def aliases(self) -> Mapping[str, CommandSpec]:
        return self._snapshot.mapping

    @property
    def metadata(self) -> LoadMetadata | None:
        return self._snapshot.metadata

    @property
    def loaded(self) -> bool:
        return self._snapshot.metadata is not None


__all__ = ["ALIAS_RE", "LoadMetadata", "PluginRegistry", "validate_spec"]

# End of plugins/registry.py
