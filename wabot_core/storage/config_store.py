"""
storage/config_store.py
-----------------------
File-backed JSON documents with ensure-on-first-use defaulting.

Every document is a JSON object stored as ``<root>/<name>.json``. Reads load the
whole file, writes replace the whole file (temp file + ``os.replace``) and both
run in the default thread pool under a per-path lock. A missing, unreadable or
malformed file is replaced with the document's default instead of raising.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import re
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from wabot_core.concurrency import KeyedLock
from wabot_core.utils.async_helpers import run_in_threadpool

logger = logging.getLogger(__name__)

Document = dict[str, Any]

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def atomic_write_json(path: Path, data: Mapping[str, Any]) -> None:
    """Write *data* as JSON to a sibling temp file, then rename it over *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, ensure_ascii=False)
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.{threading.get_ident()}.tmp")
    try:
        tmp_path.write_text(payload + "\n", encoding="utf-8")
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


class ConfigDocument:
    """
    One named JSON document. Obtain instances through :meth:`ConfigStore.document`
    so that every caller touching the same path shares the same lock.
    """

    def __init__(self, path: Path, default: Mapping[str, Any], store: "ConfigStore") -> None:
        self.path = path
        self._default: Document = copy.deepcopy(dict(default))
        self._store = store

    @property
    def default(self) -> Document:
        return copy.deepcopy(self._default)

    async def read(self) -> Document:
        """Return the whole document, healing the file first if needed."""
        async with self._store.locks.hold(self.path):
            return await run_in_threadpool(self._read_or_heal)

    async def write(self, document: Mapping[str, Any]) -> None:
        """Replace the whole document."""
        data = _as_document(document)
        async with self._store.locks.hold(self.path):
            await run_in_threadpool(atomic_write_json, self.path, data)

    async def update(self, mutate: Callable[[Document], Document | None]) -> Document:
        """
        Read-modify-write under the path lock.

        *mutate* receives the current document and either edits it in place
        (returning None) or returns a replacement. Returns what was written.
        """
        async with self._store.locks.hold(self.path):
            current = await run_in_threadpool(self._read_or_heal)
            result = mutate(current)
            data = _as_document(current if result is None else result)
            await run_in_threadpool(atomic_write_json, self.path, data)
            return data

    # ------------------------------------------------------------------ #
    # blocking helpers (thread pool only)                                 #
    # ------------------------------------------------------------------ #
    def _read_or_heal(self) -> Document:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Config %s missing; writing default", self.path.name)
            return self._heal()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Config %s unreadable (%s); restoring default", self.path, exc)
            return self._heal()

        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Config %s is not valid JSON (%s); restoring default", self.path, exc)
            return self._heal()

        if not isinstance(data, dict):
            logger.warning(
                "Config %s holds %s, expected an object; restoring default",
                self.path,
                type(data).__name__,
            )
            return self._heal()
        return data

    def _heal(self) -> Document:
        default = self.default
        try:
            atomic_write_json(self.path, default)
        except OSError:
            logger.exception("Could not write default config to %s", self.path)
        return default

    def __repr__(self) -> str:
        return f"<ConfigDocument {self.path}>"


class ConfigStore:
    """
    ConfigStore - the single persistence capability handed to command handlers.

    Document names are plain tokens; the store never touches files outside its
    root directory.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)
        self.locks = KeyedLock()
        self._documents: dict[Path, ConfigDocument] = {}
        self._guard = threading.Lock()

    def path_for(self, name: str) -> Path:
        stem = name[:-5] if name.endswith(".json") else name
        if not stem or not _NAME_RE.match(stem) or ".." in stem or stem.startswith("."):
            raise ValueError(f"Invalid config document name: {name!r}")
        return self.root / f"{stem}.json"

    def document(self, name: str, default: Mapping[str, Any] | None = None) -> ConfigDocument:
        """Return the one ConfigDocument for *name*, creating it on first use."""
        path = self.path_for(name)
        with self._guard:
            doc = self._documents.get(path)
            if doc is None:
                doc = ConfigDocument(path, default or {}, self)
                self._documents[path] = doc
            elif default is not None and not doc._default:
                doc._default = copy.deepcopy(dict(default))
            elif default is not None and dict(default) != doc._default:
                logger.debug("Config %s already registered with a different default", name)
        return doc

    async def get(self, name: str, default: Mapping[str, Any]) -> Document:
        return await self.document(name, default).read()

    async def set(self, name: str, document: Mapping[str, Any]) -> None:
        await self.document(name).write(document)

    def __repr__(self) -> str:
        return f"<ConfigStore {self.root} [{len(self._documents)} documents]>"


def _as_document(document: Mapping[str, Any]) -> Document:
    if not isinstance(document, Mapping):
        raise TypeError(f"Config documents must be mappings, got {type(document).__name__}")
    return copy.deepcopy(dict(document))


__all__ = ["ConfigDocument", "ConfigStore", "Document", "atomic_write_json"]
