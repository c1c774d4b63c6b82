"""
Snapshot store readers.

The main application owns the store and writes it; everything here is
read-only. A missing key, an unreadable file, or a value of the wrong type
all read as the caller's default.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_STORE_FILE = PROJECT_ROOT / "widget-data" / "HomeWidgetPreferences.json"
STORE_ENV_VAR = "NOVA_WIDGET_STORE"

_MISSING = object()


def _as_string(value: Any, default: str) -> str:
    if isinstance(value, str):
        return value
    return default


def _as_int(value: Any, default: int) -> int:
    # bool is an int subclass; a stored flag is not a count
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


class _MappingStore(ABC):
    """Shared read logic over a ``dict`` snapshot returned by ``_snapshot``."""

    @abstractmethod
    def _snapshot(self) -> dict[str, Any]:
        ...

    def _lookup(self, key: str) -> Any:
        value = self._snapshot().get(key, _MISSING)
        if value is _MISSING:
            logger.debug("Store key %r absent", key)
        return value

    def read_string(self, key: str, default: str = "[]") -> str:
        """Return the string stored under ``key``, or ``default``."""
        return _as_string(self._lookup(key), default)

    def read_int(self, key: str, default: int = 0) -> int:
        """Return the integer stored under ``key``, or ``default``."""
        return _as_int(self._lookup(key), default)


class MemorySnapshotStore(_MappingStore):
    """In-memory store. ``put``/``remove`` stand in for the external writer."""

    def __init__(self, values: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(values or {})

    def _snapshot(self) -> dict[str, Any]:
        return self._values

    def put(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileSnapshotStore(_MappingStore):
    """Store backed by a JSON object file, re-read on every access."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _snapshot(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (ValueError, OSError, RecursionError) as e:
            logger.warning("Could not read widget store %s: %s", self._path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning(
                "Widget store %s is not a JSON object (got %s)",
                self._path,
                type(data).__name__,
            )
            return {}
        return data


class PreferencesXmlSnapshotStore(_MappingStore):
    """Store backed by an Android SharedPreferences XML file.

    Only ``<string>``, ``<int>`` and ``<long>`` entries are read; anything else
    the writer keeps in the same file is ignored.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _snapshot(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}

        try:
            root = ET.parse(self._path).getroot()
        except (ET.ParseError, OSError) as e:
            logger.warning("Could not read widget store %s: %s", self._path, e)
            return {}

        values: dict[str, Any] = {}
        for entry in root:
            name = entry.get("name")
            if name is None:
                continue
            if entry.tag == "string":
                values[name] = entry.text or ""
            elif entry.tag in ("int", "long"):
                try:
                    values[name] = int(entry.get("value", ""))
                except ValueError:
                    logger.debug("Ignoring non-integer %s entry %r", entry.tag, name)
        return values


def default_store_path() -> Path:
    """Store location from ``NOVA_WIDGET_STORE``, else the project default."""
    override = os.environ.get(STORE_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_STORE_FILE


def open_store(path: Path | None = None) -> JsonFileSnapshotStore | PreferencesXmlSnapshotStore:
    """Open a file-backed store, choosing the reader by file suffix."""
    if path is None:
        path = default_store_path()
    path = Path(path)
    if path.suffix.lower() == ".xml":
        return PreferencesXmlSnapshotStore(path)
    return JsonFileSnapshotStore(path)
