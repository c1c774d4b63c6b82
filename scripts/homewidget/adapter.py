"""
List projection adapter.

The host drives every transition: ``attach`` when it starts rendering a list,
``on_invalidate`` whenever it wants fresh data, ``detach`` on teardown. Rows are
pulled one position at a time after the host has read ``count()``.
"""

from __future__ import annotations

import logging
from enum import Enum

from homewidget.decoder import decode_notes
from homewidget.providers import NoteSummary, RowView, SnapshotStore

logger = logging.getLogger(__name__)


class AdapterState(Enum):
    UNINITIALIZED = "uninitialized"
    ATTACHED = "attached"
    REFRESHING = "refreshing"
    DETACHED = "detached"


class NoteListAdapter:
    """In-memory view over the note list stored under one key."""

    def __init__(self, store: SnapshotStore, source_key: str):
        self._store = store
        self._source_key = source_key
        self._items: tuple[NoteSummary, ...] = ()
        self._state = AdapterState.UNINITIALIZED

    @property
    def source_key(self) -> str:
        return self._source_key

    @property
    def state(self) -> AdapterState:
        return self._state

    @property
    def is_attached(self) -> bool:
        return self._state in (AdapterState.ATTACHED, AdapterState.REFRESHING)

    @property
    def items(self) -> tuple[NoteSummary, ...]:
        return self._items

    def attach(self) -> None:
        """Begin projecting. Re-synchronizes if already attached."""
        if self.is_attached:
            self.on_invalidate()
            return
        logger.debug("Attaching adapter for %r", self._source_key)
        self._state = AdapterState.ATTACHED
        self._load()

    def on_invalidate(self) -> None:
        """Re-read the store and replace the held list in one assignment."""
        if not self.is_attached:
            logger.debug(
                "Ignoring invalidate for %r in state %s",
                self._source_key,
                self._state.value,
            )
            return
        self._state = AdapterState.REFRESHING
        try:
            self._load()
        finally:
            self._state = AdapterState.ATTACHED

    def detach(self) -> None:
        logger.debug("Detaching adapter for %r", self._source_key)
        self._state = AdapterState.DETACHED
        self._items = ()

    def _load(self) -> None:
        raw = self._store.read_string(self._source_key, "[]")
        items = decode_notes(raw)
        self._items = items
        logger.debug("Loaded %d notes from %r", len(items), self._source_key)

    def count(self) -> int:
        if not self.is_attached:
            return 0
        return len(self._items)

    def item_at(self, position: int) -> NoteSummary:
        """Item at ``position``; the blank note when the position is not held."""
        items = self._items if self.is_attached else ()
        if 0 <= position < len(items):
            return items[position]
        logger.debug(
            "Position %d outside [0, %d) for %r", position, len(items), self._source_key
        )
        return NoteSummary.blank()

    def stable_id(self, position: int) -> int:
        # Position is the identity; it does not survive reordering between refreshes.
        return position

    def view_type_count(self) -> int:
        return 1

    def has_stable_ids(self) -> bool:
        return True

    def loading_view(self) -> RowView | None:
        return None
