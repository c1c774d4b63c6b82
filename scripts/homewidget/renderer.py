"""
Widget renderers, one per widget kind.

The host calls ``on_update`` with the set of instance ids it is placing,
``on_data_changed`` when it wants a widget re-synchronized, and
``on_deleted`` when instances are removed. List renderers keep one adapter
per instance; the counter keeps nothing but the last rendered view.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping

from homewidget.adapter import NoteListAdapter
from homewidget.providers import RowView, SnapshotStore, WidgetKind, WidgetView
from homewidget.router import route_default, route_for_row

logger = logging.getLogger(__name__)


class WidgetRenderer(ABC):
    """Lifecycle shared by every widget kind."""

    def __init__(self, kind: WidgetKind, store: SnapshotStore):
        self._kind = kind
        self._store = store

    @property
    def kind(self) -> WidgetKind:
        return self._kind

    def on_update(self, widget_ids: Iterable[int]) -> list[WidgetView]:
        return [self._update_one(widget_id) for widget_id in widget_ids]

    @abstractmethod
    def _update_one(self, widget_id: int) -> WidgetView:
        ...

    @abstractmethod
    def on_data_changed(self, widget_id: int) -> None:
        ...

    @abstractmethod
    def on_deleted(self, widget_ids: Iterable[int]) -> None:
        ...

    @abstractmethod
    def render(self, widget_id: int) -> WidgetView:
        """Current view of an instance without re-reading the store."""
        ...


class ListWidgetRenderer(WidgetRenderer):
    """Recent and pinned note lists."""

    def __init__(self, kind: WidgetKind, store: SnapshotStore):
        if not kind.is_list:
            raise ValueError(f"{kind.name} is not a list widget")
        super().__init__(kind, store)
        self._adapters: dict[int, NoteListAdapter] = {}

    @property
    def widget_ids(self) -> list[int]:
        return list(self._adapters)

    def adapter_for(self, widget_id: int) -> NoteListAdapter | None:
        return self._adapters.get(widget_id)

    def _update_one(self, widget_id: int) -> WidgetView:
        adapter = self._adapters.get(widget_id)
        if adapter is None:
            adapter = NoteListAdapter(self._store, self._kind.store_key)
            self._adapters[widget_id] = adapter
        # attach() re-synchronizes an adapter that is already attached
        adapter.attach()
        return self.render(widget_id)

    def on_data_changed(self, widget_id: int) -> None:
        adapter = self._adapters.get(widget_id)
        if adapter is None:
            logger.debug("Data change for unknown %s widget %d", self._kind.name, widget_id)
            return
        adapter.on_invalidate()

    def on_deleted(self, widget_ids: Iterable[int]) -> None:
        for widget_id in widget_ids:
            adapter = self._adapters.pop(widget_id, None)
            if adapter is not None:
                adapter.detach()

    def render_row(self, widget_id: int, position: int) -> RowView:
        """Row for one position; the empty row when nothing is held there."""
        adapter = self._adapters.get(widget_id)
        if adapter is None:
            return RowView.empty()

        note = adapter.item_at(position)
        if note.is_blank:
            return RowView.empty()
        return RowView(
            title=note.title,
            preview=note.preview,
            click=route_for_row(note.id),
        )

    def render(self, widget_id: int) -> WidgetView:
        adapter = self._adapters.get(widget_id)
        count = adapter.count() if adapter is not None else 0
        return WidgetView(
            widget_id=widget_id,
            kind=self._kind,
            layout=self._kind.layout,
            title=self._kind.title,
            rows=tuple(self.render_row(widget_id, p) for p in range(count)),
            click=route_default(),
        )


class QuickCounterRenderer(WidgetRenderer):
    """Single-line note counter that opens the app."""

    def __init__(self, store: SnapshotStore):
        super().__init__(WidgetKind.QUICK_COUNTER, store)
        self._counts: dict[int, int] = {}

    @property
    def widget_ids(self) -> list[int]:
        return list(self._counts)

    def _read_count(self) -> int:
        return self._store.read_int(self._kind.store_key, 0)

    def _update_one(self, widget_id: int) -> WidgetView:
        self._counts[widget_id] = self._read_count()
        return self.render(widget_id)

    def on_data_changed(self, widget_id: int) -> None:
        if widget_id in self._counts:
            self._counts[widget_id] = self._read_count()

    def on_deleted(self, widget_ids: Iterable[int]) -> None:
        for widget_id in widget_ids:
            self._counts.pop(widget_id, None)

    def render(self, widget_id: int) -> WidgetView:
        count = self._counts.get(widget_id, 0)
        return WidgetView(
            widget_id=widget_id,
            kind=self._kind,
            layout=self._kind.layout,
            title=self._kind.title,
            text=f"{count} notes",
            click=route_default(),
        )


def create_renderer(kind: WidgetKind, store: SnapshotStore) -> WidgetRenderer:
    """Build the renderer for a widget kind."""
    if not isinstance(kind, WidgetKind):
        raise ValueError(f"Unknown widget kind: {kind!r}")
    if kind.is_list:
        return ListWidgetRenderer(kind, store)
    return QuickCounterRenderer(store)


def renderer_for_launch_config(
    config: Mapping[str, Any] | None, store: SnapshotStore
) -> WidgetRenderer:
    return create_renderer(WidgetKind.from_launch_config(config), store)
