"""Tests for homewidget.renderer and homewidget.router."""

import json
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from homewidget.providers import DeepLink, DeepLinkAction, RowView, WidgetKind
from homewidget.renderer import (
    ListWidgetRenderer,
    QuickCounterRenderer,
    WidgetRenderer,
    create_renderer,
    renderer_for_launch_config,
)
from homewidget.router import route_default, route_for_row
from homewidget.store import MemorySnapshotStore


@pytest.fixture
def store() -> MemorySnapshotStore:
    return MemorySnapshotStore(
        {
            "recent_notes": json.dumps(
                [
                    {"id": "r1", "title": "Shopping", "preview": "bread"},
                    {"id": "r2"},
                ]
            ),
            "pinned_notes": json.dumps([{"id": "p1", "title": "Pinned"}]),
            "note_count": 7,
        }
    )


class TestRouter:
    """Tests for deep-link routing."""

    def test_route_for_row(self) -> None:
        link = route_for_row("abc")

        assert link == DeepLink(DeepLinkAction.OPEN_NOTE, "abc")
        assert link.extras() == {"note_id": "abc"}
        assert link.to_uri() == "nova://note/abc"

    def test_route_for_row_quotes_id(self) -> None:
        assert route_for_row("a b/c").to_uri() == "nova://note/a%20b%2Fc"

    def test_route_for_row_rejects_empty_id(self) -> None:
        with pytest.raises(ValueError):
            route_for_row("")

    def test_uri_for_lone_surrogate_id(self) -> None:
        link = DeepLink(DeepLinkAction.OPEN_NOTE, "a\ud800")

        assert link.to_uri() == "nova://note/a%ED%A0%80"

    def test_route_default(self) -> None:
        link = route_default()

        assert link.action is DeepLinkAction.OPEN_APP
        assert link.note_id is None
        assert link.extras() == {}
        assert link.to_uri() == "nova://open"


class TestWidgetKind:
    """Tests for WidgetKind configuration."""

    def test_store_keys(self) -> None:
        assert WidgetKind.RECENT_LIST.store_key == "recent_notes"
        assert WidgetKind.PINNED_LIST.store_key == "pinned_notes"
        assert WidgetKind.QUICK_COUNTER.store_key == "note_count"

    @pytest.mark.parametrize(
        "config,expected",
        [
            ({"widget_type": "pinned"}, WidgetKind.PINNED_LIST),
            ({"widget_type": "recent"}, WidgetKind.RECENT_LIST),
            ({"widget_type": "quick"}, WidgetKind.QUICK_COUNTER),
            ({"widget_type": "counter"}, WidgetKind.QUICK_COUNTER),
            ({"widget_type": "something"}, WidgetKind.RECENT_LIST),
            ({}, WidgetKind.RECENT_LIST),
            (None, WidgetKind.RECENT_LIST),
        ],
    )
    def test_from_launch_config(self, config, expected: WidgetKind) -> None:
        assert WidgetKind.from_launch_config(config) is expected


class TestListWidgetRenderer:
    """Tests for the recent and pinned list renderers."""

    def test_on_update_renders_rows_with_links(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)

        [view] = renderer.on_update([10])

        assert view.widget_id == 10
        assert view.layout == "recent_notes_widget"
        assert view.rows == (
            RowView("Shopping", "bread", route_for_row("r1")),
            RowView("Untitled", "", route_for_row("r2")),
        )
        assert view.click == route_default()

    def test_pinned_reads_pinned_key(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.PINNED_LIST, store)

        [view] = renderer.on_update([1])

        assert [row.title for row in view.rows] == ["Pinned"]
        assert view.rows[0].click.note_id == "p1"

    def test_one_adapter_per_instance(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)

        views = renderer.on_update([1, 2])

        assert [v.widget_id for v in views] == [1, 2]
        assert renderer.adapter_for(1) is not renderer.adapter_for(2)
        assert renderer.widget_ids == [1, 2]

    def test_render_row_out_of_range_is_empty(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)
        renderer.on_update([1])
        adapter = renderer.adapter_for(1)

        row = renderer.render_row(1, adapter.count())

        assert row == RowView.empty()
        assert row.click is None

    def test_render_row_unknown_widget_is_empty(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)

        assert renderer.render_row(99, 0) == RowView.empty()

    def test_on_data_changed_resynchronizes(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)
        renderer.on_update([1])
        store.put("recent_notes", '[{"id":"new","title":"Fresh"}]')

        renderer.on_data_changed(1)
        view = renderer.render(1)

        assert [row.title for row in view.rows] == ["Fresh"]

    def test_on_data_changed_unknown_widget_is_ignored(
        self, store: MemorySnapshotStore
    ) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)

        renderer.on_data_changed(5)

        assert renderer.widget_ids == []

    def test_on_update_again_resynchronizes(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)
        renderer.on_update([1])
        store.put("recent_notes", "[]")

        [view] = renderer.on_update([1])

        assert view.rows == ()

    def test_on_deleted_detaches(self, store: MemorySnapshotStore) -> None:
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)
        renderer.on_update([1, 2])
        adapter = renderer.adapter_for(1)

        renderer.on_deleted([1])

        assert renderer.adapter_for(1) is None
        assert adapter.count() == 0
        assert renderer.widget_ids == [2]
        assert renderer.render(1).rows == ()

    def test_rendering_does_not_mutate_store(self, store: MemorySnapshotStore) -> None:
        before = {key: store.read_string(key) for key in ("recent_notes", "pinned_notes")}
        renderer = ListWidgetRenderer(WidgetKind.RECENT_LIST, store)

        renderer.on_update([1])
        renderer.render_row(1, 0)
        renderer.render_row(1, 50)

        assert {key: store.read_string(key) for key in before} == before

    def test_rejects_counter_kind(self, store: MemorySnapshotStore) -> None:
        with pytest.raises(ValueError):
            ListWidgetRenderer(WidgetKind.QUICK_COUNTER, store)


class TestQuickCounterRenderer:
    """Tests for the quick-note counter."""

    def test_renders_count(self, store: MemorySnapshotStore) -> None:
        [view] = QuickCounterRenderer(store).on_update([3])

        assert view.text == "7 notes"
        assert view.rows == ()
        assert view.layout == "quick_note_widget"
        assert view.click == route_default()

    def test_absent_count_renders_zero(self) -> None:
        [view] = QuickCounterRenderer(MemorySnapshotStore()).on_update([1])

        assert view.text == "0 notes"

    def test_on_data_changed_rereads(self, store: MemorySnapshotStore) -> None:
        renderer = QuickCounterRenderer(store)
        renderer.on_update([1])
        store.put("note_count", 8)

        renderer.on_data_changed(1)

        assert renderer.render(1).text == "8 notes"

    def test_on_deleted_forgets_instance(self, store: MemorySnapshotStore) -> None:
        renderer = QuickCounterRenderer(store)
        renderer.on_update([1])

        renderer.on_deleted([1])

        assert renderer.widget_ids == []


class TestFactory:
    """Tests for create_renderer and renderer_for_launch_config."""

    def test_list_kinds(self, store: MemorySnapshotStore) -> None:
        assert isinstance(create_renderer(WidgetKind.RECENT_LIST, store), ListWidgetRenderer)
        assert isinstance(create_renderer(WidgetKind.PINNED_LIST, store), ListWidgetRenderer)

    def test_counter_kind(self, store: MemorySnapshotStore) -> None:
        assert isinstance(create_renderer(WidgetKind.QUICK_COUNTER, store), QuickCounterRenderer)

    def test_unknown_kind_raises(self, store: MemorySnapshotStore) -> None:
        with pytest.raises(ValueError):
            create_renderer("recent", store)

    def test_base_renderer_is_abstract(self, store: MemorySnapshotStore) -> None:
        with pytest.raises(TypeError):
            WidgetRenderer(WidgetKind.RECENT_LIST, store)

    def test_launch_config(self, store: MemorySnapshotStore) -> None:
        renderer = renderer_for_launch_config({"widget_type": "pinned"}, store)

        assert renderer.kind is WidgetKind.PINNED_LIST
