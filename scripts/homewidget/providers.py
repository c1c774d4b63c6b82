"""
Data model and provider protocols for the home-screen widgets.

Protocols define the interface; implementations can be swapped
for testing or alternative snapshot sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol
from urllib.parse import quote

APP_SCHEME = "nova"

UNTITLED = "Untitled"


@dataclass(frozen=True)
class NoteSummary:
    """Immutable summary of a single note as shown in a widget row."""

    id: str
    title: str = UNTITLED
    preview: str = ""

    @classmethod
    def blank(cls) -> NoteSummary:
        """Neutral fallback returned for positions the adapter does not hold."""
        return cls(id="", title="", preview="")

    @property
    def is_blank(self) -> bool:
        return not self.id


class WidgetKind(Enum):
    """Widget variant. Fixed for the lifetime of a widget instance."""

    RECENT_LIST = "recent"
    PINNED_LIST = "pinned"
    QUICK_COUNTER = "quick"

    @property
    def store_key(self) -> str:
        return _STORE_KEYS[self]

    @property
    def layout(self) -> str:
        return _LAYOUTS[self]

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def is_list(self) -> bool:
        return self is not WidgetKind.QUICK_COUNTER

    @classmethod
    def from_launch_config(cls, config: Mapping[str, Any] | None) -> WidgetKind:
        """Derive the kind from the launch configuration passed by the host.

        Unknown or missing ``widget_type`` values fall back to the recent list.
        """
        widget_type = (config or {}).get("widget_type") or "recent"
        if widget_type == "pinned":
            return cls.PINNED_LIST
        if widget_type in ("quick", "counter"):
            return cls.QUICK_COUNTER
        return cls.RECENT_LIST


_STORE_KEYS = {
    WidgetKind.RECENT_LIST: "recent_notes",
    WidgetKind.PINNED_LIST: "pinned_notes",
    WidgetKind.QUICK_COUNTER: "note_count",
}

_LAYOUTS = {
    WidgetKind.RECENT_LIST: "recent_notes_widget",
    WidgetKind.PINNED_LIST: "pinned_notes_widget",
    WidgetKind.QUICK_COUNTER: "quick_note_widget",
}

_TITLES = {
    WidgetKind.RECENT_LIST: "Recent Notes",
    WidgetKind.PINNED_LIST: "Pinned Notes",
    WidgetKind.QUICK_COUNTER: "Quick Note",
}


class DeepLinkAction(Enum):
    OPEN_NOTE = "open_note"
    OPEN_APP = "open_app"


@dataclass(frozen=True)
class DeepLink:
    """Navigation payload handed back to the host when a unit is activated."""

    action: DeepLinkAction
    note_id: str | None = None

    def extras(self) -> dict[str, str]:
        """Fill-in extras attached to the host's launch intent."""
        if self.action is DeepLinkAction.OPEN_NOTE and self.note_id:
            return {"note_id": self.note_id}
        return {}

    def to_uri(self) -> str:
        if self.action is DeepLinkAction.OPEN_NOTE and self.note_id:
            # Ids from a store written outside this process may hold lone surrogates
            note_path = quote(self.note_id, safe="", errors="surrogatepass")
            return f"{APP_SCHEME}://note/{note_path}"
        return f"{APP_SCHEME}://open"


@dataclass(frozen=True)
class RowView:
    """One rendered list row."""

    title: str
    preview: str
    click: DeepLink | None = None

    @classmethod
    def empty(cls) -> RowView:
        return cls(title="", preview="", click=None)


@dataclass(frozen=True)
class WidgetView:
    """Rendered state of one widget instance.

    List widgets carry ``rows``; the counter carries ``text``. ``click`` is
    the whole-widget payload, used as the row click template for lists.
    """

    widget_id: int
    kind: WidgetKind
    layout: str
    title: str
    rows: tuple[RowView, ...] = ()
    text: str | None = None
    click: DeepLink | None = None

    def to_dict(self) -> dict:
        return {
            "widget_id": self.widget_id,
            "kind": self.kind.value,
            "layout": self.layout,
            "title": self.title,
            "rows": [
                {
                    "title": row.title,
                    "preview": row.preview,
                    "link": row.click.to_uri() if row.click else None,
                }
                for row in self.rows
            ],
            "text": self.text,
            "link": self.click.to_uri() if self.click else None,
        }


class SnapshotStore(Protocol):
    """Protocol for reading the shared widget snapshot."""

    def read_string(self, key: str, default: str = "[]") -> str:
        """Return the string stored under ``key``, or ``default``."""
        ...

    def read_int(self, key: str, default: int = 0) -> int:
        """Return the integer stored under ``key``, or ``default``."""
        ...


class ListAdapter(Protocol):
    """Pull-based list contract the host renders from."""

    def attach(self) -> None:
        ...

    def on_invalidate(self) -> None:
        ...

    def detach(self) -> None:
        ...

    def count(self) -> int:
        ...

    def item_at(self, position: int) -> NoteSummary:
        ...

    def stable_id(self, position: int) -> int:
        ...

    def view_type_count(self) -> int:
        ...

    def has_stable_ids(self) -> bool:
        ...

    def loading_view(self) -> RowView | None:
        ...
