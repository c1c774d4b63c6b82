"""Textual widgets that paint rendered widget views."""

from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Button, Label, ListItem, ListView, Static

from homewidget.providers import DeepLink, RowView, WidgetView


class DeepLinkActivated(Message):
    """A row or widget was activated."""

    def __init__(self, link: DeepLink) -> None:
        super().__init__()
        self.link = link


class NoteRowItem(ListItem):
    """Single note row: title over preview."""

    DEFAULT_CSS = """
    NoteRowItem {
        height: auto;
        padding: 0 1;
    }

    NoteRowItem .note-title {
        text-style: bold;
    }

    NoteRowItem .note-preview {
        color: $text-muted;
    }
    """

    def __init__(self, row: RowView, **kwargs) -> None:
        super().__init__(**kwargs)
        self.note_row = row

    def compose(self) -> ComposeResult:
        yield Label(self.note_row.title, classes="note-title")
        if self.note_row.preview:
            yield Label(self.note_row.preview, classes="note-preview")


class NoteListWidget(Static):
    """Recent or pinned notes list."""

    DEFAULT_CSS = """
    NoteListWidget {
        height: 100%;
        border: solid $primary;
        padding: 1;
    }

    NoteListWidget .title {
        text-style: bold;
        margin-bottom: 1;
    }

    NoteListWidget .empty {
        color: $text-muted;
    }

    NoteListWidget ListView {
        height: 1fr;
    }
    """

    def __init__(self, view: WidgetView, **kwargs) -> None:
        super().__init__(**kwargs)
        self._view = view

    def compose(self) -> ComposeResult:
        yield Label(self._view.title, classes="title")

        if not self._view.rows:
            yield Label("No notes yet", classes="empty")
            return

        yield ListView(*(NoteRowItem(row) for row in self._view.rows))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        item = event.item
        if not isinstance(item, NoteRowItem):
            return
        # Rows without their own payload fall back to the widget's template
        link = item.note_row.click or self._view.click
        if link is not None:
            self.post_message(DeepLinkActivated(link))


class QuickNoteWidget(Static):
    """Note counter; pressing it opens the app."""

    DEFAULT_CSS = """
    QuickNoteWidget {
        height: auto;
        border: solid $accent;
        padding: 1;
    }

    QuickNoteWidget .title {
        text-style: bold;
        margin-bottom: 1;
    }

    QuickNoteWidget Button {
        width: 100%;
    }
    """

    def __init__(self, view: WidgetView, **kwargs) -> None:
        super().__init__(**kwargs)
        self._view = view

    def compose(self) -> ComposeResult:
        yield Label(self._view.title, classes="title")
        yield Button(self._view.text or "0 notes", id="note-count")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if self._view.click is not None:
            self.post_message(DeepLinkActivated(self._view.click))
