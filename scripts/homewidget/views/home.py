"""Home screen laying out one widget of each kind."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label

from homewidget.providers import WidgetView
from homewidget.views.widgets import NoteListWidget, QuickNoteWidget


class HomeScreen(Screen):
    """Grid of rendered widgets."""

    DEFAULT_CSS = """
    HomeScreen #widgets {
        height: 1fr;
        padding: 1;
    }

    HomeScreen #side-column {
        width: 1fr;
        padding: 0 1;
    }

    HomeScreen NoteListWidget {
        width: 2fr;
        margin: 0 1;
    }

    HomeScreen .last-link {
        color: $text-muted;
        margin-top: 1;
    }

    .no-widgets {
        text-align: center;
        margin: 2;
        color: $warning;
    }
    """

    def __init__(
        self,
        views: list[WidgetView],
        last_link: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._views = views
        self._last_link = last_link

    def compose(self) -> ComposeResult:
        yield Header()

        if not self._views:
            yield Label("No widgets placed.", classes="no-widgets")
            yield Footer()
            return

        list_views = [v for v in self._views if v.kind.is_list]
        counters = [v for v in self._views if not v.kind.is_list]

        with Horizontal(id="widgets"):
            for view in list_views:
                yield NoteListWidget(view, id=f"widget-{view.widget_id}")
            with Vertical(id="side-column"):
                for view in counters:
                    yield QuickNoteWidget(view, id=f"widget-{view.widget_id}")
                if self._last_link:
                    yield Label(f"Last opened: {self._last_link}", classes="last-link")

        yield Footer()
