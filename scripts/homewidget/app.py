"""
Widget preview host.

Plays the home-screen shell: places one widget of each kind, drives the
renderer lifecycle, refreshes on a timer and reports activated deep links.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure scripts directory is in path
SCRIPT_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from textual.app import App  # noqa: E402
from textual.binding import Binding  # noqa: E402

from homewidget.providers import DeepLink, SnapshotStore, WidgetKind, WidgetView  # noqa: E402
from homewidget.renderer import WidgetRenderer, create_renderer  # noqa: E402
from homewidget.store import open_store  # noqa: E402
from homewidget.views.home import HomeScreen  # noqa: E402
from homewidget.views.widgets import DeepLinkActivated  # noqa: E402

logger = logging.getLogger(__name__)

# Auto-refresh interval in seconds
AUTO_REFRESH_INTERVAL = 30.0


def place_widgets(store: SnapshotStore) -> dict[int, WidgetRenderer]:
    """One renderer per kind, keyed by the widget id it was placed with."""
    return {
        widget_id: create_renderer(kind, store)
        for widget_id, kind in enumerate(WidgetKind, start=1)
    }


class HomeWidgetApp(App):
    """Home-screen preview for the note widgets."""

    TITLE = "Nova Widgets"
    SUB_TITLE = "Home Screen Preview"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("a", "toggle_auto_refresh", "Auto-Refresh", show=True),
        Binding("d", "toggle_dark", "Dark/Light", show=True),
    ]

    def __init__(
        self,
        store: SnapshotStore,
        auto_refresh: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._store = store
        self._renderers = place_widgets(store)
        self._views: list[WidgetView] = []
        self._auto_refresh = auto_refresh
        self._refresh_timer = None
        self.last_link: DeepLink | None = None

    def on_mount(self) -> None:
        """Initial render for every placed widget."""
        self._views = [
            view
            for widget_id, renderer in self._renderers.items()
            for view in renderer.on_update([widget_id])
        ]
        self.push_screen(HomeScreen(self._views))

        if self._auto_refresh:
            self._start_auto_refresh()

    def _start_auto_refresh(self) -> None:
        self._refresh_timer = self.set_interval(
            AUTO_REFRESH_INTERVAL,
            self.refresh_widgets,
        )

    def _stop_auto_refresh(self) -> None:
        if self._refresh_timer:
            self._refresh_timer.stop()
            self._refresh_timer = None

    def refresh_widgets(self) -> None:
        """Invalidate every widget and repaint the home screen."""
        views = []
        for widget_id, renderer in self._renderers.items():
            renderer.on_data_changed(widget_id)
            views.append(renderer.render(widget_id))
        self._views = views
        self._show_home()

    def _show_home(self) -> None:
        last_uri = self.last_link.to_uri() if self.last_link else None
        if isinstance(self.screen, HomeScreen):
            self.pop_screen()
        self.push_screen(HomeScreen(self._views, last_link=last_uri))

    def teardown_widgets(self) -> None:
        """Remove every placed widget, detaching list adapters."""
        for widget_id, renderer in self._renderers.items():
            renderer.on_deleted([widget_id])

    def on_deep_link_activated(self, message: DeepLinkActivated) -> None:
        self.last_link = message.link
        logger.info("Deep link activated: %s", message.link.to_uri())
        self.notify(f"Open {message.link.to_uri()}")

    def action_toggle_dark(self) -> None:
        """Toggle dark mode."""
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    def action_toggle_auto_refresh(self) -> None:
        """Toggle auto-refresh on/off."""
        self._auto_refresh = not self._auto_refresh
        if self._auto_refresh:
            self._start_auto_refresh()
            self.notify("Auto-refresh enabled")
        else:
            self._stop_auto_refresh()
            self.notify("Auto-refresh disabled")

    def action_refresh(self) -> None:
        self.refresh_widgets()


def run(store_file: Path | None = None, auto_refresh: bool = True) -> None:
    """Run the preview host."""
    app = HomeWidgetApp(store=open_store(store_file), auto_refresh=auto_refresh)
    try:
        app.run()
    finally:
        app.teardown_widgets()


if __name__ == "__main__":
    run()
