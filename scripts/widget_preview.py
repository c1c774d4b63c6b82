#!/usr/bin/env python3
"""
Nova Widget Preview

Render the home-screen note widgets from the shared widget store.

Usage:
    widget_preview.py              Launch interactive preview host
    widget_preview.py --once       Print every widget once and exit (no TUI)
    widget_preview.py --json       Print every widget as JSON and exit

The store defaults to widget-data/HomeWidgetPreferences.json, or the path in
$NOVA_WIDGET_STORE. Files ending in .xml are read as SharedPreferences XML.

Requirements:
    pip install textual
"""

import argparse
import json
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from homewidget.providers import SnapshotStore, WidgetKind, WidgetView  # noqa: E402
from homewidget.renderer import create_renderer  # noqa: E402
from homewidget.store import open_store  # noqa: E402


def collect_views(store: SnapshotStore) -> list[WidgetView]:
    """Place one widget per kind, render it, and tear it down again."""
    views = []
    for widget_id, kind in enumerate(WidgetKind, start=1):
        renderer = create_renderer(kind, store)
        views.extend(renderer.on_update([widget_id]))
        renderer.on_deleted([widget_id])
    return views


def render_text(views: list[WidgetView]) -> str:
    """Plain-text rendering of widget views."""
    lines = []
    for view in views:
        lines.append(f"[{view.title}]")
        if view.kind.is_list:
            if not view.rows:
                lines.append("  (no notes)")
            for row in view.rows:
                lines.append(f"  • {row.title}")
                if row.preview:
                    lines.append(f"    {row.preview}")
                if row.click:
                    lines.append(f"    → {row.click.to_uri()}")
        else:
            lines.append(f"  {view.text}")
            if view.click:
                lines.append(f"  → {view.click.to_uri()}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def print_widgets_once(store: SnapshotStore) -> int:
    """Print every widget and exit."""
    print(render_text(collect_views(store)), end="")
    return 0


def print_widgets_json(store: SnapshotStore) -> int:
    """Print every widget as JSON and exit."""
    output = {"widgets": [view.to_dict() for view in collect_views(store)]}
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Nova Widget Preview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print widgets once and exit (no TUI)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print widgets as JSON and exit",
    )
    parser.add_argument(
        "--store",
        type=Path,
        help="Path to the widget store (default: widget-data/HomeWidgetPreferences.json)",
    )
    parser.add_argument(
        "--no-refresh",
        action="store_true",
        help="Disable the preview host's auto-refresh timer",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    store = open_store(args.store)

    if args.json:
        return print_widgets_json(store)

    if args.once:
        return print_widgets_once(store)

    from homewidget.app import run

    run(store_file=args.store, auto_refresh=not args.no_refresh)
    return 0


if __name__ == "__main__":
    sys.exit(main())
