"""
Nova home-screen widgets - data projection for note widgets.

Architecture:
- providers.py: data model and protocols (snapshot store, list adapter)
- store.py: read-only snapshot store readers (memory, JSON, SharedPreferences XML)
- decoder.py: all-or-nothing decoding of stored note lists
- adapter.py: host-driven list projection over one store key
- router.py: deep-link payloads for rows and widgets
- renderer.py: per-kind renderers wiring adapters, counters and links
- app.py, views/: Textual preview host standing in for the home screen

Extensibility points:
1. New widget kinds: add a WidgetKind member and its store key, layout and title
2. New snapshot sources: implement the SnapshotStore protocol
"""
