"""Build the deep-link payloads attached to rendered rows and widgets."""

from homewidget.providers import DeepLink, DeepLinkAction


def route_for_row(note_id: str) -> DeepLink:
    """Open the app at a specific note."""
    if not note_id:
        raise ValueError("note_id must be non-empty")
    return DeepLink(action=DeepLinkAction.OPEN_NOTE, note_id=note_id)


def route_default() -> DeepLink:
    """Open the app without a target note."""
    return DeepLink(action=DeepLinkAction.OPEN_APP)
