"""Decode the JSON note lists written by the main application."""

from __future__ import annotations

import json
import logging
from typing import Any

from homewidget.providers import UNTITLED, NoteSummary

logger = logging.getLogger(__name__)


class NoteDecodeError(ValueError):
    """An element of the note array is not a valid note summary."""


def _note_id(value: Any) -> str:
    if isinstance(value, bool):
        raise NoteDecodeError(f"id must be a string, got {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise NoteDecodeError(f"id is not valid UTF-8 text: {value!r}") from None
        return value
    raise NoteDecodeError(f"id must be a non-empty string, got {value!r}")


def _note_from_dict(data: Any) -> NoteSummary:
    """Convert one array element to a NoteSummary, raising on a bad element."""
    if not isinstance(data, dict):
        raise NoteDecodeError(f"expected an object, got {type(data).__name__}")
    if "id" not in data:
        raise NoteDecodeError("missing id")

    title = data.get("title")
    preview = data.get("preview")
    return NoteSummary(
        id=_note_id(data["id"]),
        title=title if isinstance(title, str) and title else UNTITLED,
        preview=preview if isinstance(preview, str) else "",
    )


def decode_notes(raw: str) -> tuple[NoteSummary, ...]:
    """Parse a JSON array of notes, all or nothing.

    Array order is presentation order and is preserved. Invalid JSON, a
    non-array top level, or any element without a usable ``id`` discards the
    whole batch and returns an empty tuple.
    """
    if not raw or not raw.strip():
        return ()

    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        # ValueError covers JSONDecodeError and oversized integer literals
        logger.warning("Discarding note list: invalid JSON (%s)", e)
        return ()

    if not isinstance(data, list):
        logger.warning(
            "Discarding note list: expected an array, got %s", type(data).__name__
        )
        return ()

    try:
        return tuple(_note_from_dict(item) for item in data)
    except NoteDecodeError as e:
        logger.warning("Discarding note list of %d entries: %s", len(data), e)
        return ()
