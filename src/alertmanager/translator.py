"""Alert event → AlertManager wire format translation."""

from __future__ import annotations

import json
from collections.abc import Sequence

from src.alertmanager.exceptions import AlertSerializationError
from src.alertmanager.types import AlertEvent, WireEvent


def translate_event(event: AlertEvent) -> WireEvent:
    """Map an alert event onto AlertManager labels and annotations.

    Fixed underscore-prefixed labels carry the event identity; tags are
    overlaid on top of them, so a tag named like a fixed label wins.
    Fields become annotations and must all be strings.

    Raises:
        AlertSerializationError: If a field value is not a string.
    """
    labels: dict[str, str] = {
        "_topic": event.topic,
        "_ID": event.state.id,
        "_message": event.state.message,
        "_level": str(event.state.level),
        "_name": event.data.name,
        "_taskName": event.data.task_name,
        "_category": event.data.category,
        "_recoverable": "true" if event.data.recoverable else "false",
    }
    labels.update(event.data.tags)

    annotations: dict[str, str] = {}
    for key, value in event.data.fields.items():
        if not isinstance(value, str):
            raise AlertSerializationError(
                f"field {key!r} has non-string value of type {type(value).__name__}"
            )
        annotations[key] = value

    return WireEvent(labels=labels, annotations=annotations)


def encode_payload(events: Sequence[WireEvent]) -> bytes:
    """Serialize wire events as the JSON array AlertManager expects."""
    return json.dumps([ev.model_dump() for ev in events]).encode("utf-8")


def build_payload(event: AlertEvent) -> bytes:
    """Translate a single event and encode it as a one-element array."""
    return encode_payload([translate_event(event)])
