"""Tests for event translation and payload encoding."""

from __future__ import annotations

import json

import pytest

from src.alertmanager.exceptions import AlertSerializationError
from src.alertmanager.translator import build_payload, encode_payload, translate_event
from src.alertmanager.types import AlertEvent, AlertLevel, EventData, EventState, WireEvent

FIXED_LABELS = {
    "_topic",
    "_ID",
    "_message",
    "_level",
    "_name",
    "_taskName",
    "_category",
    "_recoverable",
}


# ── Helpers ─────────────────────────────────────────────────────


def _event(**data_kw: object) -> AlertEvent:
    data: dict[str, object] = {
        "name": "cpu",
        "task_name": "cpu_alert",
        "category": "infra",
        "recoverable": True,
        "tags": {"host": "server01", "dc": "eu-west"},
        "fields": {"value": "97.5", "summary": "cpu is hot"},
    }
    data.update(data_kw)
    return AlertEvent(
        topic="main:cpu_alert",
        state=EventState(id="cpu:host=server01", message="CPU high", level=AlertLevel.CRITICAL),
        data=EventData(**data),  # type: ignore[arg-type]
    )


# ── translate_event ─────────────────────────────────────────────


class TestLabels:
    def test_fixed_labels(self) -> None:
        wire = translate_event(_event())
        assert wire.labels["_topic"] == "main:cpu_alert"
        assert wire.labels["_ID"] == "cpu:host=server01"
        assert wire.labels["_message"] == "CPU high"
        assert wire.labels["_level"] == "CRITICAL"
        assert wire.labels["_name"] == "cpu"
        assert wire.labels["_taskName"] == "cpu_alert"
        assert wire.labels["_category"] == "infra"
        assert wire.labels["_recoverable"] == "true"

    def test_recoverable_false(self) -> None:
        wire = translate_event(_event(recoverable=False))
        assert wire.labels["_recoverable"] == "false"

    def test_label_keys_are_fixed_plus_tags(self) -> None:
        wire = translate_event(_event())
        assert set(wire.labels) == FIXED_LABELS | {"host", "dc"}
        assert wire.labels["host"] == "server01"

    def test_tag_overwrites_fixed_label(self) -> None:
        wire = translate_event(_event(tags={"_level": "custom"}))
        assert wire.labels["_level"] == "custom"
        assert set(wire.labels) == FIXED_LABELS

    def test_empty_event_has_all_fixed_labels(self) -> None:
        wire = translate_event(AlertEvent())
        assert set(wire.labels) == FIXED_LABELS
        assert wire.labels["_level"] == "OK"
        assert wire.labels["_recoverable"] == "false"
        assert wire.annotations == {}


class TestAnnotations:
    def test_fields_become_annotations(self) -> None:
        wire = translate_event(_event())
        assert wire.annotations == {"value": "97.5", "summary": "cpu is hot"}

    @pytest.mark.parametrize("value", [97.5, 3, True, None])
    def test_non_string_field_rejected(self, value: object) -> None:
        with pytest.raises(AlertSerializationError, match="value"):
            translate_event(_event(fields={"value": value}))

    def test_serialization_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            translate_event(_event(fields={"count": 1}))


class TestDeterminism:
    def test_same_event_same_output(self) -> None:
        ev = _event()
        assert translate_event(ev) == translate_event(ev)
        assert build_payload(ev) == build_payload(ev)


# ── Encoding ────────────────────────────────────────────────────


class TestEncoding:
    def test_encode_is_json_array(self) -> None:
        body = encode_payload([WireEvent(labels={"a": "b"}, annotations={"c": "d"})])
        assert json.loads(body) == [{"labels": {"a": "b"}, "annotations": {"c": "d"}}]

    def test_build_payload_wraps_single_event(self) -> None:
        ev = _event()
        decoded = json.loads(build_payload(ev))
        assert isinstance(decoded, list)
        assert len(decoded) == 1
        assert decoded[0] == translate_event(ev).model_dump()

    def test_non_ascii_round_trips(self) -> None:
        ev = _event(fields={"summary": "température élevée"})
        decoded = json.loads(build_payload(ev).decode("utf-8"))
        assert decoded[0]["annotations"]["summary"] == "température élevée"
