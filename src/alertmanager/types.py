"""Domain types for alert events and the AlertManager wire format."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AlertLevel(StrEnum):
    """Alert severity level as reported by the alerting pipeline."""

    OK = "OK"
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


# Field values arrive untyped from the pipeline; only strings can be forwarded.
FieldValue = str | int | float | bool | None


class EventState(BaseModel):
    """Identity and severity of a single alert firing."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    message: str = ""
    level: AlertLevel = AlertLevel.OK


class EventData(BaseModel):
    """Task metadata, tags and fields attached to an alert."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    task_name: str = ""
    category: str = ""
    recoverable: bool = False
    tags: dict[str, str] = Field(default_factory=dict)
    fields: dict[str, FieldValue] = Field(default_factory=dict)


class AlertEvent(BaseModel):
    """Internal alert event produced by the alerting pipeline."""

    model_config = ConfigDict(frozen=True)

    topic: str = ""
    state: EventState = EventState()
    data: EventData = EventData()


class WireEvent(BaseModel):
    """A single AlertManager alert: label and annotation string maps."""

    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
