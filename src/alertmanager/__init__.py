"""AlertManager forwarding — translation, dispatch, and retry staging."""

from src.alertmanager.config import validate_config
from src.alertmanager.exceptions import (
    AlertManagerConfigError,
    AlertManagerDisabledError,
    AlertManagerError,
    AlertManagerProtocolError,
    AlertManagerTransportError,
    AlertPersistenceError,
    AlertSerializationError,
)
from src.alertmanager.factory import create_alertmanager_service
from src.alertmanager.handler import AlertManagerHandler, HandlerConfig
from src.alertmanager.retry import persist_payload
from src.alertmanager.service import AlertManagerService, SelfTestOptions
from src.alertmanager.translator import build_payload, encode_payload, translate_event
from src.alertmanager.types import (
    AlertEvent,
    AlertLevel,
    EventData,
    EventState,
    WireEvent,
)

__all__ = [
    "AlertEvent",
    "AlertLevel",
    "AlertManagerConfigError",
    "AlertManagerDisabledError",
    "AlertManagerError",
    "AlertManagerHandler",
    "AlertManagerProtocolError",
    "AlertManagerService",
    "AlertManagerTransportError",
    "AlertPersistenceError",
    "AlertSerializationError",
    "EventData",
    "EventState",
    "HandlerConfig",
    "SelfTestOptions",
    "WireEvent",
    "build_payload",
    "create_alertmanager_service",
    "encode_payload",
    "persist_payload",
    "translate_event",
    "validate_config",
]
