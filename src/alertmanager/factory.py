"""Convenience factory for wiring the AlertManager service."""

from __future__ import annotations

from src.alertmanager.config import validate_config
from src.alertmanager.service import AlertManagerService
from src.core.config import Settings, get_settings


def create_alertmanager_service(settings: Settings | None = None) -> AlertManagerService:
    """Validate the alertmanager section of *settings* and build the service.

    Raises:
        AlertManagerConfigError: If the configuration is not usable.
    """
    config = (settings or get_settings()).alertmanager
    validate_config(config)
    return AlertManagerService(config)
