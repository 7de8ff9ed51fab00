"""Framework-facing handler adapter for the AlertManager service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict, Field

from src.alertmanager.exceptions import AlertManagerError
from src.alertmanager.types import AlertEvent

if TYPE_CHECKING:
    from src.alertmanager.service import AlertManagerService


class HandlerConfig(BaseModel):
    """Per-handler target, overriding the service-level defaults."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    retry_folder: str = Field(default="", alias="retry-folder")


class AlertManagerHandler:
    """Delivers events for one configured target, fire-and-forget.

    Delivery errors are logged and dropped here; callers of
    :meth:`handle` never see them. Anything else propagates.
    """

    def __init__(
        self,
        service: AlertManagerService,
        config: HandlerConfig,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        self._service = service
        self._config = config
        self._log = log

    @property
    def config(self) -> HandlerConfig:
        return self._config

    async def handle(self, event: AlertEvent) -> None:
        try:
            await self._service.alert(
                self._config.url, self._config.retry_folder, event
            )
        except AlertManagerError as exc:
            self._log.error(
                "alertmanager_handle_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                url=self._config.url,
                topic=event.topic,
            )
