"""AlertManager service — dispatch with retry-folder fallback and hot reload."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.alertmanager.config import validate_config
from src.alertmanager.exceptions import (
    AlertManagerConfigError,
    AlertManagerDisabledError,
    AlertManagerProtocolError,
    AlertManagerTransportError,
    AlertPersistenceError,
)
from src.alertmanager.handler import AlertManagerHandler, HandlerConfig
from src.alertmanager.retry import persist_payload
from src.alertmanager.translator import build_payload
from src.alertmanager.types import AlertEvent
from src.core.config import AlertManagerConfig

logger = structlog.get_logger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


class SelfTestOptions(BaseModel):
    """Options accepted by :meth:`AlertManagerService.test`.

    ``message`` is accepted but not part of the dispatched payload.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    retry_folder: str = Field(default="", alias="retry-folder")
    message: str = "test alertmanager message"


class AlertManagerService:
    """Forwards alert events to an AlertManager endpoint.

    - Events are translated to labels/annotations and POSTed as a
      one-element JSON array.
    - If no response is received the payload is saved to the retry folder
      and the transport error is still raised.
    - Non-200 responses raise without saving anything.

    The configuration is an immutable snapshot swapped in one assignment
    by :meth:`update`; each dispatch reads it once up front.

    Usage::

        service = AlertManagerService(settings.alertmanager)
        async with service:
            await service.alert(url, retry_folder, event)

    Without ``async with`` the HTTP client is created on first dispatch
    and stays open until :meth:`close` is awaited.
    """

    def __init__(self, config: AlertManagerConfig) -> None:
        self._config = config
        self._http: httpx.AsyncClient | None = None

    @property
    def config(self) -> AlertManagerConfig:
        """Current configuration snapshot."""
        return self._config

    @property
    def connected(self) -> bool:
        """Whether the HTTP client is active."""
        return self._http is not None and not self._http.is_closed

    # ── Lifecycle ───────────────────────────────────────────────

    async def open(self) -> None:
        """Create the httpx async client."""
        if not self.connected:
            self._http = httpx.AsyncClient()

    async def close(self) -> None:
        """Close the httpx async client, including one created lazily."""
        if self._http is not None and not self._http.is_closed:
            await self._http.aclose()
            logger.debug("alertmanager_client_closed")
        self._http = None

    async def __aenter__(self) -> AlertManagerService:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        # Created on demand when dispatching outside ``async with``; the
        # owner must still call close() to release it.
        if self._http is None or self._http.is_closed:
            logger.debug("alertmanager_client_created_lazily")
            self._http = httpx.AsyncClient()
        return self._http

    # ── Configuration ───────────────────────────────────────────

    def update(self, new_configs: list[Any]) -> None:
        """Replace the configuration with the single object in *new_configs*.

        Raises:
            AlertManagerConfigError: On a wrong count, wrong type, or a
                configuration that fails validation.
        """
        if len(new_configs) != 1:
            raise AlertManagerConfigError(
                f"expected only one new config object, got {len(new_configs)}"
            )
        candidate = new_configs[0]
        if isinstance(candidate, Mapping):
            try:
                candidate = AlertManagerConfig.model_validate(candidate)
            except ValidationError as exc:
                raise AlertManagerConfigError(f"invalid config object: {exc}") from exc
        if not isinstance(candidate, AlertManagerConfig):
            raise AlertManagerConfigError(
                "expected config object to be of type AlertManagerConfig, "
                f"got {type(candidate).__name__}"
            )
        validate_config(candidate)
        self._config = candidate
        logger.info(
            "alertmanager_config_updated",
            enabled=candidate.enabled,
            url=candidate.url,
            retry_folder=candidate.retry_folder,
        )

    # ── Dispatch ────────────────────────────────────────────────

    async def alert(self, url: str, retry_folder: str, event: AlertEvent) -> None:
        """Send *event* to the AlertManager endpoint at *url*.

        Raises:
            AlertManagerDisabledError: The service is disabled.
            AlertSerializationError: The event has non-string fields.
            AlertManagerTransportError: No response was received; the
                payload has been saved to *retry_folder* when possible.
            AlertManagerProtocolError: The endpoint returned non-200.
        """
        config = self._config
        if not config.enabled:
            raise AlertManagerDisabledError("service is not enabled")

        payload = build_payload(event)

        try:
            response = await self._get_client().post(
                url, content=payload, headers=_JSON_HEADERS
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self._save_for_retry(retry_folder, payload)
            raise AlertManagerTransportError(
                f"AlertManager request to {url!r} failed: {exc}"
            ) from exc

        if response.status_code != httpx.codes.OK:
            raise AlertManagerProtocolError(response.status_code)

        logger.debug("alertmanager_alert_sent", url=url, topic=event.topic)

    def _save_for_retry(self, retry_folder: str, payload: bytes) -> None:
        try:
            path = persist_payload(retry_folder, payload)
        except AlertPersistenceError as exc:
            logger.error(
                "alertmanager_retry_save_failed",
                retry_folder=retry_folder,
                error=str(exc),
            )
            return
        logger.info("alertmanager_retry_saved", path=str(path))

    # ── Handlers ────────────────────────────────────────────────

    def default_handler_config(self) -> HandlerConfig:
        """Handler config seeded from the service-level URL and folder."""
        config = self._config
        return HandlerConfig(url=config.url, retry_folder=config.retry_folder)

    def handler(self, config: HandlerConfig, **context: Any) -> AlertManagerHandler:
        """Build a framework handler bound to *config*.

        Keyword *context* (task name, handler id, ...) is bound into every
        log line the handler emits.
        """
        return AlertManagerHandler(self, config, logger.bind(**context))

    # ── Self-test ───────────────────────────────────────────────

    def test_options(self) -> SelfTestOptions:
        """Default self-test options taken from the current config."""
        config = self._config
        return SelfTestOptions(url=config.url, retry_folder=config.retry_folder)

    async def test(self, options: SelfTestOptions | Mapping[str, Any]) -> None:
        """Dispatch an empty event using *options*; errors propagate."""
        if isinstance(options, Mapping):
            try:
                options = SelfTestOptions.model_validate(options)
            except ValidationError as exc:
                raise TypeError(f"invalid self-test options: {exc}") from exc
        if not isinstance(options, SelfTestOptions):
            raise TypeError(f"unexpected options type {type(options).__name__}")
        await self.alert(options.url, options.retry_folder, AlertEvent())
