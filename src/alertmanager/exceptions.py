"""Exception hierarchy for AlertManager forwarding."""

from __future__ import annotations


class AlertManagerError(Exception):
    """Base exception for all AlertManager forwarding errors."""


class AlertManagerConfigError(AlertManagerError):
    """Configuration is invalid (bad URL, missing retry folder, bad reload)."""


class AlertManagerDisabledError(AlertManagerError):
    """A dispatch was attempted while the service is disabled."""


class AlertSerializationError(AlertManagerError, TypeError):
    """An event could not be rendered to the wire format."""


class AlertManagerTransportError(AlertManagerError):
    """The endpoint could not be reached (no response received)."""


class AlertPersistenceError(AlertManagerError):
    """A payload could not be written to the retry folder."""


class AlertManagerProtocolError(AlertManagerError):
    """The endpoint answered with a non-200 status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"unexpected response code {status_code} from AlertManager service"
        )
        self.status_code = status_code
