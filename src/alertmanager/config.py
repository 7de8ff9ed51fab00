"""Validation of AlertManager configuration."""

from __future__ import annotations

import os

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from src.alertmanager.exceptions import AlertManagerConfigError
from src.core.config import AlertManagerConfig

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)


def validate_config(config: AlertManagerConfig) -> None:
    """Check that *config* can be used to run the forwarder.

    The URL is only checked when the service is enabled. The retry folder
    must exist in either case.

    Raises:
        AlertManagerConfigError: Describing the first problem found.
    """
    if config.enabled:
        if not config.url:
            raise AlertManagerConfigError("url cannot be empty")
        try:
            _URL_ADAPTER.validate_python(config.url)
        except ValidationError as exc:
            raise AlertManagerConfigError(
                f"invalid AlertManager URL: {config.url!r}"
            ) from exc

    try:
        os.stat(config.retry_folder)
    except FileNotFoundError as exc:
        raise AlertManagerConfigError(
            f"folder {config.retry_folder!r} does not exist"
        ) from exc
    except OSError as exc:
        raise AlertManagerConfigError(
            f"folder {config.retry_folder!r} cannot be accessed: {exc.strerror}"
        ) from exc
