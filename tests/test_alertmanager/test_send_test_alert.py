"""Tests for the send_test_alert script."""

from __future__ import annotations

import argparse
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import yaml

from scripts.send_test_alert import run
from src.alertmanager.service import AlertManagerService
from src.core.config import reset_settings


@pytest.fixture(autouse=True)
def _clean_settings() -> None:
    reset_settings()


def _args(config: Path, **kw: object) -> argparse.Namespace:
    defaults: dict[str, object] = {
        "config": str(config),
        "url": None,
        "retry_folder": None,
        "log_level": "WARNING",
    }
    defaults.update(kw)
    return argparse.Namespace(**defaults)


def _write_config(tmp_path: Path, **am: object) -> Path:
    data: dict[str, object] = {
        "enabled": True,
        "url": "http://am.test/api/v1/alerts",
        "retry-folder": str(tmp_path),
    }
    data.update(am)
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump({"alertmanager": data}))
    return path


class TestSendTestAlert:
    async def test_success_returns_zero(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path)
        with patch.object(AlertManagerService, "test", new_callable=AsyncMock) as mock_test:
            code = await run(_args(config))
        assert code == 0
        options = mock_test.call_args[0][0]
        assert options.url == "http://am.test/api/v1/alerts"
        assert options.retry_folder == str(tmp_path)

    async def test_transport_failure_returns_one(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path)
        with patch.object(
            httpx.AsyncClient, "post", new_callable=AsyncMock,
            side_effect=httpx.ConnectError("connection refused"),
        ):
            code = await run(_args(config))
        assert code == 1
        retry_files = [p for p in tmp_path.iterdir() if p.name != "settings.yaml"]
        assert len(retry_files) == 1

    async def test_url_override(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path)
        with patch.object(AlertManagerService, "test", new_callable=AsyncMock) as mock_test:
            await run(_args(config, url="http://override.test/"))
        assert mock_test.call_args[0][0].url == "http://override.test/"

    async def test_invalid_config_returns_one(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, **{"retry-folder": "/does/not/exist"})
        with patch.object(AlertManagerService, "test", new_callable=AsyncMock) as mock_test:
            code = await run(_args(config))
        assert code == 1
        mock_test.assert_not_called()

    async def test_delivery_failure_returns_one(self, tmp_path: Path) -> None:
        config = _write_config(tmp_path, enabled=False)
        code = await run(_args(config))
        assert code == 1
