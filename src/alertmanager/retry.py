"""Retry folder persistence for payloads that could not be delivered."""

from __future__ import annotations

import os
import uuid
from pathlib import Path

from src.alertmanager.exceptions import AlertPersistenceError

RETRY_FILE_MODE = 0o640


def persist_payload(retry_folder: str | Path, payload: bytes) -> Path:
    """Write *payload* verbatim to a new uuid4-named file in *retry_folder*.

    The file is never read back here; an external process owns redelivery
    and cleanup.

    Returns:
        Path of the written retry file.

    Raises:
        AlertPersistenceError: If no identifier could be generated or the
            file could not be written.
    """
    try:
        file_id = uuid.uuid4()
    except (NotImplementedError, OSError) as exc:
        raise AlertPersistenceError(f"failed to generate retry file id: {exc}") from exc

    out_file = Path(retry_folder) / str(file_id)
    try:
        fd = os.open(out_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, RETRY_FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            os.fchmod(f.fileno(), RETRY_FILE_MODE)
            f.write(payload)
    except OSError as exc:
        raise AlertPersistenceError(
            f"failed to write retry file {str(out_file)!r}: {exc}"
        ) from exc

    return out_file
