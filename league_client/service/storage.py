"""Durable single-slot storage for the session token.

Exactly one value is persisted: the opaque token string. Absence of the slot
means "no session". The file is written atomically with owner-only permissions
(0o600) inside an owner-only directory (0o700), since it holds a credential.
"""
from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Protocol

from ..logging_conf import get_logger

logger = get_logger("league_client.storage")

_TOKEN_DIR_MODE = 0o700
_TOKEN_FILE_MODE = 0o600


class TokenStorage(Protocol):
    """Protocol for persisting the session token."""

    def load(self) -> str | None: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStorage:
    """Process-local slot; used by tests and short-lived embeddings."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStorage:
    """Keeps the token in a single file on the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        """Return the stored token, or None when the slot is empty or blank."""
        try:
            token = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        """Replace the slot contents via temp-file-then-rename."""
        directory = self._path.parent
        directory.mkdir(mode=_TOKEN_DIR_MODE, parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=str(directory), suffix=".tmp", prefix=".token_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(token)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _TOKEN_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(self._path)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("token.saved", extra={"event": "token_saved", "path": str(self._path)})

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
        logger.debug("token.cleared", extra={"event": "token_cleared", "path": str(self._path)})
