"""
Session store shared across all routes.

One JSON document holds every user's report history and every issued token:

    {
      "users":  {"alice": [<newest report>, ..., <oldest report>]},
      "tokens": {"<32 hex chars>": {"user": "alice", "createdAt": "2026-...Z"}}
    }

Each operation is a full load -> mutate -> save cycle against that document.
Cycles are serialised by a per-store lock, so requests inside one process
never lose each other's updates. Several processes pointed at the same file
still race: the last writer wins.

Tokens are passwordless and never expire. Reading history without a token is
allowed for any user.
"""

import json
import logging
import secrets
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from errors import CorruptData, Forbidden, InvalidInput
from models.session import SessionDocument, TokenRecord

logger = logging.getLogger(__name__)

MAX_HISTORY = 100
TOKEN_BYTES = 16    # 128 bits


# ─── Backends ──────────────────────────────────────────────────────────

class JsonFileBackend:
    """Whole-document persistence in a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def ensure(self) -> None:
        """Create the directory and an empty document; never overwrite an existing file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write(SessionDocument())

    def load(self) -> SessionDocument:
        self.ensure()
        try:
            with open(self.path, encoding="utf-8") as f:
                return SessionDocument.model_validate(json.load(f))
        except ValueError as exc:
            raise CorruptData(f"cannot read session document {self.path}: {exc}") from exc

    def save(self, document: SessionDocument) -> None:
        self._write(document)

    def _write(self, document: SessionDocument) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(document.to_json(), f, indent=2)


class InMemoryBackend:
    """Keeps the document in memory. Hands out copies so callers behave as with the file."""

    def __init__(self, document: Optional[SessionDocument] = None):
        self._document = document or SessionDocument()

    def load(self) -> SessionDocument:
        return self._document.model_copy(deep=True)

    def save(self, document: SessionDocument) -> None:
        self._document = document.model_copy(deep=True)


# ─── Store ─────────────────────────────────────────────────────────────

def _is_missing(value: Any) -> bool:
    """None, false, 0 and "" count as missing; empty lists and objects do not."""
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and value == 0


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SessionStore:
    def __init__(self, backend):
        self.backend = backend
        self._lock = threading.Lock()

    def login(self, user: Optional[str]) -> str:
        """Issue a fresh token for `user`. Earlier tokens for the same user stay valid."""
        if not user:
            raise InvalidInput("user required")

        token = secrets.token_hex(TOKEN_BYTES)
        with self._lock:
            document = self.backend.load()
            document.tokens[token] = TokenRecord(user=user, created_at=_utc_timestamp())
            self.backend.save(document)

        logger.info("Issued session token for user %r", user)
        return token

    def save_session(self, token: Optional[str], report: Any) -> None:
        """Prepend `report` to the token owner's history, keeping the newest MAX_HISTORY."""
        if not token or _is_missing(report):
            raise InvalidInput("token and report required")

        with self._lock:
            document = self.backend.load()
            record = document.tokens.get(token)
            if record is None:
                logger.warning("Session save rejected: unknown token")
                raise Forbidden("invalid token")

            history = [report] + document.users.get(record.user, [])
            document.users[record.user] = history[:MAX_HISTORY]
            self.backend.save(document)

        logger.info("Saved session report for user %r", record.user)

    def get_history(self, user: str, token: Optional[str] = None) -> list[Any]:
        """
        Return `user`'s reports, newest first.

        A supplied token must belong to `user`. Without a token the history is
        returned unconditionally.
        """
        with self._lock:
            document = self.backend.load()

        if token:
            record = document.tokens.get(token)
            if record is None or record.user != user:
                logger.warning("History read for %r rejected: token mismatch", user)
                raise Forbidden("invalid token")

        return document.users.get(user, [])
