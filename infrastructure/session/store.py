"""Stores for the operator's active-session identity."""

import logging
from pathlib import Path
from typing import Any

from domain.schemas import CallerIdentity
from infrastructure.io import ensure_exists, read_text, write_json

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Identity held in process memory; shared by everything holding this store."""

    def __init__(self, identity: CallerIdentity) -> None:
        self._identity = identity

    def get(self) -> CallerIdentity:
        return self._identity

    def replace(self, record: dict[str, Any]) -> CallerIdentity:
        self._identity = CallerIdentity.model_validate(record)
        logger.info("Session identity replaced (id=%s)", self._identity.id)
        return self._identity


class FileSessionStore:
    """
    Identity persisted as a JSON file.

    The file is read once on construction and rewritten on replace(), so a
    later CLI run sees the refreshed identity.
    """

    def __init__(self, path: Path) -> None:
        ensure_exists(path, "session identity file")
        self.path = path
        self._identity = CallerIdentity.model_validate_json(read_text(path))

    def get(self) -> CallerIdentity:
        return self._identity

    def replace(self, record: dict[str, Any]) -> CallerIdentity:
        identity = CallerIdentity.model_validate(record)
        write_json(self.path, identity.model_dump(mode="json", by_alias=True, exclude_none=True))
        self._identity = identity
        logger.info("Session identity replaced and saved to %s (id=%s)", self.path, identity.id)
        return identity
