"""In-memory user directory for offline runs and testing."""

import copy
import logging
from collections.abc import Sequence
from typing import Any

from domain.schemas import Division, UserRecord
from infrastructure.directory.base import UserDirectoryClient
from infrastructure.directory.errors import DirectoryApiError

logger = logging.getLogger(__name__)

DEMO_DIVISIONS: list[dict[str, Any]] = [
    {"_id": "d-news-fin", "name": "Finances", "ou": {"_id": "ou-news", "name": "News management"}},
    {"_id": "d-news-it", "name": "IT", "ou": {"_id": "ou-news", "name": "News management"}},
    {"_id": "d-news-wri", "name": "Writing", "ou": {"_id": "ou-news", "name": "News management"}},
    {"_id": "d-sw-dev", "name": "Development", "ou": {"_id": "ou-software", "name": "Software reviews"}},
    {"_id": "d-sw-qa", "name": "Quality assurance", "ou": {"_id": "ou-software", "name": "Software reviews"}},
    {"_id": "d-hw-lab", "name": "Lab", "ou": {"_id": "ou-hardware", "name": "Hardware reviews"}},
]

DEMO_USERS: dict[str, dict[str, Any]] = {
    "u-admin": {
        "_id": "u-admin",
        "username": "admin",
        "password": "<hashed>",
        "role": "Admin",
        "divisions": ["d-news-fin"],
        "ous": ["ou-news"],
        "__v": 3,
    },
    "u-jane": {
        "_id": "u-jane",
        "username": "jane",
        "password": "<hashed>",
        "role": "Normal",
        "divisions": ["d-sw-dev", "d-hw-lab"],
        "ous": ["ou-software", "ou-hardware"],
        "__v": 7,
    },
}


class InMemoryUserDirectory(UserDirectoryClient):
    """
    Directory backed by plain dicts, shaped like the backend's documents.

    Users are stored with bare division/OU ids and populated on read, the way
    the backend returns them. `failures` maps an operation name
    ("fetch_user", "fetch_divisions", "update_user") to an error raised on call.
    """

    def __init__(
        self,
        *,
        users: dict[str, dict[str, Any]] | None = None,
        divisions: list[dict[str, Any]] | None = None,
        failures: dict[str, DirectoryApiError] | None = None,
    ) -> None:
        self.users = copy.deepcopy(DEMO_USERS if users is None else users)
        self.divisions = copy.deepcopy(DEMO_DIVISIONS if divisions is None else divisions)
        self.failures = failures or {}
        self.updates: list[tuple[str, dict[str, Any]]] = []
        logger.info("Initialized in-memory directory (%d users, %d divisions)", len(self.users), len(self.divisions))

    def _maybe_fail(self, operation: str) -> None:
        err = self.failures.get(operation)
        if err is not None:
            raise err

    def _populate(self, doc: dict[str, Any]) -> dict[str, Any]:
        by_division = {str(d["_id"]): d for d in self.divisions}
        by_ou = {str(d["ou"]["_id"]): d["ou"] for d in self.divisions if d.get("ou")}

        out = copy.deepcopy(doc)
        out["divisions"] = [
            {"_id": did, "name": (by_division.get(str(did)) or {}).get("name", "")} for did in doc.get("divisions", [])
        ]
        out["ous"] = [{"_id": oid, "name": (by_ou.get(str(oid)) or {}).get("name", "")} for oid in doc.get("ous", [])]
        return out

    def fetch_user(self, user_id: str) -> UserRecord:
        self._maybe_fail("fetch_user")
        doc = self.users.get(user_id)
        if doc is None:
            raise DirectoryApiError(f"User not found: {user_id}", status_code=404)
        return self._parse(UserRecord, self._populate(doc), what="user")

    def fetch_divisions(self) -> Sequence[Division]:
        self._maybe_fail("fetch_divisions")
        return self._parse_divisions(copy.deepcopy(self.divisions))

    def update_user(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        self._maybe_fail("update_user")
        if user_id not in self.users:
            raise DirectoryApiError(f"User not found: {user_id}", status_code=404)

        stored = copy.deepcopy(payload)
        stored["__v"] = int(self.users[user_id].get("__v", 0)) + 1
        self.users[user_id] = stored
        self.updates.append((user_id, copy.deepcopy(payload)))
        logger.debug("In-memory update stored for user %s", user_id)
        return self._populate(stored)
