"""HTTP client for the user directory backend."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from domain.schemas import Division, UserRecord
from infrastructure.config.models import ApiConfig, EditorConfig
from infrastructure.directory.base import UserDirectoryClient
from infrastructure.directory.errors import (
    DirectoryApiError,
    MalformedResponseError,
    TransportError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class HttpUserDirectoryClient(UserDirectoryClient):
    """
    User directory backed by the REST API:

    - GET  {user_path}?id=<id>
    - GET  {divisions_path}
    - PUT  {update_user_path}?id=<id>  (JSON body)

    Any 401 raises UnauthorizedError; other non-2xx statuses raise DirectoryApiError.
    """

    def __init__(self, *, api: ApiConfig, client: httpx.Client) -> None:
        self.api = api
        self.client = client

    @classmethod
    def from_cfg(cls, cfg: EditorConfig, *, transport: httpx.BaseTransport | None = None) -> "HttpUserDirectoryClient":
        headers = {"Accept": "application/json"}
        if cfg.api.token:
            headers["Authorization"] = f"Bearer {cfg.api.token}"
        client = httpx.Client(
            base_url=cfg.api.base_url.rstrip("/"),
            timeout=cfg.api.timeout_s,
            headers=headers,
            transport=transport,
        )
        return cls(api=cfg.api, client=client)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as err:
            raise TransportError(f"{method} {path} failed: {err}") from err

        if resp.status_code == 401:
            raise UnauthorizedError(f"{method} {path} returned 401")
        if resp.is_error:
            raise DirectoryApiError(
                f"{method} {path} returned {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as err:
            raise MalformedResponseError(
                f"{method} {path} returned a non-JSON body", status_code=resp.status_code
            ) from err

        logger.debug("%s %s -> %d", method, path, resp.status_code)
        return data

    def fetch_user(self, user_id: str) -> UserRecord:
        data = self._request("GET", self.api.user_path, params={"id": user_id})
        return self._parse(UserRecord, data, what="user")

    def fetch_divisions(self) -> Sequence[Division]:
        data = self._request("GET", self.api.divisions_path)
        divisions = self._parse_divisions(data)
        logger.info("Fetched %d divisions", len(divisions))
        return divisions

    def update_user(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        data = self._request("PUT", self.api.update_user_path, params={"id": user_id}, json=payload)
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected the updated user object, got {type(data).__name__}")
        return data

    def close(self) -> None:
        self.client.close()
