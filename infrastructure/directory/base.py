"""Base client interface for the user directory backend."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from domain.schemas import Division, UserRecord
from infrastructure.directory.errors import MalformedResponseError

logger = logging.getLogger(__name__)


class UserDirectoryClient(ABC):
    """
    Abstract base class for user directory clients.
    Common interface for the HTTP backend and the in-memory directory.

    All concrete clients must implement:
    - fetch_user(): GET a user with populated divisions and OUs
    - fetch_divisions(): GET the flat division list with inline OUs
    - update_user(): PUT a serialized user and return the stored record
    """

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, *, what: str) -> Any:
        """Validate a decoded response body, mapping validation failures to MalformedResponseError."""
        try:
            return model.model_validate(data)
        except ValidationError as err:
            raise MalformedResponseError(f"Malformed {what} response: {err}") from err

    def _parse_divisions(self, data: Any) -> list[Division]:
        if not isinstance(data, list):
            raise MalformedResponseError(f"Expected a list of divisions, got {type(data).__name__}")
        return [self._parse(Division, item, what="division") for item in data]

    @abstractmethod
    def fetch_user(self, user_id: str) -> UserRecord:
        """Return the backend representation of `user_id`."""
        raise NotImplementedError

    @abstractmethod
    def fetch_divisions(self) -> Sequence[Division]:
        """Return every division, each carrying its owning OU."""
        raise NotImplementedError

    @abstractmethod
    def update_user(self, user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Persist `payload` for `user_id`.

        Returns:
            The updated record as returned by the backend (decoded JSON)
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release any underlying resources."""
