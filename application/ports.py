"""Collaborators injected into an edit session."""

from typing import Any, Protocol

from domain.schemas import CallerIdentity


class SessionStore(Protocol):
    """The operator's active-session identity, shared with the rest of the application."""

    def get(self) -> CallerIdentity: ...

    def replace(self, record: dict[str, Any]) -> CallerIdentity: ...


class Navigator(Protocol):
    """Moves the operator away from the edit form."""

    def redirect(self, target: str) -> None: ...
