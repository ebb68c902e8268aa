"""
User directory clients.

Implements the adapter pattern for the backend holding users and divisions:
- HTTP (REST API via httpx)
- In-memory (demo data, testing)

All clients implement the UserDirectoryClient interface.
"""

from infrastructure.directory.base import UserDirectoryClient
from infrastructure.directory.errors import (
    DirectoryApiError,
    MalformedResponseError,
    TransportError,
    UnauthorizedError,
)
from infrastructure.directory.factory import make_client
from infrastructure.directory.http import HttpUserDirectoryClient
from infrastructure.directory.memory import InMemoryUserDirectory

__all__ = [
    # Abstract base
    "UserDirectoryClient",
    # Concrete implementations
    "HttpUserDirectoryClient",
    "InMemoryUserDirectory",
    # Factory (most commonly used)
    "make_client",
    # Errors
    "DirectoryApiError",
    "UnauthorizedError",
    "TransportError",
    "MalformedResponseError",
]
