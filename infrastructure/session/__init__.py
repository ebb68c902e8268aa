"""Caller identity storage and navigation for edit sessions."""

from infrastructure.session.navigation import RecordingNavigator
from infrastructure.session.store import FileSessionStore, InMemorySessionStore

__all__ = [
    "InMemorySessionStore",
    "FileSessionStore",
    "RecordingNavigator",
]
