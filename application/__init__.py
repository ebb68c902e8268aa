"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the user edit session.

This module exposes the session controller and its helpers.
"""

from application.presentation import render_form
from application.serialize import build_update_payload, project_user
from application.session import Notice, SessionState, SessionStateError, UserEditSession

__all__ = [
    # Main workflow
    "UserEditSession",
    "SessionState",
    "SessionStateError",
    "Notice",
    # Serialization
    "project_user",
    "build_update_payload",
    # Presentation
    "render_form",
]
