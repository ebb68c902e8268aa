"""
Observability: structured logging and context management.

Provides:
- Contextual logging with session tag and edited user id
- Log rotation and file management
- Third-party library log level control
"""

from infrastructure.observability.logging import (
    clear_user_context,
    configure_logging,
    make_session_tag,
    set_log_context,
)

__all__ = [
    "configure_logging",
    "set_log_context",
    "clear_user_context",
    "make_session_tag",
]
