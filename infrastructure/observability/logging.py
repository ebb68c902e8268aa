"""
Logging setup with contextvars-based metadata injection.

- Adds the session tag and edited user id into every log line (via contextvars).
- Supports console-only logging OR console + rotating file logs.
- Tunes noisy third-party library loggers (httpx, httpcore).
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Context variables for dynamic log metadata
cv_session_tag = contextvars.ContextVar("session_tag", default="-")
cv_user_id = contextvars.ContextVar("user_id", default="-")


def make_session_tag(session_id_full: str, length: int = 8) -> str:
    """
    Stable short tag derived from the full session id.
    8 hex chars is plenty for one operator's sessions; uses BLAKE2s.
    """
    h = hashlib.blake2s(session_id_full.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Inject context variables into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = cv_session_tag.get() or "-"
        record.user = cv_user_id.get() or "-"
        return True


def set_log_context(
    *,
    session_id_full: str | None = None,
    user_id: str | None = None,
) -> None:
    """Update logging context (thread-safe via contextvars)."""
    if session_id_full is not None:
        cv_session_tag.set(make_session_tag(str(session_id_full)))

    if user_id is not None:
        cv_user_id.set(str(user_id))


def clear_user_context() -> None:
    """Reset the edited user (keep session info)."""
    cv_user_id.set("-")


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 5_000_000,  # 5MB
    backup_count: int = 3,
) -> None:
    """
    Configure application logging with contextvars support.

    Args:
        log_file: Optional path to a log file
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
    """
    # Clear existing handlers to avoid duplicate logs if called multiple times
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # keep root permissive; handlers enforce levels

    console_fmt = "%(asctime)s [%(levelname)s] s=%(session)s u=%(user)s | %(message)s"
    file_fmt = "%(asctime)s [%(levelname)s] %(name)s | s=%(session)s u=%(user)s | %(message)s"

    console_formatter = logging.Formatter(console_fmt, datefmt="%H:%M:%S")
    file_formatter = logging.Formatter(file_fmt, datefmt="%Y-%m-%d %H:%M:%S")

    ctx_filter = ContextInjectFilter()

    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(console_formatter)
    ch.addFilter(ctx_filter)
    root.addHandler(ch)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(file_level)
        fh.setFormatter(file_formatter)
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    # Request-level chatter from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        str(log_file) if log_file is not None else "None",
    )
