"""Navigator that records where the session asked to go."""

import logging

logger = logging.getLogger(__name__)


class RecordingNavigator:
    """Keeps every redirect target; `current` is the latest one (None if never redirected)."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def current(self) -> str | None:
        return self.history[-1] if self.history else None

    def redirect(self, target: str) -> None:
        self.history.append(target)
        logger.warning("Redirecting to %s", target)
