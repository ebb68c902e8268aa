"""Factory for creating user directory clients."""

import logging

from infrastructure.config.models import EditorConfig

from .base import UserDirectoryClient
from .http import HttpUserDirectoryClient
from .memory import InMemoryUserDirectory

logger = logging.getLogger(__name__)


def make_client(cfg: EditorConfig, *, use_mock: bool = False) -> UserDirectoryClient:
    """
    Factory function to create the directory client.
    Args:
        cfg: Editor configuration containing the API settings
        use_mock: If True, use the in-memory directory with demo data regardless of cfg
    Returns:
        An instance of UserDirectoryClient.
    """
    if use_mock:
        logger.info("Using in-memory directory (no backend requests will be made)")
        return InMemoryUserDirectory()

    logger.info("Using HTTP directory at %s", cfg.api.base_url)
    return HttpUserDirectoryClient.from_cfg(cfg)
