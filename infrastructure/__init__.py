"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- User directory backends (HTTP, in-memory)
- Configuration loading (YAML, environment)
- Caller identity storage and navigation
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import EditorConfig, load_editor_config
from infrastructure.directory import UserDirectoryClient, make_client

__all__ = [
    # Directory clients (most commonly used)
    "make_client",
    "UserDirectoryClient",
    # Configuration (most commonly used)
    "load_editor_config",
    "EditorConfig",
]
