"""
Configuration management: models, loading, and validation.

Handles:
- EditorConfig: API location, navigation targets, notice settings
- YAML loading
- Environment variable overrides

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import apply_env_overrides, load_editor_config
from infrastructure.config.models import (
    ApiConfig,
    EditorConfig,
    NavigationConfig,
    NoticeConfig,
)

__all__ = [
    # Main config (most commonly used)
    "EditorConfig",
    "load_editor_config",
    # Sections
    "ApiConfig",
    "NavigationConfig",
    "NoticeConfig",
    # Loader helpers
    "apply_env_overrides",
]
