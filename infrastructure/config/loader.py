"""Configuration loading from YAML files."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import EditorConfig
from infrastructure.constants import ENV_API_TOKEN, ENV_API_URL

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    # An empty file means "all defaults"
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """
    Overlay environment variables onto the parsed YAML dict.

    - USER_EDITOR_API_URL   -> api.base_url
    - USER_EDITOR_API_TOKEN -> api.token
    """
    api = data.get("api") or {}
    if not isinstance(api, dict):
        raise ValueError("api must be a mapping")
    api = dict(api)

    if environ.get(ENV_API_URL):
        api["base_url"] = environ[ENV_API_URL]
        logger.debug("api.base_url overridden from %s", ENV_API_URL)
    if environ.get(ENV_API_TOKEN):
        api["token"] = environ[ENV_API_TOKEN]

    return {**data, "api": api}


def load_editor_config(path: Path, environ: Mapping[str, str] | None = None) -> EditorConfig:
    """
    Load editor.yaml and construct a fully-resolved EditorConfig.

    Args:
        path: Path to the YAML file
        environ: Environment to read overrides from (defaults to os.environ)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is not a mapping or fails validation
    """
    data = _load_yaml(path)
    data = apply_env_overrides(data, os.environ if environ is None else environ)
    cfg = EditorConfig.model_validate(data)
    logger.info("Loaded editor config from %s (api=%s)", path, cfg.api.base_url)
    return cfg
