from pathlib import Path

import pytest
from pydantic import ValidationError

from infrastructure.config import load_editor_config
from infrastructure.config.models import ApiConfig, EditorConfig, NoticeConfig


def test_defaults_match_backend_routes() -> None:
    cfg = EditorConfig()

    assert cfg.api.user_path == "/api/users/user"
    assert cfg.api.update_user_path == "/api/users/update-user"
    assert cfg.api.divisions_path == "/api/divisions"
    assert cfg.navigation.unauthenticated_target == "/"
    assert cfg.navigation.forbidden_target == "/user-page"
    assert cfg.notice.duration_s == 2.0
    assert cfg.revision_baseline == 0


def test_blank_token_is_treated_as_missing() -> None:
    cfg = EditorConfig(api=ApiConfig(token="   "))

    assert cfg.api.token is None


def test_non_positive_notice_duration_is_rejected() -> None:
    with pytest.raises(ValidationError, match="duration_s"):
        EditorConfig(notice=NoticeConfig(duration_s=0))


def test_empty_base_url_is_rejected() -> None:
    with pytest.raises(ValidationError, match="base_url"):
        EditorConfig(api=ApiConfig(base_url="  "))


def test_yaml_is_loaded_and_env_overrides_apply(tmp_path: Path) -> None:
    path = tmp_path / "editor.yaml"
    path.write_text(
        "api:\n  base_url: http://backend:3000\n  timeout_s: 5\nnotice:\n  duration_s: 3\n",
        encoding="utf-8",
    )

    cfg = load_editor_config(
        path,
        environ={"USER_EDITOR_API_URL": "https://staging.example", "USER_EDITOR_API_TOKEN": "t0k"},
    )

    assert cfg.api.base_url == "https://staging.example"
    assert cfg.api.token == "t0k"
    assert cfg.api.timeout_s == 5
    assert cfg.notice.duration_s == 3


def test_empty_yaml_means_defaults(tmp_path: Path) -> None:
    path = tmp_path / "editor.yaml"
    path.write_text("", encoding="utf-8")

    cfg = load_editor_config(path, environ={})

    assert cfg == EditorConfig()


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "editor.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Expected YAML dict"):
        load_editor_config(path, environ={})


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_editor_config(tmp_path / "nope.yaml", environ={})
