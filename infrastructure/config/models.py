"""Configuration models (Pydantic classes)."""

from pydantic import BaseModel, Field, model_validator

from domain.schemas import REVISION_BASELINE


class ApiConfig(BaseModel):
    """Backend API location and endpoint paths."""

    base_url: str = Field(default="http://localhost:8080", description="Root URL of the user directory backend.")
    timeout_s: float = 10.0
    token: str | None = Field(
        default=None,
        description="Optional bearer token. Usually supplied through the environment, not the YAML file.",
    )
    user_path: str = "/api/users/user"
    update_user_path: str = "/api/users/update-user"
    divisions_path: str = "/api/divisions"


class NavigationConfig(BaseModel):
    """Where the session sends the operator when it is abandoned."""

    unauthenticated_target: str = "/"
    forbidden_target: str = "/user-page"


class NoticeConfig(BaseModel):
    """Confirmation notice shown after a successful update."""

    message: str = "User successfully updated."
    duration_s: float = 2.0


class EditorConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from editor.yaml
    - Environment overrides applied by the configuration loader
    - Consumed by the API client factory and the edit session
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    notice: NoticeConfig = Field(default_factory=NoticeConfig)
    revision_baseline: int = Field(
        default=REVISION_BASELINE,
        description="Revision marker sent with every update, regardless of the one read from the server.",
    )

    @model_validator(mode="after")
    def _validate(self) -> "EditorConfig":
        self.api.base_url = self.api.base_url.strip()
        if not self.api.base_url:
            raise ValueError("api.base_url must not be empty")
        if not self.api.base_url.startswith(("http://", "https://")):
            raise ValueError(f"api.base_url must be an http(s) URL, got {self.api.base_url!r}")

        if self.api.timeout_s <= 0:
            raise ValueError("api.timeout_s must be positive")

        if self.notice.duration_s <= 0:
            raise ValueError("notice.duration_s must be positive")

        if self.api.token is not None and not self.api.token.strip():
            self.api.token = None

        return self
