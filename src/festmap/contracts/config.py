"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024


class StoreConfig(BaseModel):
    provider: str = "github"
    owner: str = ""
    repo: str = ""
    branch: str = "main"
    file_path: str = "festival-map.json"
    api_url: str = "https://api.github.com"
    timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_github_target(self) -> StoreConfig:
        if self.provider != "github":
            raise ValueError("store.provider must be: github")
        if not self.owner.strip() or not self.repo.strip():
            raise ValueError("github store requires non-empty owner and repo")
        if not self.file_path.strip():
            raise ValueError("store.file_path must not be empty")
        return self

    @property
    def target(self) -> str:
        return f"{self.owner}/{self.repo}:{self.branch}/{self.file_path}"


class FestMapConfig(BaseModel):
    store: StoreConfig
    auth: str = "env"
    token: str | None = None
    backup_dir: Path = Path("backups")
    backup_keep: int = Field(default=50, ge=1)
    cache_path: Path = Path("backups/current.json")
    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, ge=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_token(self) -> FestMapConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"env", "token"}:
            raise ValueError("auth must be one of: env, token")
        return self
