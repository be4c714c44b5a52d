"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from repover.core.models.version import DEFAULT_MINOR_LIMIT, DEFAULT_PATCH_LIMIT


class Settings(BaseSettings):
    """Application settings loaded from REPOVER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPOVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Discovery: base paths are resolved against root unless absolute
    root: str = "."
    base_paths: list[str] = Field(default_factory=lambda: ["extensions"])

    # Version bump rollover limits
    patch_limit: int = Field(default=DEFAULT_PATCH_LIMIT, ge=0)
    minor_limit: int = Field(default=DEFAULT_MINOR_LIMIT, ge=0)

    # Git
    git_binary: str = "git"
    git_timeout: float | None = 120.0
    git_remote: str = "origin"
    git_branch: str | None = None  # None pushes the current branch
    default_commit_message: str = "automatic commit"

    # Repository layout
    manifest_filename: str = "composer.json"
    readme_filename: str = "README.md"
    version_filename: str = "extension.php"
    lang_dirname: str = "lang"
    locales: list[str] = Field(default_factory=lambda: ["en", "cs"])
    default_keywords: list[str] = Field(
        default_factory=lambda: ["laravel", "cartalyst", "platform", "extension", "madeinsane"]
    )

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def root_path(self) -> Path:
        return Path(self.root).expanduser().resolve()

    @property
    def resolved_base_paths(self) -> list[Path]:
        """Base paths as absolute directories, in configured order."""
        return [(self.root_path / Path(path).expanduser()).resolve() for path in self.base_paths]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
