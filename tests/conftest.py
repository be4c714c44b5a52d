"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from repover.config.settings import Settings
from repover.services.repositories import RepositoryService
from tests.helpers import git


@pytest.fixture
def base_path(tmp_path: Path) -> Path:
    """Directory scanned for repositories."""
    path = tmp_path / "extensions"
    path.mkdir()
    return path


@pytest.fixture
def make_repo(tmp_path: Path, base_path: Path) -> Callable[..., Path]:
    """Factory creating committed git repositories under ``base_path``.

    With ``remote=True`` a bare repository is attached as ``origin`` so
    pushes succeed.
    """

    def _make(
        name: str,
        tag: str | None = None,
        manifest: dict[str, Any] | None = None,
        remote: bool = True,
    ) -> Path:
        repo_path = base_path / name
        repo_path.mkdir()

        git(repo_path, "init")
        git(repo_path, "config", "user.email", "test@test.com")
        git(repo_path, "config", "user.name", "Test")
        git(repo_path, "config", "commit.gpgsign", "false")
        git(repo_path, "config", "tag.gpgsign", "false")

        (repo_path / "src.txt").write_text("initial\n")
        if manifest is not None:
            (repo_path / "composer.json").write_text(json.dumps(manifest, indent=4))

        git(repo_path, "add", "--all")
        git(repo_path, "commit", "-m", "Initial commit")

        if tag:
            git(repo_path, "tag", tag)

        if remote:
            remotes = tmp_path / "remotes"
            remotes.mkdir(exist_ok=True)
            origin = remotes / f"{name}.git"
            git(remotes, "init", "--bare", str(origin))
            git(repo_path, "remote", "add", "origin", str(origin))

        return repo_path

    return _make


@pytest.fixture
def settings(base_path: Path) -> Settings:
    """Settings scanning the temporary ``extensions`` directory."""
    return Settings(
        _env_file=None,
        root=str(base_path.parent),
        base_paths=["extensions"],
        git_timeout=30.0,
    )


@pytest.fixture
def service(settings: Settings) -> RepositoryService:
    return RepositoryService.from_settings(settings)
