"""Repository inspection via git and the filesystem."""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from repover.core.models.repository import NO_DESCRIPTION, UNKNOWN, RepositoryRecord
from repover.git.runner import GitRunner
from repover.utils.manifest import load_manifest

logger = structlog.get_logger(__name__)


class RepositoryInspector:
    """Builds RepositoryRecord snapshots.

    Git failures are best-effort: a failed status query counts as zero
    changed files and a failed describe as no tag.
    """

    def __init__(
        self,
        runner: GitRunner,
        manifest_filename: str = "composer.json",
        readme_filename: str = "README.md",
        lang_dirname: str = "lang",
        locales: Iterable[str] = ("en", "cs"),
    ) -> None:
        self._runner = runner
        self._manifest_filename = manifest_filename
        self._readme_filename = readme_filename
        self._lang_dirname = lang_dirname
        self._locales = list(locales)

    def manifest_path(self, repo_path: Path) -> Path:
        return repo_path / self._manifest_filename

    def readme_path(self, repo_path: Path) -> Path:
        return repo_path / self._readme_filename

    def lang_path(self, repo_path: Path, locale: str) -> Path:
        return repo_path / self._lang_dirname / locale

    def changed_file_count(self, repo_path: Path) -> int:
        """Count tracked files with staged or unstaged modifications."""
        result = self._runner.run(repo_path, "status", "--porcelain")
        if not result.ok:
            logger.warning(
                "git status failed, reporting no changes",
                path=str(repo_path),
                returncode=result.returncode,
            )
            return 0

        # Porcelain lines are "XY path"; M in either column is a modification
        return sum(1 for line in result.lines if "M" in line[:2])

    def last_tag(self, repo_path: Path) -> str:
        """Return the nearest reachable tag, or "" when there is none."""
        result = self._runner.run(repo_path, "describe", "--tags", "--abbrev=0")
        if not result.ok:
            logger.debug("No tag found", path=str(repo_path))
            return ""
        return result.lines[0].strip() if result.lines else ""

    def has_readme(self, repo_path: Path) -> bool:
        return self.readme_path(repo_path).exists()

    def language_availability(self, repo_path: Path) -> dict[str, bool]:
        return {locale: self.lang_path(repo_path, locale).exists() for locale in self._locales}

    def read_manifest(self, repo_path: Path) -> dict[str, Any]:
        """Parsed manifest, or an empty mapping when absent or invalid."""
        return load_manifest(self.manifest_path(repo_path)) or {}

    def inspect(self, repo_path: Path | str) -> RepositoryRecord:
        """Inspect a repository without any caching."""
        repo_path = Path(repo_path)
        manifest = self.read_manifest(repo_path)

        record = RepositoryRecord(
            path=str(repo_path),
            basename=repo_path.name,
            changed_file_count=self.changed_file_count(repo_path),
            last_tag=self.last_tag(repo_path),
            has_readme=self.has_readme(repo_path),
            language_availability=self.language_availability(repo_path),
            package_type=_text_field(manifest, "type", UNKNOWN),
            package_name=_text_field(manifest, "name", UNKNOWN),
            package_authors=_list_field(manifest, "authors"),
            package_description=_text_field(manifest, "description", NO_DESCRIPTION),
            package_keywords=_list_field(manifest, "keywords"),
        )
        logger.debug("Repository inspected", path=record.path, last_tag=record.last_tag)
        return record


def _text_field(manifest: dict[str, Any], key: str, default: str) -> str:
    value = manifest.get(key)
    return value if isinstance(value, str) else default


def _list_field(manifest: dict[str, Any], key: str) -> list[Any] | str:
    value = manifest.get(key)
    return value if isinstance(value, list) else UNKNOWN
