"""Repository administration service."""

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from repover.cache.memory import InMemoryRecordCache
from repover.core.exceptions import (
    ConfigurationError,
    ReadmeExistsError,
    RepositoryNotFoundError,
    ValidationError,
)
from repover.core.models.repository import (
    NO_DESCRIPTION,
    BulkOperationResult,
    RepositoryRecord,
)
from repover.core.models.version import (
    DEFAULT_MINOR_LIMIT,
    DEFAULT_PATCH_LIMIT,
    BumpKind,
    next_tag,
)
from repover.git.inspector import RepositoryInspector
from repover.git.mutator import GitMutator
from repover.git.runner import GitRunner
from repover.git.scanner import RepositoryScanner
from repover.utils.manifest import load_manifest, write_manifest
from repover.utils.readme import render_readme

if TYPE_CHECKING:
    from repover.config.settings import Settings

logger = structlog.get_logger(__name__)

DEFAULT_KEYWORDS = ["laravel", "cartalyst", "platform", "extension", "madeinsane"]


class RepositoryService:
    """Lists, inspects and mutates discovered repositories.

    Every mutation evicts the cached record of the repository it touched
    and recomputes it, so the next listing reflects the change.
    """

    def __init__(
        self,
        scanner: RepositoryScanner,
        inspector: RepositoryInspector,
        mutator: GitMutator,
        cache: InMemoryRecordCache | None = None,
        patch_limit: int = DEFAULT_PATCH_LIMIT,
        minor_limit: int = DEFAULT_MINOR_LIMIT,
        default_keywords: list[str] | None = None,
    ) -> None:
        self._scanner = scanner
        self._inspector = inspector
        self._mutator = mutator
        self._cache = cache if cache is not None else InMemoryRecordCache()
        self._patch_limit = patch_limit
        self._minor_limit = minor_limit
        self._default_keywords = list(default_keywords or DEFAULT_KEYWORDS)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RepositoryService":
        """Wire a service from application settings."""
        if not settings.base_paths:
            raise ConfigurationError("At least one base path must be configured")

        runner = GitRunner(git_binary=settings.git_binary, timeout=settings.git_timeout)
        return cls(
            scanner=RepositoryScanner(settings.resolved_base_paths),
            inspector=RepositoryInspector(
                runner,
                manifest_filename=settings.manifest_filename,
                readme_filename=settings.readme_filename,
                lang_dirname=settings.lang_dirname,
                locales=settings.locales,
            ),
            mutator=GitMutator(
                runner,
                remote=settings.git_remote,
                branch=settings.git_branch,
                version_filename=settings.version_filename,
                default_message=settings.default_commit_message,
            ),
            patch_limit=settings.patch_limit,
            minor_limit=settings.minor_limit,
            default_keywords=settings.default_keywords,
        )

    @property
    def cache(self) -> InMemoryRecordCache:
        return self._cache

    # --- Reads ---

    def discover(self) -> list[Path]:
        return self._scanner.discover()

    def list_repositories(self) -> list[RepositoryRecord]:
        """Records for every discovered repository, sorted by path."""
        return [self._read(path) for path in self.discover()]

    def get_repository(self, repo_dir: Path | str, use_cache: bool = True) -> RepositoryRecord:
        """Record for one repository.

        With ``use_cache`` the cached snapshot is used but the changed
        file count is always recomputed.
        """
        path = self._resolve(repo_dir)
        if not use_cache:
            return self._inspector.inspect(path)
        return self._read(path)

    # --- Mutations ---

    def bump(
        self,
        repo_dir: Path | str,
        kind: BumpKind | str = BumpKind.PATCH,
        tag: str | None = None,
        message: str | None = None,
        patch_limit: int | None = None,
        minor_limit: int | None = None,
    ) -> str:
        """Compute the next tag (or use ``tag``), commit, tag and push.

        Returns the new tag. Raises GitCommandError when a required git
        step fails; completed steps are kept.
        """
        path = self._resolve(repo_dir)
        try:
            kind = BumpKind(kind)
        except ValueError:
            raise ValidationError(
                f"Unknown bump kind: {kind}",
                details={"allowed": [k.value for k in BumpKind]},
            )

        new_tag = next_tag(
            self._inspector.last_tag(path),
            kind=kind,
            explicit_tag=tag,
            patch_limit=self._patch_limit if patch_limit is None else patch_limit,
            minor_limit=self._minor_limit if minor_limit is None else minor_limit,
        )

        try:
            self._mutator.release(path, new_tag, message)
        finally:
            self._flush(path)

        logger.info("Repository tagged", path=str(path), tag=new_tag)
        return new_tag

    def untag(self, repo_dir: Path | str) -> str | None:
        """Delete the last local tag; returns it, or None if there was none."""
        path = self._resolve(repo_dir)
        last_tag = self._inspector.last_tag(path)
        if not last_tag:
            logger.warning("Nothing to untag", path=str(path))
            return None

        try:
            self._mutator.delete_tag(path, last_tag)
        finally:
            self._flush(path)
        return last_tag

    def refresh(self, repo_dir: Path | str) -> RepositoryRecord:
        """Evict and recompute the cached record."""
        path = self._resolve(repo_dir)
        return self._flush(path)

    def create_readme(self, repo_dir: Path | str) -> Path:
        """Write the default README; refuses when one already exists."""
        path = self._resolve(repo_dir)
        readme_path = self._inspector.readme_path(path)
        if readme_path.exists():
            raise ReadmeExistsError(
                f"README already exists: {readme_path}",
                details={"path": str(readme_path)},
            )

        manifest = self._inspector.read_manifest(path)
        name = manifest.get("name") if isinstance(manifest.get("name"), str) else path.name
        description = manifest.get("description")
        if not isinstance(description, str):
            description = NO_DESCRIPTION

        readme_path.write_text(render_readme(name, description), encoding="utf-8")
        self._flush(path)
        logger.info("README created", path=str(readme_path))
        return readme_path

    def normalize_keywords(self, repo_dir: Path | str | None = None) -> dict[str, bool]:
        """Inject default keywords into manifests that have none.

        Applies to one repository, or to every discovered repository when
        ``repo_dir`` is omitted. Maps each path to whether it was changed.
        """
        if repo_dir is None:
            paths = self.discover()
        else:
            paths = [self._resolve(repo_dir)]

        return {str(path): self._normalize_keywords(path) for path in paths}

    def bulk_patch(self) -> BulkOperationResult:
        """Patch-bump every discovered repository, continuing past failures."""
        return self._for_each(lambda path: self.bump(path, BumpKind.PATCH))

    def align(self, tag: str, message: str | None = None) -> BulkOperationResult:
        """Release every discovered repository with the same explicit tag."""
        if not tag or not tag.strip():
            raise ValidationError("A version to align to is required")

        tag = tag.strip()
        return self._for_each(lambda path: self.bump(path, tag=tag, message=message))

    # --- Internals ---

    def _resolve(self, repo_dir: Path | str) -> Path:
        path = Path(repo_dir).expanduser().resolve()
        if not self._scanner.is_repository(path):
            raise RepositoryNotFoundError(
                f"Not a git repository: {path}",
                details={"path": str(path)},
            )
        return path

    def _read(self, path: Path) -> RepositoryRecord:
        computed: list[RepositoryRecord] = []

        def compute() -> RepositoryRecord:
            computed.append(self._inspector.inspect(path))
            return computed[0]

        cached = self._cache.get_or_compute(str(path), compute)
        if computed and computed[0] is cached:
            # Freshly inspected, so the count is already current
            return cached
        return cached.model_copy(
            update={"changed_file_count": self._inspector.changed_file_count(path)}
        )

    def _flush(self, path: Path) -> RepositoryRecord:
        self._cache.invalidate(str(path))
        return self._read(path)

    def _normalize_keywords(self, path: Path) -> bool:
        manifest_path = self._inspector.manifest_path(path)
        manifest = load_manifest(manifest_path)
        if manifest is None or manifest.get("keywords") is not None:
            return False

        manifest["keywords"] = list(self._default_keywords)
        write_manifest(manifest_path, manifest)
        self._flush(path)
        logger.info("Keywords added", path=str(manifest_path))
        return True

    def _for_each(self, operation) -> BulkOperationResult:
        result = BulkOperationResult()
        for path in self.discover():
            try:
                result.succeeded[str(path)] = operation(path)
            except Exception as e:
                # One repository failing never halts the rest
                logger.warning(
                    "Bulk operation failed",
                    path=str(path),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result.failed[str(path)] = str(e)
        logger.info(
            "Bulk operation finished",
            succeeded=len(result.succeeded),
            failed=len(result.failed),
        )
        return result
