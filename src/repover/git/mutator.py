"""Mutating git operations: release pipeline and tag removal."""

import re
from pathlib import Path

import structlog

from repover.core.exceptions import GitCommandError, VersionFileError
from repover.git.runner import GitRunner

logger = structlog.get_logger(__name__)

_VERSION_PATTERN = re.compile(r"'version' => '(.*)',")


class GitMutator:
    """Commits, tags and pushes repositories.

    A release is an ordered pipeline:
    1. Rewrite the version in the package descriptor (when present)
    2. Stage everything
    3. Commit (tolerated to fail, e.g. when there is nothing to commit)
    4. Create the tag
    5. Push the branch together with tags

    Steps are not transactional. When a required step fails the earlier
    ones stay in place; a failed push leaves the local commit and tag.
    """

    def __init__(
        self,
        runner: GitRunner,
        remote: str = "origin",
        branch: str | None = None,
        version_filename: str = "extension.php",
        default_message: str = "automatic commit",
    ) -> None:
        self._runner = runner
        self._remote = remote
        self._branch = branch
        self._version_filename = version_filename
        self._default_message = default_message

    def update_version_file(self, repo_path: Path, new_version: str) -> bool:
        """Replace the first ``'version' => '...',`` entry in the descriptor.

        Returns False when there is no descriptor or no version entry.
        Non UTF-8 bytes are carried through unchanged.
        """
        version_file = repo_path / self._version_filename
        if not new_version or not version_file.is_file():
            return False

        try:
            contents = version_file.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise VersionFileError(
                f"Cannot read {version_file}: {e}", details={"path": str(version_file)}
            ) from e
        updated, count = _VERSION_PATTERN.subn(
            lambda _: f"'version' => '{new_version}',", contents, count=1
        )
        if not count:
            return False

        try:
            version_file.write_text(updated, encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise VersionFileError(
                f"Cannot write {version_file}: {e}", details={"path": str(version_file)}
            ) from e
        logger.info("Version file updated", path=str(version_file), version=new_version)
        return True

    def current_branch(self, repo_path: Path) -> str:
        result = self._runner.run(repo_path, "rev-parse", "--abbrev-ref", "HEAD")
        return result.lines[0] if result.ok and result.lines else "master"

    def release(self, repo_path: Path | str, tag: str, message: str | None = None) -> list[str]:
        """Run the release pipeline and return the names of completed steps."""
        repo_path = Path(repo_path)
        message = message or self._default_message
        completed: list[str] = []

        if self.update_version_file(repo_path, tag):
            completed.append("version-file")

        self._required(repo_path, "add", completed, "add", "--all")

        commit = self._runner.run(repo_path, "commit", "-a", "-m", message)
        if commit.ok:
            completed.append("commit")
        else:
            logger.warning(
                "Commit skipped",
                path=str(repo_path),
                output=commit.stdout or commit.stderr,
            )

        self._required(repo_path, "tag", completed, "tag", tag)

        branch = self._branch or self.current_branch(repo_path)
        self._required(
            repo_path, "push", completed, "push", "-u", self._remote, branch, "--tags"
        )

        logger.info("Release pushed", path=str(repo_path), tag=tag, branch=branch)
        return completed

    def delete_tag(self, repo_path: Path | str, tag: str) -> None:
        """Delete a local tag; the remote is left untouched."""
        repo_path = Path(repo_path)
        self._runner.run(repo_path, "tag", "-d", tag).check(step="untag")
        logger.info("Tag deleted", path=str(repo_path), tag=tag)

    def _required(
        self, repo_path: Path, step: str, completed: list[str], *args: str
    ) -> None:
        result = self._runner.run(repo_path, *args)
        if not result.ok:
            logger.error(
                "Release step failed",
                path=str(repo_path),
                step=step,
                completed_steps=completed,
                returncode=result.returncode,
            )
            raise GitCommandError(
                f"git {step} failed in {repo_path}: {result.stderr or result.stdout}".strip(),
                step=step,
                completed_steps=completed,
                returncode=result.returncode,
                stderr=result.stderr,
                details={"path": str(repo_path)},
            )
        completed.append(step)
