"""Thin wrapper around the git executable."""

import subprocess
from pathlib import Path

import structlog
from pydantic import BaseModel

from repover.core.exceptions import GitCommandError

logger = structlog.get_logger(__name__)

# Return codes reported when git never produced one
GIT_NOT_FOUND = 127
GIT_TIMED_OUT = -1


class GitResult(BaseModel):
    """Outcome of one git invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    class Config:
        frozen = True

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def lines(self) -> list[str]:
        return self.stdout.splitlines() if self.stdout else []

    def check(self, step: str | None = None) -> "GitResult":
        """Raise GitCommandError unless the command succeeded."""
        if not self.ok:
            step = step or " ".join(self.args[:1])
            raise GitCommandError(
                f"git {' '.join(self.args)} failed: {self.stderr or self.stdout}".strip(),
                step=step,
                returncode=self.returncode,
                stderr=self.stderr,
            )
        return self


class GitRunner:
    """Runs git commands inside a working directory.

    Never raises for tool failures: a missing binary, a timeout or a
    non-zero exit all come back as a GitResult with ``ok == False``.
    Callers decide whether to coerce that to a default or to fail.
    """

    def __init__(self, git_binary: str = "git", timeout: float | None = 120.0) -> None:
        self._git_binary = git_binary
        self._timeout = timeout

    def run(self, repo_path: Path | str, *args: str) -> GitResult:
        """Run a git command in ``repo_path`` and return its result."""
        try:
            completed = subprocess.run(
                [self._git_binary, *args],
                cwd=repo_path,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            result = GitResult(
                args=args,
                returncode=GIT_TIMED_OUT,
                stderr=f"timed out after {self._timeout}s",
            )
        except OSError as e:
            # Missing git binary or missing working directory
            result = GitResult(args=args, returncode=GIT_NOT_FOUND, stderr=str(e))
        else:
            result = GitResult(
                args=args,
                returncode=completed.returncode,
                stdout=completed.stdout.rstrip(),
                stderr=completed.stderr.strip(),
            )

        if not result.ok:
            logger.debug(
                "git command failed",
                path=str(repo_path),
                args=list(args),
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result
