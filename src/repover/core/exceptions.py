"""Exception hierarchy for repover."""

from typing import Any


class RepoverError(Exception):
    """Base error for all repover failures.

    Carries a ``details`` mapping that is attached to log events and
    API error responses.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RepoverError):
    """Raised when settings are invalid."""


class ValidationError(RepoverError):
    """Raised when a command receives invalid input."""


class RepositoryNotFoundError(RepoverError):
    """Raised when a targeted directory is not a git repository."""


class ReadmeExistsError(RepoverError):
    """Raised when README generation would overwrite an existing file."""


class GitCommandError(RepoverError):
    """Raised when a required git step fails.

    Steps that completed before the failure are listed in
    ``details["completed_steps"]``; they are not rolled back.
    """

    def __init__(
        self,
        message: str,
        step: str,
        completed_steps: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        merged = {
            "step": step,
            "completed_steps": list(completed_steps or []),
            "returncode": returncode,
            "stderr": stderr,
        }
        merged.update(details or {})
        super().__init__(message, details=merged)
        self.step = step
        self.completed_steps = merged["completed_steps"]
        self.returncode = returncode
        self.stderr = stderr


class VersionFileError(RepoverError):
    """Raised when the package descriptor cannot be read or rewritten."""
