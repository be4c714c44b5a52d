"""Core domain models and exceptions for repover."""

from repover.core.exceptions import (
    ConfigurationError,
    GitCommandError,
    ReadmeExistsError,
    RepositoryNotFoundError,
    RepoverError,
    ValidationError,
    VersionFileError,
)
from repover.core.models import (
    BulkOperationResult,
    BumpKind,
    RepositoryRecord,
    SemanticVersion,
    next_tag,
)

__all__ = [
    # Models
    "RepositoryRecord",
    "BulkOperationResult",
    "SemanticVersion",
    "BumpKind",
    "next_tag",
    # Exceptions
    "RepoverError",
    "ConfigurationError",
    "ValidationError",
    "RepositoryNotFoundError",
    "ReadmeExistsError",
    "GitCommandError",
    "VersionFileError",
]
