"""Domain models for repover."""

from repover.core.models.repository import (
    NO_DESCRIPTION,
    UNKNOWN,
    BulkOperationResult,
    RepositoryRecord,
)
from repover.core.models.version import BumpKind, SemanticVersion, next_tag

__all__ = [
    "RepositoryRecord",
    "BulkOperationResult",
    "SemanticVersion",
    "BumpKind",
    "next_tag",
    "UNKNOWN",
    "NO_DESCRIPTION",
]
