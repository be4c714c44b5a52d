"""Repository record models."""

from typing import Any

from pydantic import BaseModel, Field

UNKNOWN = "unknown"
NO_DESCRIPTION = "no description available"


class RepositoryRecord(BaseModel):
    """Inspection snapshot of one discovered repository.

    ``path`` is the unique key. Every field except ``changed_file_count``
    may be served from the cache; the count is recomputed on each read.
    """

    path: str
    basename: str
    changed_file_count: int = Field(default=0, ge=0)
    last_tag: str = ""
    has_readme: bool = False
    language_availability: dict[str, bool] = Field(default_factory=dict)

    # Manifest-derived fields
    package_type: str = UNKNOWN
    package_name: str = UNKNOWN
    package_authors: list[Any] | str = UNKNOWN
    package_description: str = NO_DESCRIPTION
    package_keywords: list[Any] | str = UNKNOWN

    class Config:
        frozen = True

    @property
    def has_tag(self) -> bool:
        return bool(self.last_tag)


class BulkOperationResult(BaseModel):
    """Outcome of a bulk operation over all discovered repositories."""

    succeeded: dict[str, str] = Field(default_factory=dict)
    failed: dict[str, str] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed
