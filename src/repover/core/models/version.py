"""Semantic version parsing and the tag bump rule."""

import re
from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_PATCH_LIMIT = 100
DEFAULT_MINOR_LIMIT = 10

_LEADING_DIGITS = re.compile(r"\d+")


class BumpKind(str, Enum):
    """Which version component a bump targets."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


def _coerce_component(value: str) -> int:
    """Coerce a version component to an int.

    Takes the leading decimal digits ("3-rc1" -> 3); anything without
    leading digits becomes 0.
    """
    match = _LEADING_DIGITS.match(value.strip())
    return int(match.group()) if match else 0


class SemanticVersion(BaseModel):
    """A MAJOR.MINOR.PATCH triple."""

    major: int = Field(default=0, ge=0)
    minor: int = Field(default=0, ge=0)
    patch: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @classmethod
    def parse(cls, tag: str) -> "SemanticVersion":
        """Parse a loose ``MAJOR.MINOR[.PATCH]`` tag.

        Missing components default to 0 and malformed ones are coerced
        rather than rejected, so "2.5" parses like "2.5.0".
        """
        parts = [_coerce_component(part) for part in (tag or "").split(".")[:3]]
        parts += [0] * (3 - len(parts))
        major, minor, patch = parts
        return cls(major=major, minor=minor, patch=patch)

    def bump(
        self,
        kind: BumpKind | str = BumpKind.PATCH,
        patch_limit: int = DEFAULT_PATCH_LIMIT,
        minor_limit: int = DEFAULT_MINOR_LIMIT,
    ) -> "SemanticVersion":
        """Return the next version.

        Rules are evaluated in order:
        1. patch bump below ``patch_limit`` increments patch;
        2. patch or minor bump below ``minor_limit`` increments minor;
        3. anything else increments major.
        """
        kind = BumpKind(kind)

        if kind is BumpKind.PATCH and self.patch < patch_limit:
            return SemanticVersion(major=self.major, minor=self.minor, patch=self.patch + 1)

        if kind in (BumpKind.PATCH, BumpKind.MINOR) and self.minor < minor_limit:
            return SemanticVersion(major=self.major, minor=self.minor + 1, patch=0)

        return SemanticVersion(major=self.major + 1, minor=0, patch=0)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def next_tag(
    last_tag: str,
    kind: BumpKind | str = BumpKind.PATCH,
    explicit_tag: str | None = None,
    patch_limit: int = DEFAULT_PATCH_LIMIT,
    minor_limit: int = DEFAULT_MINOR_LIMIT,
) -> str:
    """Compute the tag a bump should create.

    An explicit tag is returned verbatim and skips the bump rule.
    """
    if explicit_tag:
        return explicit_tag

    version = SemanticVersion.parse(last_tag)
    return str(version.bump(kind, patch_limit=patch_limit, minor_limit=minor_limit))
