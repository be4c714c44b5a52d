"""Repository discovery under configured base paths."""

from collections.abc import Iterable
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

GIT_MARKER = ".git"


class RepositoryScanner:
    """Finds git repositories among the immediate children of base paths."""

    def __init__(self, base_paths: Iterable[Path | str], marker: str = GIT_MARKER) -> None:
        self._base_paths = [Path(path) for path in base_paths]
        self._marker = marker

    @property
    def base_paths(self) -> list[Path]:
        return list(self._base_paths)

    def is_repository(self, path: Path | str) -> bool:
        """Check for the marker; it may be a directory or a gitfile."""
        return (Path(path) / self._marker).exists()

    def discover(self) -> list[Path]:
        """Return discovered repositories, de-duplicated and sorted by path."""
        found: dict[str, Path] = {}
        for base_path in self._base_paths:
            for child in self._list_directories(base_path):
                try:
                    if not self.is_repository(child):
                        continue
                    resolved = child.resolve()
                except OSError as e:
                    logger.debug("Skipping unreadable directory", path=str(child), error=str(e))
                    continue
                found[str(resolved)] = resolved

        repositories = [found[key] for key in sorted(found)]
        logger.debug("Repositories discovered", count=len(repositories))
        return repositories

    @staticmethod
    def _list_directories(base_path: Path) -> list[Path]:
        """List child directories; missing or unreadable paths yield nothing."""
        try:
            return [child for child in base_path.iterdir() if child.is_dir()]
        except OSError as e:
            logger.debug("Skipping base path", path=str(base_path), error=str(e))
            return []
