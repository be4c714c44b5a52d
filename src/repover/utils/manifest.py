"""Reading and writing composer-style package manifests."""

import json
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


def load_manifest(path: Path) -> dict[str, Any] | None:
    """Load a JSON manifest.

    Returns None when the file is missing, unreadable, not valid JSON or
    not a JSON object.
    """
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Unreadable manifest", path=str(path), error=str(e))
        return None

    if not isinstance(data, dict):
        logger.warning("Manifest is not a JSON object", path=str(path))
        return None
    return data


def dump_manifest(data: dict[str, Any]) -> str:
    """Serialize a manifest with 4-space indentation.

    Key order is preserved and slashes are left unescaped.
    """
    return json.dumps(data, indent=4) + "\n"


def write_manifest(path: Path, data: dict[str, Any]) -> None:
    path.write_text(dump_manifest(data), encoding="utf-8")
