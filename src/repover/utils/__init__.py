"""Utility helpers for repover."""

from repover.utils.manifest import dump_manifest, load_manifest, write_manifest
from repover.utils.readme import README_TEMPLATE, render_readme

__all__ = [
    "load_manifest",
    "dump_manifest",
    "write_manifest",
    "README_TEMPLATE",
    "render_readme",
]
