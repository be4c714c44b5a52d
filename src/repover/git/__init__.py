"""Git integration module for repover."""

from repover.git.inspector import RepositoryInspector
from repover.git.mutator import GitMutator
from repover.git.runner import GitResult, GitRunner
from repover.git.scanner import RepositoryScanner

__all__ = [
    "GitResult",
    "GitRunner",
    "GitMutator",
    "RepositoryInspector",
    "RepositoryScanner",
]
