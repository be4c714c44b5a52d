"""Git helpers shared by tests."""

import subprocess
from pathlib import Path


def git(repo_path: Path, *args: str) -> str:
    """Run git in a test repository and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo_path: Path, name: str, content: str) -> None:
    """Write a file and commit it."""
    (repo_path / name).write_text(content)
    git(repo_path, "add", "--all")
    git(repo_path, "commit", "-m", f"Update {name}")


def remote_tags(repo_path: Path) -> list[str]:
    """Tag names present on the repository's origin."""
    output = git(repo_path, "ls-remote", "--tags", "origin")
    return [line.split("refs/tags/")[-1] for line in output.splitlines() if line]
