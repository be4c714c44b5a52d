"""Tests for the command line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from repover.cli import cli
from tests.helpers import remote_tags


@pytest.fixture
def invoke(base_path: Path):
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(cli, ["--base-path", str(base_path), *args])

    return _invoke


@pytest.mark.unit
class TestCLI:
    """Tests for repover commands."""

    def test_list_empty(self, invoke) -> None:
        result = invoke("list")
        assert result.exit_code == 0
        assert "No repositories found." in result.output

    def test_list(self, invoke, make_repo) -> None:
        make_repo("alpha", tag="1.0.0")
        make_repo("bravo")

        result = invoke("list")

        assert result.exit_code == 0
        assert "Found 2 repositories" in result.output
        assert "alpha" in result.output
        assert "1.0.0" in result.output

    def test_show(self, invoke, make_repo) -> None:
        repo = make_repo("alpha", tag="1.0.0", manifest={"name": "vendor/alpha"})
        result = invoke("show", str(repo))
        assert result.exit_code == 0
        assert "vendor/alpha" in result.output
        assert "en:no" in result.output

    def test_show_not_a_repository(self, invoke, tmp_path: Path) -> None:
        result = invoke("show", str(tmp_path))
        assert result.exit_code == 1
        assert "Not a git repository" in result.output

    def test_bump(self, invoke, make_repo) -> None:
        repo = make_repo("alpha", tag="1.0.9")
        result = invoke("bump", str(repo), "--kind", "minor", "-m", "Minor release")
        assert result.exit_code == 0, result.output
        assert "Tagged and pushed 1.1.0" in result.output
        assert "1.1.0" in remote_tags(repo)

    def test_bump_with_limits(self, invoke, make_repo) -> None:
        repo = make_repo("alpha", tag="1.0.2")
        result = invoke("bump", str(repo), "--patch-limit", "2")
        assert "Tagged and pushed 1.1.0" in result.output

    def test_untag(self, invoke, make_repo) -> None:
        repo = make_repo("alpha", tag="1.0.0")
        result = invoke("untag", str(repo))
        assert result.exit_code == 0
        assert "Removed tag 1.0.0" in result.output

    def test_untag_without_tag(self, invoke, make_repo) -> None:
        result = invoke("untag", str(make_repo("alpha")))
        assert result.exit_code == 0
        assert "Repository has no tag." in result.output

    def test_refresh(self, invoke, make_repo) -> None:
        repo = make_repo("alpha", tag="2.0.0")
        result = invoke("refresh", str(repo))
        assert result.exit_code == 0
        assert "[2.0.0]" in result.output

    def test_readme_conflict(self, invoke, make_repo) -> None:
        repo = make_repo("alpha")
        assert invoke("readme", str(repo)).exit_code == 0

        result = invoke("readme", str(repo))

        assert result.exit_code == 1
        assert "README already exists" in result.output

    def test_keywords(self, invoke, make_repo) -> None:
        make_repo("alpha", manifest={"name": "vendor/alpha"})
        make_repo("bravo", manifest={"name": "vendor/bravo", "keywords": ["x"]})

        result = invoke("keywords")

        assert result.exit_code == 0
        assert "updated" in result.output
        assert "unchanged" in result.output

    def test_bulk_patch_reports_failures(self, invoke, make_repo) -> None:
        make_repo("alpha", tag="1.0.0")
        make_repo("bravo", remote=False)

        result = invoke("bulk-patch")

        assert result.exit_code == 1
        assert "1 succeeded, 1 failed" in result.output

    def test_align(self, invoke, make_repo) -> None:
        alpha = make_repo("alpha")
        bravo = make_repo("bravo", tag="0.9.0")

        result = invoke("align", "1.0.0", "--message", "Align")

        assert result.exit_code == 0
        assert "2 succeeded, 0 failed" in result.output
        assert "1.0.0" in remote_tags(alpha)
        assert "1.0.0" in remote_tags(bravo)
