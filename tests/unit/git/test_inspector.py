"""Tests for repository inspection."""

import json
from pathlib import Path

import pytest

from repover.core.models.repository import NO_DESCRIPTION, UNKNOWN
from repover.git.inspector import RepositoryInspector
from repover.git.runner import GitRunner
from tests.helpers import git


@pytest.fixture
def inspector() -> RepositoryInspector:
    return RepositoryInspector(GitRunner())


@pytest.mark.unit
class TestChangedFileCount:
    """Tests for changed file counting."""

    def test_clean_repository(self, inspector, make_repo) -> None:
        assert inspector.changed_file_count(make_repo("alpha")) == 0

    def test_modified_tracked_file(self, inspector, make_repo) -> None:
        repo = make_repo("alpha")
        (repo / "src.txt").write_text("changed\n")
        assert inspector.changed_file_count(repo) == 1

    def test_staged_modification(self, inspector, make_repo) -> None:
        repo = make_repo("alpha")
        (repo / "src.txt").write_text("changed\n")
        git(repo, "add", "src.txt")
        assert inspector.changed_file_count(repo) == 1

    def test_untracked_files_not_counted(self, inspector, make_repo) -> None:
        repo = make_repo("alpha")
        (repo / "new.txt").write_text("new\n")
        assert inspector.changed_file_count(repo) == 0

    def test_git_failure_counts_zero(self, tmp_path: Path) -> None:
        inspector = RepositoryInspector(GitRunner(git_binary="definitely-not-git-binary"))
        assert inspector.changed_file_count(tmp_path) == 0


@pytest.mark.unit
class TestLastTag:
    """Tests for last tag lookup."""

    def test_tagged(self, inspector, make_repo) -> None:
        assert inspector.last_tag(make_repo("alpha", tag="1.2.3")) == "1.2.3"

    def test_nearest_tag_after_new_commits(self, inspector, make_repo) -> None:
        repo = make_repo("alpha", tag="1.2.3")
        (repo / "src.txt").write_text("more\n")
        git(repo, "commit", "-am", "More")
        assert inspector.last_tag(repo) == "1.2.3"

    def test_untagged(self, inspector, make_repo) -> None:
        assert inspector.last_tag(make_repo("alpha")) == ""


@pytest.mark.unit
class TestInspect:
    """Tests for full inspection."""

    def test_record_from_manifest(self, inspector, make_repo) -> None:
        manifest = {
            "name": "sanatorium/alpha",
            "type": "platform-extension",
            "description": "Alpha extension",
            "authors": [{"name": "Jane", "email": "jane@example.com"}],
            "keywords": ["platform"],
        }
        repo = make_repo("alpha", tag="0.3.0", manifest=manifest)
        (repo / "README.md").write_text("# Alpha\n")
        (repo / "lang" / "en").mkdir(parents=True)

        record = inspector.inspect(repo)

        assert record.path == str(repo)
        assert record.basename == "alpha"
        assert record.last_tag == "0.3.0"
        assert record.has_readme is True
        assert record.language_availability == {"en": True, "cs": False}
        assert record.package_name == "sanatorium/alpha"
        assert record.package_type == "platform-extension"
        assert record.package_description == "Alpha extension"
        assert record.package_authors == manifest["authors"]
        assert record.package_keywords == ["platform"]

    def test_missing_manifest_uses_defaults(self, inspector, make_repo) -> None:
        record = inspector.inspect(make_repo("alpha"))
        assert record.has_readme is False
        assert record.package_name == UNKNOWN
        assert record.package_type == UNKNOWN
        assert record.package_authors == UNKNOWN
        assert record.package_keywords == UNKNOWN
        assert record.package_description == NO_DESCRIPTION

    def test_invalid_manifest_uses_defaults(self, inspector, make_repo) -> None:
        repo = make_repo("alpha")
        (repo / "composer.json").write_text("{not json")
        record = inspector.inspect(repo)
        assert record.package_name == UNKNOWN
        assert record.package_description == NO_DESCRIPTION

    def test_partial_manifest(self, inspector, make_repo) -> None:
        repo = make_repo("alpha", manifest={"name": "sanatorium/alpha"})
        record = inspector.inspect(repo)
        assert record.package_name == "sanatorium/alpha"
        assert record.package_description == NO_DESCRIPTION
        assert record.package_keywords == UNKNOWN

    def test_custom_locales(self, make_repo) -> None:
        repo = make_repo("alpha")
        (repo / "lang" / "de").mkdir(parents=True)
        inspector = RepositoryInspector(GitRunner(), locales=["de"])
        assert inspector.inspect(repo).language_availability == {"de": True}

    def test_read_manifest_empty_when_absent(self, inspector, tmp_path: Path) -> None:
        assert inspector.read_manifest(tmp_path) == {}

    def test_read_manifest(self, inspector, tmp_path: Path) -> None:
        (tmp_path / "composer.json").write_text(json.dumps({"name": "a/b"}))
        assert inspector.read_manifest(tmp_path) == {"name": "a/b"}
