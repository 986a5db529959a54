from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from agentsync.errors import ConfigError, FileOperationError
from agentsync.models import FrameworkMapping
from agentsync.sync import empty_dir, list_documents, sync_all, verify_targets


def _snapshot(directory: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(directory.iterdir())}


class TestSyncAll:
    def test_replaces_stale_files_and_ignores_non_documents(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")
        write_file("lib/vue/b.md", "# B\n")
        write_file("lib/vue/note.txt", "not an agent")
        write_file("out/vue/old.md", "stale")

        result = sync_all([vue_mapping], project)

        assert sorted(p.name for p in (project / "out/vue").iterdir()) == ["a.md", "b.md"]
        assert result.total == 2
        assert result.entries[0].files == ["a.md", "b.md"]

    def test_copies_bytes_exactly(self, project, vue_mapping, write_file):
        src = project / "lib/vue/raw.md"
        src.parent.mkdir(parents=True)
        src.write_bytes(b"---\r\nname: x\r\n---\r\n\xe2\x9c\x93 body\n")

        sync_all([vue_mapping], project)

        assert (project / "out/vue/raw.md").read_bytes() == src.read_bytes()

    def test_missing_source_is_skipped(self, project):
        mapping = FrameworkMapping("svelte", "library/svelte", "packages/svelte/agents")

        result = sync_all([mapping], project)

        assert result.total == 0
        assert result.entries[0].skipped is True
        assert not (project / "packages/svelte/agents").exists()

    def test_empty_source_clears_target(self, project, vue_mapping, write_file):
        (project / "lib/vue").mkdir(parents=True)
        write_file("out/vue/old.md", "stale")

        result = sync_all([vue_mapping], project)

        assert result.entries[0].count == 0
        assert result.entries[0].skipped is False
        assert list((project / "out/vue").iterdir()) == []

    def test_creates_nested_target(self, project, write_file):
        write_file("library/css/tokens.md", "# Tokens\n")
        mapping = FrameworkMapping("css", "library/css", "packages/design-tools/agents")

        sync_all([mapping], project)

        assert (project / "packages/design-tools/agents/tokens.md").is_file()

    def test_removes_subdirectories_in_target(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")
        write_file("out/vue/nested/deep.md", "stale")

        sync_all([vue_mapping], project)

        assert _snapshot(project / "out/vue") == {"a.md": b"# A\n"}

    def test_source_subdirectories_not_copied(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")
        write_file("lib/vue/drafts/wip.md", "# WIP\n")

        result = sync_all([vue_mapping], project)

        assert result.entries[0].files == ["a.md"]
        assert not (project / "out/vue/drafts").exists()

    def test_idempotent(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")
        write_file("lib/vue/b.md", "# B\n")

        sync_all([vue_mapping], project)
        first = _snapshot(project / "out/vue")
        sync_all([vue_mapping], project)

        assert _snapshot(project / "out/vue") == first

    def test_source_untouched(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")
        write_file("lib/vue/note.txt", "keep me")
        before = _snapshot(project / "lib/vue")

        sync_all([vue_mapping], project)

        assert _snapshot(project / "lib/vue") == before

    def test_entries_in_table_order(self, project, write_file):
        write_file("library/react/r.md", "# R\n")
        write_file("library/vue/v.md", "# V\n")
        mappings = [
            FrameworkMapping("vue", "library/vue", "packages/vue/agents"),
            FrameworkMapping("angular", "library/angular", "packages/angular/agents"),
            FrameworkMapping("react", "library/react", "packages/react/agents"),
        ]

        result = sync_all(mappings, project)

        assert [e.mapping.name for e in result.entries] == ["vue", "angular", "react"]
        assert [e.count for e in result.entries] == [1, 0, 1]
        assert result.total == 2

    def test_copy_failure_raises(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")

        with patch("agentsync.sync.shutil.copy2", side_effect=PermissionError("denied")):
            with pytest.raises(FileOperationError) as exc_info:
                sync_all([vue_mapping], project)

        assert exc_info.value.operation == "copy"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_failure_keeps_earlier_entries(self, project, write_file):
        write_file("library/react/r.md", "# R\n")
        write_file("library/vue/v.md", "# V\n")
        write_file("packages/vue", "a file where a directory should be")
        mappings = [
            FrameworkMapping("react", "library/react", "packages/react/agents"),
            FrameworkMapping("vue", "library/vue", "packages/vue/agents"),
        ]

        with pytest.raises(FileOperationError) as exc_info:
            sync_all(mappings, project)

        assert exc_info.value.operation == "create"
        assert (project / "packages/react/agents/r.md").is_file()


class TestHelpers:
    def test_list_documents_filters_by_extension(self, project, write_file):
        write_file("d/a.md", "")
        write_file("d/b.txt", "")
        (project / "d/c.md").mkdir()

        assert [p.name for p in list_documents(project / "d")] == ["a.md"]

    def test_list_documents_missing_dir_raises(self, project):
        with pytest.raises(FileOperationError):
            list_documents(project / "nope")

    def test_empty_dir_keeps_directory(self, project, write_file):
        write_file("t/a.md", "")
        write_file("t/sub/b.md", "")

        empty_dir(project / "t")

        assert (project / "t").is_dir()
        assert list((project / "t").iterdir()) == []


class TestVerifyTargets:
    def test_reports_counts_and_missing(self, project, vue_mapping, write_file):
        write_file("out/vue/a.md", "")
        write_file("out/vue/b.md", "")
        write_file("out/vue/readme.txt", "")
        missing = FrameworkMapping("react", "lib/react", "out/react")

        statuses = verify_targets([vue_mapping, missing], project)

        assert [(s.mapping.name, s.exists, s.count) for s in statuses] == [
            ("vue", True, 2),
            ("react", False, 0),
        ]

    def test_does_not_create_targets(self, project, vue_mapping):
        verify_targets([vue_mapping], project)

        assert not (project / "out/vue").exists()

    def test_matches_sync_result(self, project, vue_mapping, write_file):
        write_file("lib/vue/a.md", "# A\n")
        write_file("lib/vue/b.md", "# B\n")

        result = sync_all([vue_mapping], project)
        statuses = verify_targets([vue_mapping], project)

        assert statuses[0].count == result.entries[0].count


class TestOverlappingMappings:
    def test_target_over_source_leaves_source_intact(self, project, write_file):
        write_file("lib/vue/a.md", "# A\n")

        with pytest.raises(ConfigError):
            sync_all([FrameworkMapping("vue", "lib/vue", "lib")], project)

        assert (project / "lib/vue/a.md").read_text() == "# A\n"

    def test_checked_before_any_entry_runs(self, project, write_file):
        write_file("library/react/r.md", "# R\n")
        write_file("library/vue/v.md", "# V\n")
        mappings = [
            FrameworkMapping("react", "library/react", "packages/react/agents"),
            FrameworkMapping("vue", "library/vue", "library/vue"),
        ]

        with pytest.raises(ConfigError):
            sync_all(mappings, project)

        assert not (project / "packages/react/agents").exists()
        assert (project / "library/vue/v.md").is_file()
