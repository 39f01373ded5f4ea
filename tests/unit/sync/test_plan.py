"""Tests for copy_mapping.sync.plan -- the skip/copy/remove decisions.

Planning never writes, so every test also checks the filesystem is
unchanged after planning.
"""

from __future__ import annotations

from pathlib import Path

from copy_mapping.core.models import CopyEntry, Strategy
from copy_mapping.sync.plan import ActionKind, plan_copy, plan_delete, walk_self_first


def _tree(root: Path) -> Path:
    (root / "css").mkdir(parents=True)
    (root / "css" / "site.css").write_text("body {}")
    (root / "js" / "vendor").mkdir(parents=True)
    (root / "js" / "vendor" / "lib.js").write_text("lib")
    (root / "index.html").write_text("<html>")
    return root


class TestWalkSelfFirst:
    """walk_self_first() yields directories ahead of their contents."""

    def test_directory_before_children(self, tmp_path: Path) -> None:
        """Each directory precedes its children, siblings in name order."""
        source = _tree(tmp_path / "assets")

        rel = [path.relative_to(source).as_posix() for path in walk_self_first(source)]

        assert rel == [
            "css",
            "css/site.css",
            "index.html",
            "js",
            "js/vendor",
            "js/vendor/lib.js",
        ]


class TestPlanCopyFile:
    """plan_copy() for a single-file source."""

    def test_absent_target_copied(self, tmp_path: Path) -> None:
        """A missing destination file is planned as a copy."""
        source = tmp_path / "a.txt"
        source.write_text("a")
        entry = CopyEntry(source, tmp_path / "out" / "a.txt")

        actions = plan_copy(entry, Strategy.SIMPLE)

        assert [a.kind for a in actions] == [ActionKind.COPY_FILE]
        assert actions[0].source == source
        assert not (tmp_path / "out").exists()

    def test_existing_target_skipped_with_simple(self, tmp_path: Path) -> None:
        """The simple strategy keeps an existing destination file."""
        source = tmp_path / "a.txt"
        source.write_text("a")
        target = tmp_path / "b.txt"
        target.write_text("b")

        actions = plan_copy(CopyEntry(source, target), Strategy.SIMPLE)

        assert [a.kind for a in actions] == [ActionKind.SKIP_EXISTING]
        assert not actions[0].writes

    def test_existing_target_copied_with_force(self, tmp_path: Path) -> None:
        """The force strategy plans an overwrite without touching the file yet."""
        source = tmp_path / "a.txt"
        source.write_text("a")
        target = tmp_path / "b.txt"
        target.write_text("b")

        actions = plan_copy(CopyEntry(source, target), Strategy.FORCE)

        assert [a.kind for a in actions] == [ActionKind.COPY_FILE]
        assert target.read_text() == "b"


class TestPlanCopyDirectory:
    """plan_copy() for a directory source."""

    def test_mirrors_tree(self, tmp_path: Path) -> None:
        """Every directory is ensured and every file copied, in walk order."""
        source = _tree(tmp_path / "assets")
        target = tmp_path / "public" / "assets"

        actions = plan_copy(CopyEntry(source, target), Strategy.SIMPLE)

        assert actions[0].kind is ActionKind.ENSURE_DIR
        assert actions[0].target == target
        planned = [(a.kind, a.target.relative_to(target).as_posix()) for a in actions[1:]]
        assert planned == [
            (ActionKind.ENSURE_DIR, "css"),
            (ActionKind.COPY_FILE, "css/site.css"),
            (ActionKind.COPY_FILE, "index.html"),
            (ActionKind.ENSURE_DIR, "js"),
            (ActionKind.ENSURE_DIR, "js/vendor"),
            (ActionKind.COPY_FILE, "js/vendor/lib.js"),
        ]
        assert not target.exists()

    def test_existing_files_skipped_directories_ensured(self, tmp_path: Path) -> None:
        """Existing files are skipped while existing directories are still ensured."""
        source = _tree(tmp_path / "assets")
        target = tmp_path / "public"
        (target / "css").mkdir(parents=True)
        (target / "css" / "site.css").write_text("custom")

        actions = plan_copy(CopyEntry(source, target), Strategy.SIMPLE)
        by_target = {a.target.relative_to(target).as_posix(): a.kind for a in actions[1:]}

        assert by_target["css"] is ActionKind.ENSURE_DIR
        assert by_target["css/site.css"] is ActionKind.SKIP_EXISTING
        assert by_target["index.html"] is ActionKind.COPY_FILE

    def test_force_overwrites_existing_files(self, tmp_path: Path) -> None:
        """The force strategy never plans a skip."""
        source = _tree(tmp_path / "assets")
        target = tmp_path / "public"
        (target / "css").mkdir(parents=True)
        (target / "css" / "site.css").write_text("custom")

        actions = plan_copy(CopyEntry(source, target), Strategy.FORCE)

        assert ActionKind.SKIP_EXISTING not in {a.kind for a in actions}


class TestPlanDelete:
    """plan_delete() picks file or tree removal."""

    def test_file_removed(self, tmp_path: Path) -> None:
        """A writable file is planned for unlinking."""
        target = tmp_path / "a.txt"
        target.write_text("a")
        assert [a.kind for a in plan_delete(target)] == [ActionKind.REMOVE_FILE]

    def test_directory_removed_as_tree(self, tmp_path: Path) -> None:
        """A directory is planned for recursive removal."""
        assert [a.kind for a in plan_delete(tmp_path)] == [ActionKind.REMOVE_TREE]

    def test_absent_target_still_planned(self, tmp_path: Path) -> None:
        """A missing target is planned as a tree removal that does nothing."""
        assert [a.kind for a in plan_delete(tmp_path / "missing")] == [ActionKind.REMOVE_TREE]
