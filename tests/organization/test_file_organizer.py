"""Tests for the file organizer."""

import shutil
from datetime import datetime
from unittest.mock import patch

import pytest

from tidy_tools.core.types import ClassificationMode, DateGranularity, FailureKind
from tidy_tools.organization import (
    FileJournal,
    FileOrganizer,
    MemoryJournal,
    OrganizationStrategy,
    OrganizerConfig,
    parse_name_list,
    should_process,
    undo,
)
from tidy_tools.shared import build_extension_table


def make_organizer(journal=None, **overrides) -> FileOrganizer:
    """Build an organizer with the tidy_ prefix and an in-memory journal."""
    strategy_fields = {
        key: overrides.pop(key)
        for key in list(overrides)
        if key
        in (
            "mode",
            "date_granularity",
            "full_extension",
            "case_sensitive",
            "quiet",
            "no_ext_folder",
            "category_table",
        )
    }
    strategy = OrganizationStrategy(folder_prefix="tidy_", **strategy_fields)
    config = OrganizerConfig(strategy=strategy, **overrides)
    if journal is None and not config.dry_run:
        journal = MemoryJournal()
    return FileOrganizer(config, journal=journal)


def names(directory):
    """Sorted entry names of a directory."""
    return sorted(p.name for p in directory.iterdir())


class TestNameFilters:
    """Test include/exclude filtering."""

    def test_parse_name_list(self):
        """Test comma-separated lists are split and trimmed."""
        assert parse_name_list(" jpg, .png ,,notes.txt") == frozenset(
            {"jpg", ".png", "notes.txt"}
        )
        assert parse_name_list("") == frozenset()
        assert parse_name_list(None) == frozenset()

    def test_no_filters(self):
        """Test every visible file passes without filters."""
        assert should_process("photo.jpg")
        assert should_process("Makefile")

    def test_hidden_files_skipped(self):
        """Test hidden files are skipped by default."""
        assert not should_process(".bashrc")
        assert not should_process(".hidden.txt", include={"txt"})

    def test_hidden_file_named_in_include(self):
        """Test an exact include brings a hidden file back."""
        assert should_process(".bashrc", include={".bashrc"})

    @pytest.mark.parametrize("key", ["jpg", ".jpg", "photo.jpg"])
    def test_exclude(self, key):
        """Test excludes match extensions with or without a dot, or names."""
        assert not should_process("photo.jpg", exclude={key})
        assert should_process("doc.pdf", exclude={key})

    def test_include_restricts(self):
        """Test a non-empty include list restricts the run."""
        assert should_process("photo.jpg", include={"jpg"})
        assert not should_process("doc.pdf", include={"jpg"})

    def test_include_all(self):
        """Test "." includes every visible file."""
        assert should_process("doc.pdf", include={"."})
        assert not should_process(".env", include={"."})

    def test_exclude_wins(self):
        """Test an excluded file stays skipped even when included."""
        assert not should_process("photo.jpg", include={"."}, exclude={"jpg"})


class TestFileOrganizer:
    """Test organizing a directory."""

    def test_requires_journal_for_live_run(self):
        """Test a live run without a journal is refused."""
        with pytest.raises(ValueError):
            FileOrganizer(OrganizerConfig())

    def test_missing_root(self, tmp_path):
        """Test a missing root is a fatal error."""
        organizer = make_organizer()

        with pytest.raises(OSError):
            organizer.organize(tmp_path / "missing")

    def test_organize_by_extension(self, temp_dir, make_file):
        """Test files move into prefixed extension folders."""
        make_file("a.jpg", "a")
        make_file("b.JPG", "b")
        make_file("c.pdf", "c")
        make_file("README")
        make_file(".hidden")

        result = make_organizer().organize(temp_dir)

        assert result.moved == 3
        assert result.skipped == 2
        assert result.failures == []
        assert names(temp_dir / "tidy_jpg") == ["a.jpg", "b.JPG"]
        assert names(temp_dir / "tidy_pdf") == ["c.pdf"]
        assert (temp_dir / "README").exists()
        assert (temp_dir / ".hidden").exists()
        assert sorted(p.name for p in result.created_folders) == ["tidy_jpg", "tidy_pdf"]

    def test_organize_quiet_case_sensitive(self, temp_dir, make_file):
        """Test quiet naming and case-sensitive extensions."""
        make_file("a.jpg")
        make_file("b.JPG")

        make_organizer(quiet=True, case_sensitive=True).organize(temp_dir)

        assert names(temp_dir / "jpg") == ["a.jpg"]
        assert names(temp_dir / "JPG") == ["b.JPG"]

    def test_organize_no_extension_folder(self, temp_dir, make_file):
        """Test files without an extension go to the configured folder."""
        make_file("Makefile")

        result = make_organizer(no_ext_folder="misc").organize(temp_dir)

        assert result.moved == 1
        assert (temp_dir / "misc" / "Makefile").exists()

    def test_organize_by_category(self, temp_dir, make_file):
        """Test category mode with unknown extensions falling back."""
        make_file("photo.png")
        make_file("song.mp3")
        make_file("data.xyz")

        make_organizer(
            mode=ClassificationMode.CATEGORY, category_table=build_extension_table()
        ).organize(temp_dir)

        assert (temp_dir / "Images" / "photo.png").exists()
        assert (temp_dir / "Audio" / "song.mp3").exists()
        assert (temp_dir / "xyz" / "data.xyz").exists()

    def test_organize_by_date(self, temp_dir, make_file):
        """Test date mode uses the modification time."""
        make_file("a.txt", mtime=datetime(2024, 3, 15, 12, 0))
        make_file("b.txt", mtime=datetime(2023, 12, 1, 12, 0))

        make_organizer(
            mode=ClassificationMode.DATE, date_granularity=DateGranularity.MONTH
        ).organize(temp_dir)

        assert (temp_dir / "2024-03" / "a.txt").exists()
        assert (temp_dir / "2023-12" / "b.txt").exists()

    def test_dry_run_changes_nothing(self, temp_dir, make_file):
        """Test dry-run reports moves but leaves the disk untouched."""
        make_file("a.jpg")
        make_file("b.pdf")
        before = names(temp_dir)

        result = make_organizer(dry_run=True).organize(temp_dir)

        assert result.dry_run
        assert result.moved == 2
        assert names(temp_dir) == before
        assert [a.target_path for a in result.actions] == [
            temp_dir / "tidy_jpg" / "a.jpg",
            temp_dir / "tidy_pdf" / "b.pdf",
        ]
        assert len(result.created_folders) == 2

    def test_dry_run_writes_no_journal(self, temp_dir, make_file):
        """Test dry-run leaves no journal behind."""
        make_file("a.jpg")
        journal = FileJournal.for_directory(temp_dir)

        make_organizer(journal=journal, dry_run=True).organize(temp_dir)

        assert not journal.exists()

    def test_dry_run_previews_distinct_destinations(self, temp_dir, make_file):
        """Test clashing files in a preview get different names."""
        make_file("tidy_jpg/photo.jpg")
        make_file("photo.jpg")
        make_file("sub/photo.jpg")

        result = make_organizer(dry_run=True, recursive=True).organize(temp_dir)

        targets = [a.target_path for a in result.actions]
        assert len(targets) == len(set(targets)) == 2
        assert result.already_in_place == 1

    def test_collision_gets_suffix(self, temp_dir, make_file):
        """Test an occupied destination is never overwritten."""
        make_file("tidy_txt/notes.txt", "old")
        make_file("notes.txt", "new")

        result = make_organizer().organize(temp_dir)

        assert result.moved == 1
        assert (temp_dir / "tidy_txt" / "notes.txt").read_text() == "old"
        assert (temp_dir / "tidy_txt" / "notes (1).txt").read_text() == "new"

    def test_directories_left_alone(self, temp_dir, make_file):
        """Test subdirectories are not moved in flat mode."""
        make_file("sub/inner.jpg")
        make_file("top.jpg")

        result = make_organizer().organize(temp_dir)

        assert result.moved == 1
        assert (temp_dir / "sub" / "inner.jpg").exists()

    def test_recursive(self, temp_dir, make_file):
        """Test recursive mode collects files from every level."""
        make_file("top.jpg")
        make_file("a/b/deep.jpg")

        result = make_organizer(recursive=True).organize(temp_dir)

        assert result.moved == 2
        assert names(temp_dir / "tidy_jpg") == ["deep.jpg", "top.jpg"]

    def test_rerun_is_idempotent(self, temp_dir, make_file):
        """Test a second recursive run leaves organized files in place."""
        make_file("a.jpg")
        make_file("b.pdf")
        make_organizer(recursive=True).organize(temp_dir)

        result = make_organizer(recursive=True).organize(temp_dir)

        assert result.moved == 0
        assert result.already_in_place == 2
        assert names(temp_dir / "tidy_jpg") == ["a.jpg"]

    def test_target_directory(self, tmp_path, temp_dir, make_file):
        """Test folders are created under a separate target."""
        make_file("a.jpg")
        target = tmp_path / "sorted"

        result = make_organizer(target_directory=target).organize(temp_dir)

        assert result.target_directory == target
        assert (target / "tidy_jpg" / "a.jpg").exists()
        assert not (temp_dir / "tidy_jpg").exists()

    def test_relative_target_is_under_root(self, temp_dir, make_file):
        """Test a relative target is resolved against the root."""
        make_file("a.jpg")

        make_organizer(target_directory="out").organize(temp_dir)

        assert (temp_dir / "out" / "tidy_jpg" / "a.jpg").exists()

    def test_recursive_skips_target_inside_root(self, temp_dir, make_file):
        """Test files already under a nested target are not collected again."""
        make_file("out/tidy_jpg/old.jpg")
        make_file("new.jpg")

        result = make_organizer(
            recursive=True, target_directory=temp_dir / "out"
        ).organize(temp_dir)

        assert result.moved == 1
        assert result.already_in_place == 0
        assert names(temp_dir / "out" / "tidy_jpg") == ["new.jpg", "old.jpg"]

    def test_include_and_exclude(self, temp_dir, make_file):
        """Test filters limit what is moved."""
        make_file("a.jpg")
        make_file("b.png")
        make_file("c.pdf")

        result = make_organizer(
            include=frozenset({"jpg", ".png"}), exclude=frozenset({"b.png"})
        ).organize(temp_dir)

        assert result.moved == 1
        assert result.skipped == 2
        assert (temp_dir / "tidy_jpg" / "a.jpg").exists()

    def test_journal_file_never_moved(self, temp_dir, make_file):
        """Test the journal in the root is not organized."""
        make_file("a.txt")
        journal = FileJournal.for_directory(temp_dir, name="tidy_log.txt")

        make_organizer(journal=journal, journal_name="tidy_log.txt").organize(temp_dir)

        assert (temp_dir / "tidy_log.txt").exists()
        assert not (temp_dir / "tidy_txt" / "tidy_log.txt").exists()

    def test_moves_are_journaled(self, temp_dir, make_file):
        """Test every move is recorded in order."""
        make_file("a.jpg")
        make_file("b.pdf")
        journal = MemoryJournal()

        result = make_organizer(journal=journal).organize(temp_dir)

        assert journal.read_all() == result.actions

    def test_undo_restores_layout(self, temp_dir, make_file):
        """Test organize followed by undo restores every file."""
        make_file("a.jpg", "a")
        make_file("b.pdf", "b")
        make_file("c.tar.gz", "c")
        journal = FileJournal.for_directory(temp_dir)

        make_organizer(journal=journal).organize(temp_dir)
        result = undo(journal)

        assert result.restored == 3
        assert (temp_dir / "a.jpg").read_text() == "a"
        assert (temp_dir / "b.pdf").read_text() == "b"
        assert (temp_dir / "c.tar.gz").read_text() == "c"
        assert not journal.exists()

    def test_move_failure_is_recorded(self, temp_dir, make_file):
        """Test a failed move is reported and the run continues."""
        bad = make_file("a.jpg")
        make_file("b.jpg")
        real_move = shutil.move

        def flaky_move(src, dst):
            if src == str(bad):
                raise PermissionError("denied")
            return real_move(src, dst)

        journal = MemoryJournal()
        with patch(
            "tidy_tools.organization.file_organizer.shutil.move", side_effect=flaky_move
        ):
            result = make_organizer(journal=journal).organize(temp_dir)

        assert result.moved == 1
        assert result.failed == 1
        assert result.failures[0].kind == FailureKind.MOVE
        assert result.failures[0].path == bad
        assert bad.exists()
        assert len(journal.read_all()) == 1

    def test_progress_callback(self, temp_dir, make_file):
        """Test on_item sees every candidate."""
        make_file("a.jpg")
        make_file(".hidden")
        seen = []

        make_organizer().organize(temp_dir, on_item=seen.append)

        assert sorted(p.name for p in seen) == [".hidden", "a.jpg"]

    def test_recursive_with_ancestor_target(self, tmp_path, temp_dir, make_file):
        """Test a target above the root does not hide the root's subdirectories."""
        make_file("top.jpg")
        make_file("sub/deep.jpg")

        result = make_organizer(recursive=True, target_directory=tmp_path).organize(
            temp_dir
        )

        assert result.moved == 2
        assert names(tmp_path / "tidy_jpg") == ["deep.jpg", "top.jpg"]

    def test_symlinked_directory_is_moved(self, temp_dir, make_file):
        """Test a link to a directory is organized like any other entry."""
        make_file("real/inner.txt")
        (temp_dir / "shots.lnk").symlink_to(temp_dir / "real", target_is_directory=True)

        result = make_organizer().organize(temp_dir)

        assert result.moved == 1
        moved = temp_dir / "tidy_lnk" / "shots.lnk"
        assert moved.is_symlink()
        assert (temp_dir / "real" / "inner.txt").exists()

    def test_unrecordable_name_left_in_place(self, temp_dir, make_file):
        """Test a file whose path cannot be journaled is not moved."""
        odd = make_file("a|b.txt", "odd")
        make_file("c.txt", "plain")
        journal = FileJournal.for_directory(temp_dir)

        result = make_organizer(journal=journal).organize(temp_dir)

        assert result.moved == 1
        assert result.failed == 1
        assert result.failures[0].kind == FailureKind.JOURNAL
        assert result.failures[0].path == odd
        assert odd.read_text() == "odd"

        restored = undo(journal)

        assert restored.restored == 1
        assert restored.failures == []
        assert odd.read_text() == "odd"
        assert (temp_dir / "c.txt").read_text() == "plain"
