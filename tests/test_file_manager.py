"""
Tests for reading and writing editor files.
"""

import pytest

from git_editor.file_manager import read_file, read_merge_files, read_text, write_file
from git_editor.models import FileNotFoundInEditorError, GitFileType


class TestReadWrite:
    """Test read_file and write_file."""

    def test_read_detects_type(self, tmp_path):
        git_dir = tmp_path / ".git"
        git_dir.mkdir()
        msg_file = git_dir / "COMMIT_EDITMSG"
        msg_file.write_text("Subject\n", encoding="utf-8")

        content = read_file(msg_file)

        assert content.content == "Subject\n"
        assert content.file_type == GitFileType.COMMIT_MSG
        assert content.path == msg_file

    def test_read_missing_file(self, tmp_path):
        missing = tmp_path / "missing.txt"

        with pytest.raises(FileNotFoundInEditorError) as exc_info:
            read_text(missing)

        assert exc_info.value.path == missing

    def test_write_then_read(self, tmp_path):
        target = tmp_path / "git-rebase-todo"
        write_file(target, "p abc1234 One\n")

        assert target.read_bytes() == b"p abc1234 One\n"
        assert read_file(target).file_type == GitFileType.REBASE_TODO

    def test_write_replaces_content(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("old content that is longer", encoding="utf-8")

        write_file(target, "new")

        assert target.read_text(encoding="utf-8") == "new"

    def test_invalid_utf8_is_replaced(self, tmp_path):
        target = tmp_path / "binary.txt"
        target.write_bytes(b"ok \xff done")

        assert read_text(target) == "ok � done"


class TestReadMergeFiles:
    """Test read_merge_files."""

    def _write(self, path, text):
        path.write_text(text, encoding="utf-8")
        return path

    def test_with_base(self, tmp_path):
        local = self._write(tmp_path / "main_LOCAL.rs", "local")
        remote = self._write(tmp_path / "main_REMOTE.rs", "remote")
        base = self._write(tmp_path / "main_BASE.rs", "base")
        merged = self._write(tmp_path / "main.rs", "merged")

        files = read_merge_files(local, remote, base, merged)

        assert files.local.content == "local"
        assert files.remote.content == "remote"
        assert files.base.content == "base"
        assert files.merged.path == merged
        assert files.language == "rust"

    def test_without_base(self, tmp_path):
        local = self._write(tmp_path / "a_LOCAL.txt", "l")
        remote = self._write(tmp_path / "a_REMOTE.txt", "r")
        merged = self._write(tmp_path / "a.txt", "m")

        files = read_merge_files(local, remote, None, merged)

        assert files.base is None
        assert files.language == "plaintext"

    def test_missing_input(self, tmp_path):
        merged = self._write(tmp_path / "a.py", "m")

        with pytest.raises(FileNotFoundInEditorError):
            read_merge_files(tmp_path / "nope", merged, None, merged)
