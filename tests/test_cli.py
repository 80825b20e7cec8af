"""
Tests for the CLI interface.
"""

from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from git_editor.cli import cli
from git_editor.models import (
    BlameLine, CommitFileInfo, FileStatus, GitRepositoryError, GitStatusResult,
)


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    """Keep CLI logs out of the home directory."""
    monkeypatch.setenv("GIT_EDITOR_LOG", str(tmp_path / "logs" / "git-editor.log"))
    monkeypatch.delenv("GIT_EDITOR_NO_BACKUP", raising=False)


class TestCLI:
    """Test CLI commands."""

    def setup_method(self):
        """Setup test environment."""
        self.runner = CliRunner()

    def test_cli_help(self):
        """Test CLI help command."""
        result = self.runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Git Editor' in result.output

    def test_cli_version_option(self):
        result = self.runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'git-editor' in result.output

    def test_verbose_with_help(self):
        result = self.runner.invoke(cli, ['--verbose', '--help'])
        assert result.exit_code == 0

    def test_log_file_is_written(self, tmp_path):
        log_file = tmp_path / "custom.log"
        todo_file = tmp_path / "git-rebase-todo"
        todo_file.write_text("pick abc1234 One\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['--log-file', str(log_file), 'todo', str(todo_file)])

        assert result.exit_code == 0
        assert log_file.exists()

    def test_detect_command(self, tmp_path):
        result = self.runner.invoke(cli, ['detect', str(tmp_path / "git-rebase-todo")])
        assert result.exit_code == 0
        assert 'rebase_todo' in result.output

    def test_detect_unknown_shows_language(self, tmp_path):
        result = self.runner.invoke(cli, ['detect', str(tmp_path / "main.rs")])
        assert result.exit_code == 0
        assert 'unknown' in result.output
        assert 'rust' in result.output


class TestConflictsCommand:
    """Test the conflicts command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_no_conflicts(self, tmp_path):
        path = tmp_path / "clean.txt"
        path.write_text("nothing to see\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['conflicts', str(path)])

        assert result.exit_code == 0
        assert 'No conflict markers found' in result.output

    def test_conflicts_found(self, tmp_path):
        path = tmp_path / "conflicted.txt"
        path.write_text(
            "a\n<<<<<<< HEAD\nmine\n=======\ntheirs\n>>>>>>> branch\nb\n", encoding="utf-8"
        )

        result = self.runner.invoke(cli, ['conflicts', str(path)])

        assert result.exit_code == 1
        assert '1 conflict(s)' in result.output
        assert 'mine' in result.output
        assert 'theirs' in result.output

    def test_missing_file(self, tmp_path):
        result = self.runner.invoke(cli, ['conflicts', str(tmp_path / "missing.txt")])

        assert result.exit_code == 1
        assert 'Error reading file' in result.output


class TestTodoCommand:
    """Test the todo command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_show_todo(self, tmp_path):
        path = tmp_path / "git-rebase-todo"
        path.write_text("pick abc1234 First\nexec make test\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['todo', str(path)])

        assert result.exit_code == 0
        assert 'abc1234' in result.output
        assert 'make test' in result.output

    def test_normalize_creates_backup(self, tmp_path):
        path = tmp_path / "git-rebase-todo"
        original = "pick abc1234 First\nexec make\n\n# Commands:\n"
        path.write_text(original, encoding="utf-8")

        result = self.runner.invoke(cli, ['todo', str(path), '--normalize'])

        assert result.exit_code == 0
        assert path.read_text(encoding="utf-8") == "p abc1234 First\nx make\n\n# Commands:\n"
        backup = tmp_path / "git-rebase-todo.backup"
        assert backup.read_text(encoding="utf-8") == original

    def test_normalize_without_backup(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_EDITOR_NO_BACKUP", "1")
        path = tmp_path / "git-rebase-todo"
        path.write_text("pick abc1234 First\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['todo', str(path), '--normalize'])

        assert result.exit_code == 0
        assert not (tmp_path / "git-rebase-todo.backup").exists()

    def test_unknown_command(self, tmp_path):
        path = tmp_path / "git-rebase-todo"
        path.write_text("pick abc1234 First\nbogus def5678 Second\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['todo', str(path)])

        assert result.exit_code == 1
        assert 'Parse error at line 2' in result.output


class TestMessageCommand:
    """Test the message command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_show_message(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("Add parser\n\nBody text\n\nSigned-off-by: Dev <dev@example.com>\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['message', str(path)])

        assert result.exit_code == 0
        assert 'Add parser' in result.output
        assert 'Signed-off-by' in result.output

    def test_validate_ok(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("Short subject\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['message', str(path), '--validate'])

        assert result.exit_code == 0
        assert 'looks good' in result.output

    def test_validate_long_subject(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("x" * 60 + "\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['message', str(path), '--validate'])

        assert result.exit_code == 1
        assert 'Subject is 60 characters' in result.output

    def test_strip_comments(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("Subject\n\nBody\n# Please enter the commit message\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['message', str(path), '--strip-comments'])

        assert result.exit_code == 0
        assert path.read_text(encoding="utf-8") == "Subject\n\nBody\n"
        assert (tmp_path / "COMMIT_EDITMSG.backup").exists()


class TestRepositoryCommands:
    """Test commands backed by GitManager."""

    def setup_method(self):
        self.runner = CliRunner()

    @patch('git_editor.cli.GitManager')
    def test_status_command(self, mock_manager_class):
        mock_manager = Mock()
        mock_manager.get_status.return_value = GitStatusResult(
            staged=[FileStatus(path="staged.txt", index_status="M", worktree_status=" ")],
            untracked=[FileStatus(path="new.txt", index_status="?", worktree_status="?")],
            repo_root="/work/repo",
            branch_name="main",
        )
        mock_manager_class.return_value = mock_manager

        result = self.runner.invoke(cli, ['status'])

        assert result.exit_code == 0
        assert 'staged.txt' in result.output
        assert 'new.txt' in result.output
        assert 'main' in result.output

    @patch('git_editor.cli.GitManager')
    def test_status_clean(self, mock_manager_class):
        mock_manager_class.return_value.get_status.return_value = GitStatusResult(
            repo_root="/work/repo", branch_name="main"
        )

        result = self.runner.invoke(cli, ['status'])

        assert result.exit_code == 0
        assert 'Working tree clean' in result.output

    @patch('git_editor.cli.GitManager')
    def test_status_error(self, mock_manager_class):
        mock_manager_class.return_value.get_status.side_effect = GitRepositoryError("No repo")

        result = self.runner.invoke(cli, ['status'])

        assert result.exit_code == 1
        assert 'No repo' in result.output

    @patch('git_editor.cli.GitManager')
    def test_show_files_command(self, mock_manager_class):
        mock_manager = Mock()
        mock_manager.get_commit_files.return_value = [
            CommitFileInfo(path="src/app.py", status="M"),
            CommitFileInfo(path="new.txt", status="R", original_path="old.txt"),
        ]
        mock_manager_class.return_value = mock_manager

        result = self.runner.invoke(cli, ['show-files', 'abc1234'])

        assert result.exit_code == 0
        mock_manager.get_commit_files.assert_called_once_with('abc1234')
        assert 'src/app.py' in result.output
        assert 'old.txt' in result.output

    @patch('git_editor.cli.GitManager')
    def test_blame_command(self, mock_manager_class):
        mock_manager = Mock()
        mock_manager.blame.return_value = [
            BlameLine(line_number=1, hash="abc1234", author="Alice", date="2023-11-14", summary="Init"),
        ]
        mock_manager_class.return_value = mock_manager

        result = self.runner.invoke(cli, ['blame', 'README.md', '--ref', 'main'])

        assert result.exit_code == 0
        mock_manager.blame.assert_called_once_with('README.md', 'main')
        assert 'Alice' in result.output
        assert '2023-11-14' in result.output


class TestRestoreCommand:
    """Test the restore command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_restore(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("changed\n", encoding="utf-8")
        (tmp_path / "COMMIT_EDITMSG.backup").write_text("original\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['restore', str(path)])

        assert result.exit_code == 0
        assert path.read_text(encoding="utf-8") == "original\n"
        assert not (tmp_path / "COMMIT_EDITMSG.backup").exists()

    def test_restore_without_backup(self, tmp_path):
        path = tmp_path / "COMMIT_EDITMSG"
        path.write_text("changed\n", encoding="utf-8")

        result = self.runner.invoke(cli, ['restore', str(path)])

        assert result.exit_code == 1
        assert 'Error restoring backup' in result.output
