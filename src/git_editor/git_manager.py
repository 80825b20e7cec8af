"""
Git repository access feeding porcelain output to the parsers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandError

from .blame_parser import parse_blame_porcelain
from .diff_tree_parser import parse_diff_tree_output
from .models import BlameLine, CommitFileInfo, GitRepositoryError, GitStatusResult
from .status_parser import parse_git_status


logger = logging.getLogger(__name__)


def resolve_work_dir(file_path: Union[str, Path]) -> Path:
    """Return the directory to search for a repository from ``file_path``.

    Files inside ``.git`` (``.git/COMMIT_EDITMSG``,
    ``.git/rebase-merge/git-rebase-todo``) belong to the work tree that
    contains that ``.git`` directory.
    """
    path = Path(file_path).absolute()
    for ancestor in path.parents:
        if ancestor.name == ".git":
            return ancestor.parent
    return path if path.is_dir() else path.parent


class GitManager:
    """Runs git commands for one repository and parses their output."""

    def __init__(self, repo_path: Optional[Path] = None) -> None:
        """Initialize Git manager with an optional path inside the repository."""
        self.repo_path = resolve_work_dir(repo_path or Path.cwd())
        self._repo: Optional[Repo] = None

    @classmethod
    def for_file(cls, file_path: Union[str, Path]) -> GitManager:
        """Create a manager for the repository that owns ``file_path``."""
        return cls(resolve_work_dir(file_path))

    @property
    def repo(self) -> Repo:
        """Get the Git repository instance."""
        if self._repo is None:
            self._repo = self._discover_repository()
        return self._repo

    def _discover_repository(self) -> Repo:
        """Discover the Git repository from the configured path or a parent."""
        logger.debug(f"Discovering repository in: {self.repo_path}")
        try:
            repo = Repo(self.repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitRepositoryError(
                f"No Git repository found at {self.repo_path} or any parent directory"
            ) from e
        logger.info(f"Found Git repository at: {repo.working_dir}")
        return repo

    @property
    def repo_root(self) -> str:
        return str(self.repo.working_tree_dir or self.repo.working_dir)

    def get_branch_name(self) -> str:
        """Get the current branch name, or ``HEAD`` when detached."""
        try:
            return self.repo.active_branch.name
        except (TypeError, ValueError, GitCommandError) as e:
            logger.debug(f"No active branch: {e}")
            return "HEAD"

    def _run(self, command: str, *args: str) -> str:
        """Run a git subcommand and return its stdout."""
        try:
            return getattr(self.repo.git, command)(*args)
        except GitCommandError as e:
            logger.error(f"git {command} failed: {e}")
            raise GitRepositoryError(f"git {command} failed: {e.stderr or e}") from e

    def get_status(self) -> GitStatusResult:
        """Get staged, unstaged and untracked files."""
        output = self._run("status", "--porcelain=v1")
        result = parse_git_status(output)
        result.repo_root = self.repo_root
        result.branch_name = self.get_branch_name()
        logger.debug(
            f"Status: {len(result.staged)} staged, {len(result.unstaged)} unstaged, "
            f"{len(result.untracked)} untracked"
        )
        return result

    def stage_file(self, target: str) -> None:
        """Stage a single path."""
        self._run("add", "--", target)
        logger.info(f"Staged {target}")

    def unstage_file(self, target: str) -> None:
        """Remove a single path from the index, keeping worktree changes."""
        self._run("restore", "--staged", "--", target)
        logger.info(f"Unstaged {target}")

    def stage_all(self) -> None:
        """Stage every change in the work tree."""
        self._run("add", "-A")
        logger.info("Staged all changes")

    def diff_file(self, target: str, staged: bool = False) -> str:
        """Get the diff of one path against the index, or HEAD when ``staged``."""
        args: List[str] = ["--cached"] if staged else []
        args.extend(["--", target])
        return self._run("diff", *args)

    def get_commit_files(self, commit_hash: str) -> List[CommitFileInfo]:
        """List the files changed by a commit."""
        output = self._run("diff_tree", "--no-commit-id", "-r", "--name-status", commit_hash)
        return parse_diff_tree_output(output)

    def get_commit_diff(self, commit_hash: str, target: str) -> str:
        """Get the patch a commit applied to one path."""
        return self._run("diff_tree", "-p", commit_hash, "--", target)

    def blame(self, path: str, ref: str = "HEAD") -> List[BlameLine]:
        """Blame every line of ``path`` as of ``ref``."""
        output = self._run("blame", "--line-porcelain", ref, "--", path)
        return parse_blame_porcelain(output)
