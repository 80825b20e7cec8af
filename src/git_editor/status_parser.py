"""
Parsing of ``git status --porcelain=v1`` output.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .models import FileStatus, GitStatusResult
from .text import split_lines


logger = logging.getLogger(__name__)


RENAME_SEPARATOR = " -> "
UNCHANGED = " "
UNTRACKED = "?"


def parse_porcelain_line(line: str) -> Optional[FileStatus]:
    """Parse one ``XY path`` line; lines shorter than 4 characters yield None.

    For renames and copies the path field reads ``old -> new``.
    """
    if len(line) < 4:
        return None

    index_status = line[0]
    worktree_status = line[1]
    path = line[3:]
    original_path = None

    if index_status in ("R", "C") and RENAME_SEPARATOR in path:
        original_path, path = path.split(RENAME_SEPARATOR, 1)

    return FileStatus(
        path=path,
        original_path=original_path,
        index_status=index_status,
        worktree_status=worktree_status,
    )


def _is_change(code: str) -> bool:
    return code not in (UNCHANGED, UNTRACKED)


def parse_porcelain_status(
    output: str,
) -> Tuple[List[FileStatus], List[FileStatus], List[FileStatus]]:
    """Split porcelain output into staged, unstaged and untracked entries.

    A line with both an index and a worktree change (``MM``) produces one
    staged and one unstaged entry for the same path.

    Returns:
        Tuple of (staged, unstaged, untracked)
    """
    staged: List[FileStatus] = []
    unstaged: List[FileStatus] = []
    untracked: List[FileStatus] = []

    for line in split_lines(output):
        if not line:
            continue

        status = parse_porcelain_line(line)
        if status is None:
            logger.debug(f"Skipping short porcelain line: {line!r}")
            continue

        if status.index_status == UNTRACKED and status.worktree_status == UNTRACKED:
            untracked.append(status)
            continue

        if _is_change(status.index_status):
            staged.append(
                FileStatus(
                    path=status.path,
                    original_path=status.original_path,
                    index_status=status.index_status,
                    worktree_status=UNCHANGED,
                )
            )
        if _is_change(status.worktree_status):
            unstaged.append(
                FileStatus(
                    path=status.path,
                    index_status=UNCHANGED,
                    worktree_status=status.worktree_status,
                )
            )

    return staged, unstaged, untracked


def parse_git_status(output: str) -> GitStatusResult:
    """Parse porcelain output into a :class:`GitStatusResult`."""
    staged, unstaged, untracked = parse_porcelain_status(output)
    return GitStatusResult(staged=staged, unstaged=unstaged, untracked=untracked)
