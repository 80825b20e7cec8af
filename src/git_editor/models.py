"""
Data models for the git editor parsers and their collaborators.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, List, Optional, Tuple


@dataclass
class ConflictRegion:
    """A single conflict site delimited by conflict markers.

    Line numbers are 0-based indices into the parsed text. Section ranges are
    half-open: ``local_start_line`` is the first body line after ``<<<<<<<``
    and ``local_end_line`` is the line of the marker closing the section.
    """

    id: int
    start_line: int
    local_start_line: int
    local_end_line: int
    remote_start_line: int
    remote_end_line: int
    end_line: int
    local_content: str
    remote_content: str
    base_start_line: Optional[int] = None
    base_end_line: Optional[int] = None
    base_content: Optional[str] = None
    resolved: bool = False

    @property
    def is_diff3(self) -> bool:
        """True when the region carried a ``|||||||`` base section."""
        return self.base_content is not None


@dataclass
class ParseConflictsResult:
    """All conflict regions found in a file."""

    conflicts: List[ConflictRegion] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def total_conflicts(self) -> int:
        return len(self.conflicts)


# --- Rebase todo commands ---


@dataclass(frozen=True)
class RebaseCommand:
    """Base class for a git-rebase-todo instruction keyword."""

    keyword: ClassVar[str] = ""
    short_form: ClassVar[str] = ""
    carries_commit: ClassVar[bool] = False


@dataclass(frozen=True)
class Pick(RebaseCommand):
    keyword: ClassVar[str] = "pick"
    short_form: ClassVar[str] = "p"
    carries_commit: ClassVar[bool] = True


@dataclass(frozen=True)
class Reword(RebaseCommand):
    keyword: ClassVar[str] = "reword"
    short_form: ClassVar[str] = "r"
    carries_commit: ClassVar[bool] = True


@dataclass(frozen=True)
class Edit(RebaseCommand):
    keyword: ClassVar[str] = "edit"
    short_form: ClassVar[str] = "e"
    carries_commit: ClassVar[bool] = True


@dataclass(frozen=True)
class Squash(RebaseCommand):
    keyword: ClassVar[str] = "squash"
    short_form: ClassVar[str] = "s"
    carries_commit: ClassVar[bool] = True


@dataclass(frozen=True)
class Fixup(RebaseCommand):
    keyword: ClassVar[str] = "fixup"
    short_form: ClassVar[str] = "f"
    carries_commit: ClassVar[bool] = True


@dataclass(frozen=True)
class Drop(RebaseCommand):
    keyword: ClassVar[str] = "drop"
    short_form: ClassVar[str] = "d"
    carries_commit: ClassVar[bool] = True


@dataclass(frozen=True)
class Exec(RebaseCommand):
    """Run a shell command; the command string is kept verbatim."""

    command: str = ""

    keyword: ClassVar[str] = "exec"
    short_form: ClassVar[str] = "x"


@dataclass(frozen=True)
class Break(RebaseCommand):
    keyword: ClassVar[str] = "break"
    short_form: ClassVar[str] = "b"


@dataclass(frozen=True)
class Label(RebaseCommand):
    label: str = ""

    keyword: ClassVar[str] = "label"
    short_form: ClassVar[str] = "l"


@dataclass(frozen=True)
class Reset(RebaseCommand):
    label: str = ""

    keyword: ClassVar[str] = "reset"
    short_form: ClassVar[str] = "t"


@dataclass(frozen=True)
class Merge(RebaseCommand):
    """``merge [-C <commit>] <label> [# <message>]``."""

    label: str = ""
    commit: Optional[str] = None
    message: Optional[str] = None

    keyword: ClassVar[str] = "merge"
    short_form: ClassVar[str] = "m"


def _new_entry_id() -> str:
    return str(uuid.uuid4())


@dataclass
class RebaseEntry:
    """One instruction line of a rebase todo file.

    ``id`` only identifies the entry while it is being edited; it is never
    written back to the todo file.
    """

    command: RebaseCommand
    commit_hash: str = ""
    message: str = ""
    id: str = field(default_factory=_new_entry_id)


@dataclass
class RebaseTodoFile:
    """Parsed git-rebase-todo: instructions plus the trailing comment block."""

    entries: List[RebaseEntry] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)


# --- Commit messages ---


@dataclass
class Trailer:
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}: {self.value}"


@dataclass
class CommitMessage:
    """Parsed COMMIT_EDITMSG / MERGE_MSG / SQUASH_MSG / TAG_EDITMSG content."""

    subject: str = ""
    body: str = ""
    trailers: List[Trailer] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    diff_content: Optional[str] = None

    @property
    def subject_length(self) -> int:
        return len(self.subject)

    def is_subject_too_long(self, limit: int = 50) -> bool:
        """Check if the subject exceeds the conventional 50 characters."""
        return self.subject_length > limit

    def long_body_lines(self, limit: int = 72) -> List[Tuple[int, int]]:
        """Return (1-based line number, length) for body lines over ``limit``."""
        return [
            (number, len(line))
            for number, line in enumerate(self.body.splitlines(), start=1)
            if len(line) > limit
        ]


@dataclass
class CommitValidation:
    """Result of checking a commit message against line-length conventions."""

    is_valid: bool
    subject_too_long: bool
    subject_length: int
    long_body_lines: List[Tuple[int, int]] = field(default_factory=list)


# --- Porcelain output ---


@dataclass
class FileStatus:
    """One path from ``git status --porcelain=v1``."""

    path: str
    index_status: str
    worktree_status: str
    original_path: Optional[str] = None


@dataclass
class GitStatusResult:
    """Working tree status split by category."""

    staged: List[FileStatus] = field(default_factory=list)
    unstaged: List[FileStatus] = field(default_factory=list)
    untracked: List[FileStatus] = field(default_factory=list)
    repo_root: str = ""
    branch_name: str = ""

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.unstaged or self.untracked)


@dataclass
class CommitFileInfo:
    """One file changed by a commit, from ``git diff-tree --name-status``."""

    path: str
    status: str
    original_path: Optional[str] = None


@dataclass
class BlameLine:
    """Blame information for a single line of the final file."""

    line_number: int
    hash: str
    author: str
    date: str
    summary: str


# --- Files ---


class GitFileType(Enum):
    """Kinds of file git hands to its configured editor."""

    REBASE_TODO = "rebase_todo"
    COMMIT_MSG = "commit_msg"
    MERGE_MSG = "merge_msg"
    SQUASH_MSG = "squash_msg"
    TAG_MSG = "tag_msg"
    UNKNOWN = "unknown"

    @property
    def is_commit_message(self) -> bool:
        return self in (
            GitFileType.COMMIT_MSG,
            GitFileType.MERGE_MSG,
            GitFileType.SQUASH_MSG,
            GitFileType.TAG_MSG,
        )


@dataclass
class FileContent:
    """A file read from disk together with its detected type."""

    path: Path
    content: str
    file_type: GitFileType = GitFileType.UNKNOWN


@dataclass
class MergeFileContent:
    path: Path
    content: str


@dataclass
class MergeFiles:
    """The inputs ``git mergetool`` passes to an external merge tool."""

    local: MergeFileContent
    remote: MergeFileContent
    merged: MergeFileContent
    base: Optional[MergeFileContent] = None
    language: str = "plaintext"


# --- Errors ---


class GitEditorError(Exception):
    """Base exception for git editor operations."""

    pass


class ParseError(GitEditorError):
    """Raised when a rebase todo line cannot be understood."""

    def __init__(self, line: int, message: str) -> None:
        self.line = line
        self.message = message
        super().__init__(f"Parse error at line {line}: {message}")


class FileAccessError(GitEditorError):
    """Exception raised when a file cannot be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)


class FileNotFoundInEditorError(FileAccessError):
    """Exception raised when an expected file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"File not found: {path}")


class PermissionDeniedError(FileAccessError):
    """Exception raised when the OS refuses access to a file."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Permission denied: {path}")


class GitRepositoryError(GitEditorError):
    """Exception raised for Git repository related errors."""

    pass
