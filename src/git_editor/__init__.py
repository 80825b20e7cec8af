"""
Git Editor - structured editing of the files git hands to its editor.

This package parses merge-conflicted files, rebase todo scripts, commit message
drafts and git porcelain output into plain data, and serializes the editable
formats back into text git accepts.
"""

__version__ = "0.1.0"

from .blame_parser import parse_blame_porcelain, unix_seconds_to_date
from .commit_message import (
    parse_commit_message,
    serialize_commit_message,
    validate_commit_message,
)
from .conflict_parser import parse_conflict_markers
from .detector import detect_file_type, detect_language
from .diff_tree_parser import parse_diff_tree_output
from .models import (
    BlameLine,
    CommitFileInfo,
    CommitMessage,
    ConflictRegion,
    FileStatus,
    GitEditorError,
    GitFileType,
    GitStatusResult,
    ParseConflictsResult,
    ParseError,
    RebaseEntry,
    RebaseTodoFile,
    Trailer,
)
from .rebase_todo import parse_rebase_todo, serialize_rebase_todo
from .status_parser import parse_git_status, parse_porcelain_status

__all__ = [
    "parse_conflict_markers",
    "parse_rebase_todo",
    "serialize_rebase_todo",
    "parse_commit_message",
    "serialize_commit_message",
    "validate_commit_message",
    "parse_porcelain_status",
    "parse_git_status",
    "parse_diff_tree_output",
    "parse_blame_porcelain",
    "unix_seconds_to_date",
    "detect_file_type",
    "detect_language",
    "ConflictRegion",
    "ParseConflictsResult",
    "RebaseEntry",
    "RebaseTodoFile",
    "CommitMessage",
    "Trailer",
    "FileStatus",
    "GitStatusResult",
    "CommitFileInfo",
    "BlameLine",
    "GitFileType",
    "GitEditorError",
    "ParseError",
]
