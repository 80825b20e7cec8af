"""
Detection of git editor file types and source languages from paths.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

from .models import GitFileType


FILE_TYPES: Dict[str, GitFileType] = {
    "git-rebase-todo": GitFileType.REBASE_TODO,
    "COMMIT_EDITMSG": GitFileType.COMMIT_MSG,
    "MERGE_MSG": GitFileType.MERGE_MSG,
    "SQUASH_MSG": GitFileType.SQUASH_MSG,
    "TAG_EDITMSG": GitFileType.TAG_MSG,
}

LANGUAGES: Dict[str, str] = {
    "rs": "rust",
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "py": "python",
    "rb": "ruby",
    "go": "go",
    "java": "java",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "cxx": "cpp",
    "cc": "cpp",
    "hpp": "cpp",
    "cs": "csharp",
    "swift": "swift",
    "kt": "kotlin",
    "kts": "kotlin",
    "php": "php",
    "html": "html",
    "htm": "html",
    "css": "css",
    "scss": "scss",
    "less": "less",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "xml": "xml",
    "md": "markdown",
    "markdown": "markdown",
    "sql": "sql",
    "sh": "shell",
    "bash": "shell",
    "zsh": "shell",
    "ps1": "powershell",
    "lua": "lua",
    "r": "r",
    "dart": "dart",
    "zig": "zig",
    "vue": "vue",
    "svelte": "svelte",
}


def detect_file_type(path: Union[str, Path]) -> GitFileType:
    """Detect which git editor file a path is from its base name."""
    return FILE_TYPES.get(Path(path).name, GitFileType.UNKNOWN)


def detect_language(path: Union[str, Path]) -> str:
    """Map a file extension (case-insensitive) to an editor language id."""
    extension = Path(path).suffix.lstrip(".").lower()
    return LANGUAGES.get(extension, "plaintext")
