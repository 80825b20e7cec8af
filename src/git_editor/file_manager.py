"""
Reading and writing the files git hands to the editor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .detector import detect_file_type, detect_language
from .models import (
    FileAccessError,
    FileContent,
    FileNotFoundInEditorError,
    MergeFileContent,
    MergeFiles,
    PermissionDeniedError,
)


logger = logging.getLogger(__name__)


PathLike = Union[str, Path]


def _wrap_os_error(path: Path, error: OSError) -> FileAccessError:
    if isinstance(error, FileNotFoundError):
        return FileNotFoundInEditorError(path)
    if isinstance(error, PermissionError):
        return PermissionDeniedError(path)
    return FileAccessError(path, f"IO error: {error}")


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file, mapping OS errors to :class:`FileAccessError`."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundInEditorError(file_path)
    try:
        return file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.error(f"Error reading {file_path}: {e}")
        raise _wrap_os_error(file_path, e) from e


def read_file(path: PathLike) -> FileContent:
    """Read a file and detect which kind of git editor file it is."""
    file_path = Path(path)
    content = read_text(file_path)
    file_type = detect_file_type(file_path)
    logger.debug(f"Read {file_path} ({file_type.value}, {len(content)} chars)")
    return FileContent(path=file_path, content=content, file_type=file_type)


def write_file(path: PathLike, content: str) -> None:
    """Write content to a file as UTF-8, replacing what was there."""
    file_path = Path(path)
    try:
        # newline="" keeps the serializer's "\n" separators on every platform
        with open(file_path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as e:
        logger.error(f"Error writing {file_path}: {e}")
        raise _wrap_os_error(file_path, e) from e
    logger.info(f"Wrote {len(content)} chars to {file_path}")


def _read_merge_input(path: PathLike) -> MergeFileContent:
    return MergeFileContent(path=Path(path), content=read_text(path))


def read_merge_files(
    local: PathLike,
    remote: PathLike,
    base: Optional[PathLike],
    merged: PathLike,
) -> MergeFiles:
    """Read the LOCAL, REMOTE, optional BASE and MERGED files of a mergetool run."""
    base_content = None
    if base:
        base_content = _read_merge_input(base)

    return MergeFiles(
        local=_read_merge_input(local),
        remote=_read_merge_input(remote),
        base=base_content,
        merged=_read_merge_input(merged),
        language=detect_language(merged),
    )
