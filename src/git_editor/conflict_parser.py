"""
Conflict marker parsing for merge-conflicted files.

Handles both the standard style::

    <<<<<<< HEAD
    ours
    =======
    theirs
    >>>>>>> feature

and the diff3 style, which adds a ``||||||| base`` section between the local
and remote sides. Marker lines may carry any trailing label text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .models import ConflictRegion, ParseConflictsResult
from .text import split_lines


logger = logging.getLogger(__name__)


MARKER_LOCAL = "<<<<<<<"
MARKER_BASE = "|||||||"
MARKER_SEPARATOR = "======="
MARKER_REMOTE = ">>>>>>>"


@dataclass
class _Normal:
    pass


@dataclass
class _InLocal:
    start: int
    local_start: int
    local_lines: List[str] = field(default_factory=list)


@dataclass
class _InBase:
    start: int
    local_start: int
    local_end: int
    local_lines: List[str]
    base_start: int
    base_lines: List[str] = field(default_factory=list)


@dataclass
class _InRemote:
    start: int
    local_start: int
    local_end: int
    local_lines: List[str]
    remote_start: int
    base_start: Optional[int] = None
    base_end: Optional[int] = None
    base_lines: Optional[List[str]] = None
    remote_lines: List[str] = field(default_factory=list)


_State = Union[_Normal, _InLocal, _InBase, _InRemote]


def parse_conflict_markers(content: str) -> ParseConflictsResult:
    """Find every complete conflict region in ``content``.

    Never fails. A region opened with ``<<<<<<<`` but not closed with
    ``>>>>>>>`` before the end of the text is dropped along with its
    buffered lines.
    """
    conflicts: List[ConflictRegion] = []
    state: _State = _Normal()

    for line_num, line in enumerate(split_lines(content)):
        if isinstance(state, _Normal):
            if line.startswith(MARKER_LOCAL):
                state = _InLocal(start=line_num, local_start=line_num + 1)

        elif isinstance(state, _InLocal):
            if line.startswith(MARKER_BASE):
                state = _InBase(
                    start=state.start,
                    local_start=state.local_start,
                    local_end=line_num,
                    local_lines=state.local_lines,
                    base_start=line_num + 1,
                )
            elif line.startswith(MARKER_SEPARATOR):
                state = _InRemote(
                    start=state.start,
                    local_start=state.local_start,
                    local_end=line_num,
                    local_lines=state.local_lines,
                    remote_start=line_num + 1,
                )
            else:
                state.local_lines.append(line)

        elif isinstance(state, _InBase):
            if line.startswith(MARKER_SEPARATOR):
                state = _InRemote(
                    start=state.start,
                    local_start=state.local_start,
                    local_end=state.local_end,
                    local_lines=state.local_lines,
                    remote_start=line_num + 1,
                    base_start=state.base_start,
                    base_end=line_num,
                    base_lines=state.base_lines,
                )
            else:
                state.base_lines.append(line)

        else:
            if line.startswith(MARKER_REMOTE):
                conflicts.append(_close_region(state, len(conflicts), line_num))
                state = _Normal()
            else:
                state.remote_lines.append(line)

    if not isinstance(state, _Normal):
        logger.debug(
            f"Ignoring unterminated conflict region opened at line {state.start + 1}"
        )

    logger.debug(f"Parsed {len(conflicts)} conflict region(s)")
    return ParseConflictsResult(conflicts=conflicts)


def _close_region(state: _InRemote, region_id: int, end_line: int) -> ConflictRegion:
    base_content = None
    if state.base_lines is not None:
        base_content = "\n".join(state.base_lines)

    return ConflictRegion(
        id=region_id,
        start_line=state.start,
        local_start_line=state.local_start,
        local_end_line=state.local_end,
        base_start_line=state.base_start,
        base_end_line=state.base_end,
        remote_start_line=state.remote_start,
        remote_end_line=end_line,
        end_line=end_line,
        local_content="\n".join(state.local_lines),
        base_content=base_content,
        remote_content="\n".join(state.remote_lines),
    )
