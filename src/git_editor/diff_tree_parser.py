"""
Parsing of ``git diff-tree --no-commit-id -r --name-status`` output.
"""

from __future__ import annotations

from typing import List

from .models import CommitFileInfo
from .text import split_lines


def parse_diff_tree_output(output: str) -> List[CommitFileInfo]:
    """Parse ``STATUS\\tPATH`` and ``STATUS\\tOLD\\tNEW`` lines.

    Similarity scores are dropped from the status (``R100`` becomes ``R``).
    Lines with fewer than two tab-separated fields are skipped.
    """
    files: List[CommitFileInfo] = []

    for line in split_lines(output):
        if not line:
            continue

        fields = line.split("\t")
        if len(fields) < 2:
            continue

        status = fields[0][:1] or "?"

        if status in ("R", "C") and len(fields) >= 3:
            files.append(CommitFileInfo(path=fields[2], original_path=fields[1], status=status))
        else:
            files.append(CommitFileInfo(path=fields[1], status=status))

    return files
