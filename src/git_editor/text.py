"""
Line splitting shared by the parsers.
"""

from __future__ import annotations

from typing import List


def split_lines(text: str) -> List[str]:
    """Split text into lines the way git writes them.

    Only ``\\n`` separates lines; a trailing ``\\r`` is dropped from each line
    and a final newline does not produce an extra empty line. Unlike
    ``str.splitlines`` this leaves form feeds and other Unicode line breaks
    inside the line, where git leaves them too.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
