"""
Parsing of ``git blame --line-porcelain`` output.
"""

from __future__ import annotations

import logging
import string
from typing import List, Optional

from .models import BlameLine
from .text import split_lines


logger = logging.getLogger(__name__)


SHORT_HASH_LENGTH = 7
SECONDS_PER_DAY = 86400
UNKNOWN_DATE = "unknown"

_HEX_DIGITS = frozenset(string.hexdigits)


def unix_seconds_to_date(seconds: int) -> str:
    """Convert a Unix timestamp to ``YYYY-MM-DD`` in the proleptic Gregorian calendar.

    Uses Howard Hinnant's days-to-civil algorithm so no calendar library or
    local timezone is involved. A timestamp of 0 means git had no author time
    and yields ``"unknown"``.
    """
    if seconds == 0:
        return UNKNOWN_DATE

    # Shift the epoch so that eras start on 0000-03-01
    z = seconds // SECONDS_PER_DAY + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    year = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    if month <= 2:
        year += 1

    return f"{year:04d}-{month:02d}-{day:02d}"


def _is_commit_hash(token: str) -> bool:
    return len(token) >= SHORT_HASH_LENGTH and all(c in _HEX_DIGITS for c in token)


def parse_blame_porcelain(output: str) -> List[BlameLine]:
    """Parse line-porcelain blame output into one :class:`BlameLine` per source line.

    Each block starts with ``<hash> <orig-line> <final-line> [<count>]`` and
    ends with the tab-prefixed source line. Author, time and summary carry
    over from the previous block when git omits them.
    """
    blame_lines: List[BlameLine] = []

    line_number: Optional[int] = None
    commit_hash = ""
    author = ""
    author_time = 0
    summary = ""

    for line in split_lines(output):
        if line.startswith("\t"):
            if line_number is not None:
                blame_lines.append(
                    BlameLine(
                        line_number=line_number,
                        hash=commit_hash,
                        author=author,
                        date=unix_seconds_to_date(author_time),
                        summary=summary,
                    )
                )
            continue

        if line.startswith("author "):
            author = line[len("author ") :]
        elif line.startswith("author-time "):
            author_time = _parse_int(line[len("author-time ") :], 0)
        elif line.startswith("summary "):
            summary = line[len("summary ") :]
        else:
            tokens = line.split()
            if len(tokens) >= 3 and _is_commit_hash(tokens[0]):
                final_line = _parse_int(tokens[2], None)
                if final_line is not None:
                    commit_hash = tokens[0][:SHORT_HASH_LENGTH]
                    line_number = final_line

    logger.debug(f"Parsed blame for {len(blame_lines)} line(s)")
    return blame_lines


def _parse_int(text: str, default: Optional[int]) -> Optional[int]:
    try:
        return int(text.strip())
    except ValueError:
        return default
