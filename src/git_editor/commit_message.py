"""
Commit message parsing, serialization and validation.

Handles COMMIT_EDITMSG, MERGE_MSG, SQUASH_MSG and TAG_EDITMSG content: a
subject line, an optional body, trailing ``Key: Value`` trailers, ``#``
comment lines and, in verbose mode, a diff below the scissors line.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .models import CommitMessage, CommitValidation, Trailer
from .text import split_lines


logger = logging.getLogger(__name__)


SCISSORS_LINE = "# ------------------------ >8 ------------------------"

SUBJECT_MAX_LENGTH = 50
BODY_LINE_MAX_LENGTH = 72

KNOWN_TRAILER_KEYS = (
    "Signed-off-by",
    "Co-authored-by",
    "Reviewed-by",
    "Acked-by",
    "Tested-by",
    "Reported-by",
    "Fixes",
    "Closes",
    "Refs",
    "See-also",
    "Cc",
)

_KNOWN_KEYS_LOWER = frozenset(key.lower() for key in KNOWN_TRAILER_KEYS)
_CUSTOM_KEY_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")


def is_valid_trailer_key(key: str) -> bool:
    """Known keys match case-insensitively; custom keys must look like ``Word-word``."""
    if key.lower() in _KNOWN_KEYS_LOWER:
        return True
    return _CUSTOM_KEY_RE.fullmatch(key) is not None


def parse_trailer_line(line: str) -> Optional[Trailer]:
    """Parse ``Key: Value``; returns None unless the key is valid and the value non-empty."""
    key, sep, value = line.strip().partition(":")
    if not sep:
        return None

    key = key.strip()
    value = value.strip()
    if value and is_valid_trailer_key(key):
        return Trailer(key=key, value=value)
    return None


def extract_trailers(paragraph: str) -> Tuple[str, List[Trailer]]:
    """Split the trailer block off the end of a paragraph.

    Lines are scanned from the bottom up. Blank lines inside the trailer run
    are skipped; the first other line that is not a trailer ends the run.

    Returns:
        Tuple of (remaining text, trailers in top-to-bottom order)
    """
    lines = split_lines(paragraph)
    trailers: List[Trailer] = []
    kept: List[str] = []
    in_trailer_block = False

    for index in range(len(lines) - 1, -1, -1):
        line = lines[index]
        trailer = parse_trailer_line(line)
        if trailer is not None:
            trailers.append(trailer)
            in_trailer_block = True
        elif not line.strip():
            if not in_trailer_block:
                kept.append(line)
        else:
            kept.extend(reversed(lines[: index + 1]))
            break

    if not trailers:
        return paragraph, []

    kept.reverse()
    trailers.reverse()
    return "\n".join(kept), trailers


def parse_commit_message(content: str) -> CommitMessage:
    """Parse commit message file content. Never fails."""
    message = CommitMessage()
    lines = split_lines(content)

    if SCISSORS_LINE in lines:
        position = lines.index(SCISSORS_LINE)
        diff_lines = lines[position + 1 :]
        lines = lines[:position]
        if diff_lines:
            message.diff_content = "\n".join(diff_lines)

    content_lines = []
    for line in lines:
        if line.startswith("#"):
            message.comments.append(line)
        else:
            content_lines.append(line)

    text = "\n".join(content_lines).strip()
    if not text:
        return message

    paragraphs = text.split("\n\n")
    subject_lines = split_lines(paragraphs[0])
    message.subject = subject_lines[0] if subject_lines else ""

    body_parts: List[str] = []
    if len(subject_lines) > 1:
        body_parts.append("\n".join(subject_lines[1:]))
    body_parts.extend(paragraphs[1:])

    if body_parts:
        remaining, trailers = extract_trailers(body_parts[-1])
        if trailers:
            message.trailers = trailers
            body_parts.pop()
            if remaining:
                body_parts.append(remaining)

    message.body = "\n\n".join(body_parts).strip()

    logger.debug(
        f"Parsed commit message: subject={len(message.subject)} chars, "
        f"{len(message.trailers)} trailers, {len(message.comments)} comments"
    )
    return message


def serialize_commit_message(message: CommitMessage) -> str:
    """Render a commit message back to file content."""
    parts: List[str] = []

    if message.subject:
        parts.append(message.subject)

    if message.body:
        parts.append("")
        parts.append(message.body)

    if message.trailers:
        if message.body or message.subject:
            parts.append("")
        parts.extend(str(trailer) for trailer in message.trailers)

    result = "\n".join(parts)

    if message.comments:
        if result:
            result += "\n"
        result += "\n".join(message.comments)

    if message.diff_content is not None:
        result += f"\n{SCISSORS_LINE}\n{message.diff_content}"

    return result


def strip_comments(message: CommitMessage) -> CommitMessage:
    """Return a copy of ``message`` without comment lines or scissors diff."""
    return CommitMessage(
        subject=message.subject,
        body=message.body,
        trailers=list(message.trailers),
    )


def validate_commit_message(message: CommitMessage) -> CommitValidation:
    """Check subject and body line lengths against git conventions."""
    subject_too_long = message.is_subject_too_long(SUBJECT_MAX_LENGTH)
    long_body_lines = message.long_body_lines(BODY_LINE_MAX_LENGTH)

    return CommitValidation(
        is_valid=not subject_too_long and not long_body_lines,
        subject_too_long=subject_too_long,
        subject_length=message.subject_length,
        long_body_lines=long_body_lines,
    )
