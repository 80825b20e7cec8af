"""
Parsing and serialization of git-rebase-todo files.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Type

from .models import (
    Break,
    Drop,
    Edit,
    Exec,
    Fixup,
    Label,
    Merge,
    ParseError,
    Pick,
    RebaseCommand,
    RebaseEntry,
    RebaseTodoFile,
    Reset,
    Reword,
    Squash,
)
from .text import split_lines


logger = logging.getLogger(__name__)


# Commands written as "<keyword> <hash> <message>"
COMMIT_COMMANDS: Tuple[Type[RebaseCommand], ...] = (Pick, Reword, Edit, Squash, Fixup, Drop)

_KEYWORDS: Dict[str, Type[RebaseCommand]] = {}
for _command in COMMIT_COMMANDS + (Exec, Break, Label, Reset, Merge):
    _KEYWORDS[_command.keyword] = _command
    _KEYWORDS[_command.short_form] = _command


def command_from_keyword(keyword: str) -> Optional[Type[RebaseCommand]]:
    """Look up a command class by its long or single-letter keyword (any case)."""
    return _KEYWORDS.get(keyword.lower())


def parse_rebase_todo(content: str) -> RebaseTodoFile:
    """Parse git-rebase-todo content.

    Blank lines between instructions are dropped. Once a comment line has been
    seen, every following comment or blank line is kept in ``comments`` so the
    help text block git appends survives a round trip.

    Raises:
        ParseError: on an unknown command keyword, with the 1-based line number
    """
    todo = RebaseTodoFile()
    seen_comment = False

    for line_num, line in enumerate(split_lines(content), start=1):
        stripped = line.strip()

        if not stripped:
            if seen_comment:
                todo.comments.append("")
            continue

        if stripped.startswith("#"):
            seen_comment = True
            todo.comments.append(line)
            continue

        todo.entries.append(_parse_command_line(stripped, line_num))

    logger.debug(
        f"Parsed rebase todo: {len(todo.entries)} entries, {len(todo.comments)} comment lines"
    )
    return todo


def _parse_command_line(line: str, line_num: int) -> RebaseEntry:
    parts = line.split(None, 1)
    keyword = parts[0]
    rest = parts[1] if len(parts) > 1 else ""

    command = command_from_keyword(keyword)
    if command is None:
        raise ParseError(line_num, f"Unknown command: {keyword}")

    if command is Exec:
        return RebaseEntry(command=Exec(rest))
    if command is Break:
        return RebaseEntry(command=Break())
    if command is Label:
        return RebaseEntry(command=Label(_first_token(rest)))
    if command is Reset:
        return RebaseEntry(command=Reset(_first_token(rest)))
    if command is Merge:
        return RebaseEntry(command=_parse_merge_args(rest))

    operands = rest.split(None, 1)
    commit_hash = operands[0] if operands else ""
    message = operands[1] if len(operands) > 1 else ""
    return RebaseEntry(command=command(), commit_hash=commit_hash, message=message)


def _first_token(text: str) -> str:
    tokens = text.split()
    return tokens[0] if tokens else ""


def _parse_merge_args(args: str) -> Merge:
    """Parse ``[-C <commit> | -c <commit>] <label> [# <oneline>]``."""
    commit = None
    label = ""
    message = None

    tokens = args.split()
    i = 0
    while i < len(tokens):
        token = tokens[i]

        if token in ("-C", "-c") and i + 1 < len(tokens):
            commit = tokens[i + 1]
            i += 2
            continue

        if token.startswith("#"):
            message = " ".join(tokens[i:])[1:].strip()
            break

        if not label:
            label = token
        i += 1

    return Merge(label=label, commit=commit, message=message)


def serialize_entry(entry: RebaseEntry) -> str:
    """Render one entry using git's single-letter command forms."""
    command = entry.command

    if isinstance(command, Exec):
        return f"x {command.command}"
    if isinstance(command, Break):
        return "b"
    if isinstance(command, Label):
        return f"l {command.label}"
    if isinstance(command, Reset):
        return f"t {command.label}"
    if isinstance(command, Merge):
        parts = ["m"]
        if command.commit is not None:
            parts.append(f"-C {command.commit}")
        parts.append(command.label)
        if command.message is not None:
            parts.append(f"# {command.message}")
        return " ".join(parts)

    return f"{command.short_form} {entry.commit_hash} {entry.message}"


def serialize_rebase_todo(todo: RebaseTodoFile) -> str:
    """Serialize a todo file back to the format git reads.

    Comments are always written as one trailing block after a blank line,
    wherever they appeared in the parsed file.
    """
    lines: List[str] = [serialize_entry(entry) for entry in todo.entries]

    if todo.comments:
        lines.append("")
        lines.extend(todo.comments)

    return "\n".join(lines)
