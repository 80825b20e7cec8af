"""
Basic tests for the git editor package.
"""

import pytest
from git_editor import __version__
from git_editor import (
    parse_conflict_markers, parse_rebase_todo, serialize_rebase_todo,
    parse_commit_message, serialize_commit_message, parse_git_status,
    parse_diff_tree_output, parse_blame_porcelain, unix_seconds_to_date,
)


def test_version_format():
    assert isinstance(__version__, str)
    assert __version__ != ""

def test_version_matches_semver():
    import re
    semver_pattern = r"^\d+\.\d+\.\d+$"
    assert re.match(semver_pattern, __version__)

def test_import():
    """Test that the package can be imported."""
    import git_editor
    assert git_editor is not None


def test_all_imports():
    """Test that the parser entry points can be imported."""
    assert parse_conflict_markers is not None
    assert parse_rebase_todo is not None
    assert serialize_rebase_todo is not None
    assert parse_commit_message is not None
    assert serialize_commit_message is not None
    assert parse_git_status is not None
    assert parse_diff_tree_output is not None
    assert parse_blame_porcelain is not None
    assert unix_seconds_to_date is not None


def test_package_structure():
    """Test package structure and __all__ exports."""
    import git_editor

    for export in git_editor.__all__:
        assert hasattr(git_editor, export), f"Missing export: {export}"


@pytest.mark.parametrize(
    "parser",
    [
        parse_conflict_markers,
        parse_rebase_todo,
        parse_commit_message,
        parse_git_status,
        parse_diff_tree_output,
        parse_blame_porcelain,
    ],
)
def test_parsers_accept_empty_input(parser):
    """Every parser handles an empty string without raising."""
    assert parser("") is not None
