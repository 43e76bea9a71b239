"""Glob matching for directory listing ignore patterns."""

from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import PurePath


def matches_any_pattern(patterns: Iterable[str], path: str) -> bool:
    """
    Check whether `path` matches any of `patterns`.

    A pattern matches if it matches the whole path or just the final path
    component, so both "*.log" and "/abs/dir/*.log" behave as expected.
    """
    name = PurePath(path).name
    for pattern in patterns:
        if fnmatch(path, pattern) or fnmatch(name, pattern):
            return True
    return False
