"""
Ignore rules - Build walker predicates from lists of patterns.

Thin adapter over the predicate contract: a list of ignore items plus a
match function becomes a single ``Entry -> bool`` callable.
"""
from __future__ import annotations

import fnmatch
import os
from pathlib import PurePath
from typing import Callable, Iterable, List, TypeVar

from file_searcher.models import Entry

T = TypeVar("T")
S = TypeVar("S")

MatchFunction = Callable[[str, Entry], bool]

MATCH_MODES = ("prefix", "glob")


def should_ignore(
    ignore_items: Iterable[T],
    target: S,
    match: Callable[[T, S], bool],
) -> bool:
    """
    Check whether any ignore item matches the target.

    Args:
        ignore_items: Ignore conditions
        target: Object being tested
        match: Returns True if a single ignore item applies to the target

    Returns:
        True as soon as one item matches
    """
    return any(match(item, target) for item in ignore_items)


def match_path_prefix(root: str) -> MatchFunction:
    """
    Match entries whose path starts with ``root`` joined with the fragment.

    Matching is per path component: ".git" hides "<root>/.git" and anything
    below it but not "<root>/.gitignore". This is stricter than a plain
    string prefix test on ``root + fragment``, which would hide both.
    """
    def match(fragment: str, entry: Entry) -> bool:
        prefix = os.path.normpath(os.path.join(root, fragment))
        path = os.path.normpath(entry.path)
        return path == prefix or path.startswith(prefix.rstrip(os.sep) + os.sep)

    return match


def match_glob(root: str) -> MatchFunction:
    """
    Match entries where any component of the root-relative path fits the glob.
    """
    def match(pattern: str, entry: Entry) -> bool:
        relative = os.path.relpath(entry.path, root)
        return any(fnmatch.fnmatch(part, pattern) for part in PurePath(relative).parts)

    return match


def build_ignore_predicate(
    root: str,
    patterns: List[str],
    mode: str = "prefix",
) -> Callable[[Entry], bool]:
    """
    Build the predicate consumed by the walker.

    Args:
        root: Traversal root the patterns are relative to
        patterns: Path fragments (prefix mode) or glob patterns (glob mode)
        mode: "prefix" or "glob"

    Returns:
        Predicate returning True for entries to ignore
    """
    if mode not in MATCH_MODES:
        raise ValueError("mode must be 'prefix' or 'glob'")

    root = os.fspath(root)
    items = list(patterns)
    match = match_path_prefix(root) if mode == "prefix" else match_glob(root)

    def predicate(entry: Entry) -> bool:
        return should_ignore(items, entry, match)

    return predicate
