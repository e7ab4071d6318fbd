"""Glob-style exclusion pattern matching.

Matching is delegated to ``wcmatch`` with globstar, brace expansion and
dot-file matching enabled:

- ``*``   any run of characters within one path segment
- ``?``   exactly one character within a segment
- ``**``  as a whole segment, any run of path segments including none;
  elsewhere it behaves like ``*``
- ``[abc]``, ``[a-z]``, ``[!abc]`` character classes
- ``{a,b}`` alternatives
- ``\\x`` escapes ``x``

Matching is case-sensitive and anchored against the whole path string.
``wcmatch`` treats malformed brackets and braces as literals, so they are
rejected up front to keep a bad exclusion list fatal.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache

from wcmatch import glob

from imagedetector.errors import PatternError

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.DOTGLOB | glob.CASE


@lru_cache(maxsize=256)
def check_syntax(pattern: str) -> None:
    """Raise PatternError for unclosed classes or braces, reversed ranges
    and dangling escapes."""
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                raise PatternError(pattern, "trailing escape character")
            i += 2
            continue
        if c == "[":
            i = _check_class(pattern, i)
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth < 0:
                raise PatternError(pattern, f"unmatched '}}' at offset {i}")
        i += 1
    if depth:
        raise PatternError(pattern, "unclosed '{'")


def _check_class(pattern: str, start: int) -> int:
    i = start + 1
    if i < len(pattern) and pattern[i] in "!^":
        i += 1
    members: list[str] = []
    # A ']' directly after the opening bracket is a literal member.
    if i < len(pattern) and pattern[i] == "]":
        members.append("]")
        i += 1
    while i < len(pattern) and pattern[i] != "]":
        if pattern[i] == "\\" and i + 1 < len(pattern):
            i += 1
        members.append(pattern[i])
        i += 1
    if i >= len(pattern):
        raise PatternError(pattern, f"unclosed character class at offset {start}")

    for j in range(len(members) - 2):
        if members[j + 1] == "-" and members[j] > members[j + 2]:
            raise PatternError(
                pattern, f"bad character range {members[j]}-{members[j + 2]}"
            )
    return i + 1


class PatternMatcher:
    """Evaluates paths against glob exclusion patterns."""

    def validate(self, pattern: str) -> None:
        check_syntax(pattern)

    def matches(self, pattern: str, path: str) -> bool:
        """Return True when ``path`` matches ``pattern`` in full.

        Raises PatternError carrying both pattern and path for malformed globs.
        """
        try:
            check_syntax(pattern)
            return glob.globmatch(path.replace(os.sep, "/"), pattern, flags=GLOB_FLAGS)
        except PatternError as e:
            raise PatternError(pattern, e.reason, path=path) from e
        except (ValueError, re.error) as e:
            raise PatternError(pattern, str(e), path=path) from e

    def first_match(self, patterns: list[str] | tuple[str, ...], path: str) -> str | None:
        """Return the first pattern matching ``path``, or None.

        Patterns after the first match are never evaluated.
        """
        for pattern in patterns:
            if self.matches(pattern, path):
                return pattern
        return None
